"""Errors raised while decoding FIX tag-value messages."""

from __future__ import annotations

import enum


class DecodeErrorKind(enum.Enum):
    """The reason a FIX message could not be decoded."""

    FIELD_PRESENCE = "field_presence"
    INVALID = "invalid"
    CHECKSUM = "checksum"


_DESCRIPTIONS = {
    DecodeErrorKind.FIELD_PRESENCE: "a required field is missing or misplaced",
    DecodeErrorKind.INVALID: "invalid FIX message syntax",
    DecodeErrorKind.CHECKSUM: "CheckSum(10) does not match the message contents",
}


class DecodeError(ValueError):
    """Raised when a FIX message cannot be decoded."""

    def __init__(self, kind: DecodeErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        message = f"{kind.name}: {_DESCRIPTIONS[kind]}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)