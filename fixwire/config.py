"""Configuration options for FIX tag-value encoding and decoding."""

from __future__ import annotations

import dataclasses

SOH = 0x01


@dataclasses.dataclass
class Config:
    """Settings shared by encoders and decoders.

    ``separator`` terminates every tag-value pair, including the last one.
    ``max_message_size`` is the largest allowed message, or ``None`` for no
    limit. ``verify_checksum`` controls whether ``CheckSum(10)`` is checked
    while decoding; it has no effect on encoding.
    """

    separator: int = SOH
    verify_checksum: bool = True
    max_message_size: int | None = 65536

    def with_separator(self, separator: int) -> Config:
        """Return a copy that uses ``separator`` as field delimiter."""
        return dataclasses.replace(self, separator=separator)

    def with_checksum_verification(self, verify: bool) -> Config:
        """Return a copy with checksum verification turned on or off."""
        return dataclasses.replace(self, verify_checksum=verify)