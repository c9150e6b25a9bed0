[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fixwire"
version = "0.1.0"
description = "Encoding and decoding of FIX tag-value messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["fix", "fix-protocol", "tag-value", "trading", "codec"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fixwire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
