"""Decode failures for on-chain account buffers."""
from __future__ import annotations


class DecodeError(ValueError):
    """Base class for buffers that cannot be read as a known record."""


class SizeMismatch(DecodeError):
    def __init__(self, expected: int, actual: int, what: str = "BinArray"):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} buffer is {actual} bytes, expected {expected}")


class DiscriminatorMismatch(DecodeError):
    def __init__(self, expected: bytes, actual: bytes):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Unexpected account discriminator {list(actual)} (expected {list(expected)})")
