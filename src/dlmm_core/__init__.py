"""DLMM Core - BinArray layout and decoding."""
from .bin_array import Bin, BinArray, decode_bin_array, encode_bin_array, first_zero_price_index, has_zero_price
from .errors import DecodeError, DiscriminatorMismatch, SizeMismatch

__all__ = [
    "Bin",
    "BinArray",
    "decode_bin_array",
    "encode_bin_array",
    "first_zero_price_index",
    "has_zero_price",
    "DecodeError",
    "DiscriminatorMismatch",
    "SizeMismatch",
]
