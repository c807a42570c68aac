"""Meteora DLMM BinArray record: decode, encode and price inspection.

Buffers are unpacked field by field into owned, frozen values. Nothing here
reinterprets the caller's memory, so alignment of the source slice is
irrelevant.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from solders.pubkey import Pubkey

from dlmm_core.errors import SizeMismatch
from dlmm_core.protocol import (
    BIN_ARRAY_HEADER_FMT,
    BIN_ARRAY_HEADER_LEN,
    BIN_ARRAY_LEN,
    BIN_FMT,
    MAX_BIN_PER_ARRAY,
    NUM_REWARDS,
    U64_MAX,
    U128_MAX,
)


@dataclass(frozen=True)
class Bin:
    amount_x: int
    amount_y: int
    price: int
    liquidity_supply: int
    reward_per_token_stored: tuple[int, ...]
    fee_amount_x_per_token_stored: int
    fee_amount_y_per_token_stored: int
    amount_x_in: int
    amount_y_in: int


@dataclass(frozen=True)
class BinArray:
    index: int
    version: int
    padding: bytes
    lb_pair: bytes
    bins: tuple[Bin, ...]

    @property
    def lb_pair_address(self) -> str:
        """Base58 address of the owning LbPair account."""
        return str(Pubkey(self.lb_pair))


def _u128(raw: bytes) -> int:
    return int.from_bytes(raw, "little")


def _u128_bytes(value: int, name: str) -> bytes:
    if not 0 <= value <= U128_MAX:
        raise ValueError(f"{name}={value} does not fit in u128")
    return value.to_bytes(16, "little")


def _decode_bin(fields: tuple) -> Bin:
    amount_x, amount_y, price, liquidity, *rest = fields
    rewards = rest[:NUM_REWARDS]
    fee_x, fee_y, x_in, y_in = rest[NUM_REWARDS:]
    return Bin(
        amount_x=amount_x,
        amount_y=amount_y,
        price=_u128(price),
        liquidity_supply=_u128(liquidity),
        reward_per_token_stored=tuple(_u128(r) for r in rewards),
        fee_amount_x_per_token_stored=_u128(fee_x),
        fee_amount_y_per_token_stored=_u128(fee_y),
        amount_x_in=_u128(x_in),
        amount_y_in=_u128(y_in),
    )


def decode_bin_array(buffer: bytes) -> BinArray:
    """Decode a BinArray payload (discriminator already removed).

    Raises SizeMismatch unless the buffer is exactly BIN_ARRAY_LEN bytes.
    """
    if len(buffer) != BIN_ARRAY_LEN:
        raise SizeMismatch(BIN_ARRAY_LEN, len(buffer))

    buf = bytes(buffer)
    index, version, padding, lb_pair = struct.unpack(BIN_ARRAY_HEADER_FMT, buf[:BIN_ARRAY_HEADER_LEN])
    bins = tuple(_decode_bin(f) for f in struct.iter_unpack(BIN_FMT, buf[BIN_ARRAY_HEADER_LEN:]))
    return BinArray(index=index, version=version, padding=padding, lb_pair=lb_pair, bins=bins)


def _encode_bin(b: Bin) -> bytes:
    if not (0 <= b.amount_x <= U64_MAX and 0 <= b.amount_y <= U64_MAX):
        raise ValueError(f"amount_x/amount_y out of u64 range: {b.amount_x}, {b.amount_y}")
    if len(b.reward_per_token_stored) != NUM_REWARDS:
        raise ValueError(f"reward_per_token_stored needs {NUM_REWARDS} values, got {len(b.reward_per_token_stored)}")

    u128s = [
        ("price", b.price),
        ("liquidity_supply", b.liquidity_supply),
        *((f"reward_per_token_stored[{i}]", r) for i, r in enumerate(b.reward_per_token_stored)),
        ("fee_amount_x_per_token_stored", b.fee_amount_x_per_token_stored),
        ("fee_amount_y_per_token_stored", b.fee_amount_y_per_token_stored),
        ("amount_x_in", b.amount_x_in),
        ("amount_y_in", b.amount_y_in),
    ]
    return struct.pack(BIN_FMT, b.amount_x, b.amount_y, *(_u128_bytes(v, n) for n, v in u128s))


def encode_bin_array(record: BinArray) -> bytes:
    """Serialize a BinArray back to its on-chain payload (no discriminator)."""
    if len(record.bins) != MAX_BIN_PER_ARRAY:
        raise ValueError(f"BinArray needs {MAX_BIN_PER_ARRAY} bins, got {len(record.bins)}")
    if len(record.padding) != 7 or len(record.lb_pair) != 32:
        raise ValueError("padding must be 7 bytes and lb_pair 32 bytes")

    header = struct.pack(BIN_ARRAY_HEADER_FMT, record.index, record.version, record.padding, record.lb_pair)
    return header + b"".join(_encode_bin(b) for b in record.bins)


def first_zero_price_index(record: BinArray) -> int | None:
    """Position of the first bin with price 0, scanning bins in order."""
    for i, b in enumerate(record.bins):
        if b.price == 0:
            return i
    return None


def has_zero_price(record: BinArray) -> bool:
    return first_zero_price_index(record) is not None
