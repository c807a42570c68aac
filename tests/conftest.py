from __future__ import annotations

import pytest
from solders.pubkey import Pubkey

from dlmm_core.bin_array import Bin, BinArray, encode_bin_array
from dlmm_core.protocol import BIN_ARRAY_DISCRIMINATOR, MAX_BIN_PER_ARRAY

# Any valid 32-byte key will do (USDC mint).
LB_PAIR = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def _bin(i: int, price: int) -> Bin:
    return Bin(
        amount_x=1_000 + i,
        amount_y=2_000 + i,
        price=price,
        liquidity_supply=(1 << 70) + i,
        reward_per_token_stored=(i, (1 << 100) + i),
        fee_amount_x_per_token_stored=3 * i,
        fee_amount_y_per_token_stored=5 * i,
        amount_x_in=(1 << 65) + i,
        amount_y_in=7 * i,
    )


@pytest.fixture
def make_record():
    def _make(prices=None, index: int = -12, version: int = 1, padding: bytes = bytes(7)) -> BinArray:
        if prices is None:
            prices = [1] * MAX_BIN_PER_ARRAY
        return BinArray(
            index=index,
            version=version,
            padding=padding,
            lb_pair=bytes(Pubkey.from_string(LB_PAIR)),
            bins=tuple(_bin(i, p) for i, p in enumerate(prices)),
        )

    return _make


@pytest.fixture
def make_account(make_record):
    """Full account bytes: discriminator followed by an encoded BinArray."""
    def _make(**kw) -> bytes:
        return BIN_ARRAY_DISCRIMINATOR + encode_bin_array(make_record(**kw))

    return _make
