"""Meteora DLMM BinArray layout constants.

Single source of truth for on-chain tags and record layouts.
Keep this file in sync with the deployed program's account structs.
"""
import struct

# Meteora DLMM program
PROGRAM_ID = "LBUZKhRxPF3XUpBCjp4YzTKgLccjZhTSDM9YuVaPwxo"

# Account type tag (first 8 bytes of every BinArray account)
BIN_ARRAY_DISCRIMINATOR = bytes([92, 142, 92, 220, 5, 148, 70, 181])
DISCRIMINATOR_LEN = 8

MAX_BIN_PER_ARRAY = 70
NUM_REWARDS = 2

# Header: [Index(8) | Version(1) | Padding(7) | LbPair(32)] = 48 bytes
BIN_ARRAY_HEADER_FMT = "<qB7s32s"
BIN_ARRAY_HEADER_LEN = 48

# Bin: [AmountX(8) | AmountY(8) | Price(16) | LiquiditySupply(16)
#       | RewardPerTokenStored(2x16) | FeeX(16) | FeeY(16)
#       | AmountXIn(16) | AmountYIn(16)] = 144 bytes
# u128 fields are carried as raw 16-byte little-endian slices.
BIN_FMT = "<QQ" + "16s" * (6 + NUM_REWARDS)
BIN_LEN = 144

BIN_ARRAY_LEN = BIN_ARRAY_HEADER_LEN + MAX_BIN_PER_ARRAY * BIN_LEN  # 10128
ACCOUNT_LEN = DISCRIMINATOR_LEN + BIN_ARRAY_LEN  # 10136

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1

assert struct.calcsize(BIN_ARRAY_HEADER_FMT) == BIN_ARRAY_HEADER_LEN
assert struct.calcsize(BIN_FMT) == BIN_LEN
