from dlmm_core.bin_array import BinArray, decode_bin_array
from dlmm_core.errors import DiscriminatorMismatch, SizeMismatch
from dlmm_core.protocol import ACCOUNT_LEN, BIN_ARRAY_DISCRIMINATOR, DISCRIMINATOR_LEN

# Payload decoder per account tag. New account types only need an entry here.
DECODERS = {
    BIN_ARRAY_DISCRIMINATOR: decode_bin_array,
}

def split_discriminator(raw: bytes) -> tuple[bytes, bytes]:
    if len(raw) < DISCRIMINATOR_LEN:
        raise SizeMismatch(DISCRIMINATOR_LEN, len(raw), what="Discriminator")
    return bytes(raw[:DISCRIMINATOR_LEN]), bytes(raw[DISCRIMINATOR_LEN:])

def check_discriminator(raw: bytes, expected: bytes = BIN_ARRAY_DISCRIMINATOR) -> bytes:
    """Validate the account tag and return the payload that follows it."""
    tag, payload = split_discriminator(raw)
    if tag != expected:
        raise DiscriminatorMismatch(expected, tag)
    return payload

def decode_account(raw: bytes) -> BinArray:
    tag, payload = split_discriminator(raw)
    decoder = DECODERS.get(tag)
    if decoder is None:
        raise DiscriminatorMismatch(BIN_ARRAY_DISCRIMINATOR, tag)
    return decoder(payload)

def looks_like_bin_array(raw: bytes) -> bool:
    return len(raw) == ACCOUNT_LEN and raw[:DISCRIMINATOR_LEN] == BIN_ARRAY_DISCRIMINATOR
