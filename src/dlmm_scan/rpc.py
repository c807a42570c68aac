from __future__ import annotations

import base58
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment
from solana.rpc.types import MemcmpOpts
from solders.pubkey import Pubkey

from dlmm_core.protocol import BIN_ARRAY_DISCRIMINATOR, PROGRAM_ID

from .config import RpcConfig

def make_client(config: RpcConfig) -> Client:
    return Client(config.url, commitment=Commitment(config.commitment), timeout=config.timeout)

def bin_array_filters() -> list:
    tag = base58.b58encode(BIN_ARRAY_DISCRIMINATOR).decode("ascii")
    return [MemcmpOpts(offset=0, bytes=tag)]

def fetch_bin_arrays(config: RpcConfig, client: Client | None = None) -> list[tuple[str, bytes]]:
    """Fetch every BinArray account of the DLMM program as (address, raw_bytes).

    One getProgramAccounts call, full account data. Transport and RPC errors propagate.
    """
    client = client or make_client(config)
    resp = client.get_program_accounts(
        Pubkey.from_string(PROGRAM_ID),
        commitment=Commitment(config.commitment),
        encoding="base64",
        filters=bin_array_filters(),
    )
    return [(str(acc.pubkey), bytes(acc.account.data)) for acc in resp.value]
