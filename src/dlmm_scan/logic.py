from __future__ import annotations

from typing import Iterable
from warnings import warn

from dlmm_core.bin_array import BinArray, decode_bin_array, first_zero_price_index
from dlmm_core.errors import DecodeError, DiscriminatorMismatch

from .const import ERRORS, POLICIES
from .envelope import check_discriminator


def error_code(exc: DecodeError) -> str:
    return "E_DISCRIMINATOR" if isinstance(exc, DiscriminatorMismatch) else "E_SIZE_MISMATCH"


def decode_accounts(
    accounts: Iterable[tuple[str, bytes]], policy: str = "skip"
) -> tuple[list[tuple[str, BinArray]], list[dict]]:
    """Decode (address, raw_bytes) pairs into BinArrays.

    policy="skip": failed accounts are recorded as errors and the batch continues.
    policy="abort": the first DecodeError propagates.
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown decode policy {policy!r}; expected one of {', '.join(POLICIES)}")

    records: list[tuple[str, BinArray]] = []
    errors: list[dict] = []
    for address, raw in accounts:
        try:
            records.append((address, decode_bin_array(check_discriminator(raw))))
        except DecodeError as e:
            if policy == "abort":
                raise
            code = error_code(e)
            warn(f"Skipping account {address}: {e}")
            errors.append({"code": code, "message": ERRORS[code], "address": address, "detail": str(e)})
    return records, errors


def scan_accounts(accounts: Iterable[tuple[str, bytes]], policy: str = "skip") -> dict:
    accounts = list(accounts)
    records, errors = decode_accounts(accounts, policy=policy)

    hits = []
    for address, rec in records:
        idx = first_zero_price_index(rec)
        if idx is None:
            continue
        hits.append({
            "address": address,
            "lb_pair": rec.lb_pair_address,
            "index": rec.index,
            "version": rec.version,
            "bin": idx,
        })

    return {
        "status": "PASS" if not errors else "FAIL",
        "total_accounts": len(accounts),
        "decoded": len(records),
        "zero_price_count": len(hits),
        "zero_price_accounts": hits,
        "error_count": len(errors),
        "errors": errors,
    }
