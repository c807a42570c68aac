"""DLMM Scan - fetch BinArray accounts and look for zero-price bins."""
from .logic import decode_accounts, scan_accounts

__all__ = ["decode_accounts", "scan_accounts"]
