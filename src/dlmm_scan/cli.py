"""DLMM Scan - count Meteora BinArrays holding a zero-price bin."""
from __future__ import annotations

import json
from pathlib import Path

import click

from dlmm_core.bin_array import decode_bin_array, first_zero_price_index
from dlmm_core.errors import DecodeError

from .config import ConfigError, load_config
from .const import COMMITMENTS, ERRORS, POLICIES
from .envelope import decode_account, looks_like_bin_array
from .logic import error_code, scan_accounts
from .report import write_report

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}


def _fatal(msg: str) -> None:
    click.echo(f"FATAL: {msg}")
    raise SystemExit(1)


def _fail(as_json: bool, code: str, detail: str) -> None:
    if as_json:
        err = {"code": code, "message": ERRORS[code], "detail": detail}
        click.echo(json.dumps({"status": "FAIL", "error_count": 1, "errors": [err]}, **CANONICAL_JSON_KW))
        raise SystemExit(1)
    _fatal(f"{ERRORS[code]}: {detail}")


@click.group()
def main():
    pass


@main.command("scan")
@click.option("--rpc-url", default=None, help="RPC endpoint (defaults to $RPC_URL)")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds [default: 180]")
@click.option("--commitment", type=click.Choice(COMMITMENTS), default=None, help="[default: confirmed]")
@click.option("--policy", type=click.Choice(POLICIES), default="skip", show_default=True,
              help="What to do with accounts that fail to decode")
@click.option("--json", "as_json", is_flag=True, help="Print the result as canonical JSON")
@click.option("--out", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Write parquet report under OUT/report/")
def scan_cmd(rpc_url, timeout, commitment, policy, as_json, out):
    try:
        config = load_config(url=rpc_url, timeout=timeout, commitment=commitment)
    except ConfigError as e:
        _fatal(str(e))

    if not as_json:
        click.echo("Fetching all Meteora DLMM BinArray accounts...")

    # Loaded here so `decode` works without the RPC stack.
    from . import rpc

    try:
        accounts = rpc.fetch_bin_arrays(config)
    except Exception as e:
        # Fetch failures abort the whole batch; nothing partial is reported.
        _fail(as_json, "E_FETCH", str(e))

    try:
        result = scan_accounts(accounts, policy=policy)
    except DecodeError as e:
        _fail(as_json, error_code(e), str(e))

    if out is not None:
        write_report(result, out)

    if as_json:
        click.echo(json.dumps(result, **CANONICAL_JSON_KW))
        return

    click.echo("\n=== Results ===")
    click.echo(f"Total BinArray accounts found: {result['total_accounts']}")
    for hit in result["zero_price_accounts"]:
        click.echo(f"Found 0 price in bin array {hit['address']}")
    if result["error_count"]:
        click.echo(f"skipped (decode errors): {result['error_count']}")
    click.echo(f"bin_arrays_with_zero_price: {result['zero_price_count']}")


@main.command("decode")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def decode_cmd(path: Path):
    """Decode one raw BinArray account dump (with or without discriminator)."""
    raw = path.read_bytes()
    try:
        rec = decode_account(raw) if looks_like_bin_array(raw) else decode_bin_array(raw)
    except DecodeError as e:
        _fatal(str(e))

    summary = {
        "index": rec.index,
        "version": rec.version,
        "lb_pair": rec.lb_pair_address,
        "bins": len(rec.bins),
        "zero_price_bin": first_zero_price_index(rec),
    }
    click.echo(json.dumps(summary, **CANONICAL_JSON_KW))


if __name__ == "__main__":
    main()
