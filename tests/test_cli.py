import json
import sys

import pytest
from click.testing import CliRunner

from dlmm_core.protocol import MAX_BIN_PER_ARRAY
from dlmm_scan import cli

from conftest import LB_PAIR


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep a developer's .env or RPC_URL out of these tests.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RPC_URL", "http://localhost:8899")


@pytest.fixture
def fake_fetch(monkeypatch, make_account):
    prices = [1] * MAX_BIN_PER_ARRAY
    prices[42] = 0
    accounts = [
        ("Acc1", make_account(prices=prices)),
        ("Acc2", make_account()),
        ("Acc3", make_account()[:100]),
    ]
    seen = {}

    def _fetch(config):
        seen["config"] = config
        return accounts

    monkeypatch.setattr("dlmm_scan.rpc.fetch_bin_arrays", _fetch)
    return seen


def test_scan_text_output(fake_fetch):
    r = CliRunner().invoke(cli.main, ["scan"])
    assert r.exit_code == 0, r.output
    assert "Fetching all Meteora DLMM BinArray accounts..." in r.output
    assert "Total BinArray accounts found: 3" in r.output
    assert "Found 0 price in bin array Acc1" in r.output
    assert "Acc2" not in r.output
    assert "skipped (decode errors): 1" in r.output
    assert r.output.rstrip().endswith("bin_arrays_with_zero_price: 1")

    cfg = fake_fetch["config"]
    assert cfg.url == "http://localhost:8899"
    assert cfg.timeout == 180.0
    assert cfg.commitment == "confirmed"


def test_scan_json_and_report(fake_fetch, tmp_path):
    out = tmp_path / "out"
    r = CliRunner().invoke(
        cli.main,
        ["scan", "--json", "--out", str(out), "--rpc-url", "http://other:8899", "--timeout", "30", "--commitment", "finalized"],
    )
    assert r.exit_code == 0, r.output

    result = json.loads(r.output.strip().splitlines()[-1])
    assert result["zero_price_count"] == 1
    assert result["zero_price_accounts"][0]["bin"] == 42
    assert result["zero_price_accounts"][0]["lb_pair"] == LB_PAIR
    assert result["errors"][0]["address"] == "Acc3"
    assert (out / "report" / "zero_price.parquet").exists()
    assert (out / "report" / "errors.parquet").exists()

    cfg = fake_fetch["config"]
    assert (cfg.url, cfg.timeout, cfg.commitment) == ("http://other:8899", 30.0, "finalized")


def test_scan_abort_policy(fake_fetch):
    r = CliRunner().invoke(cli.main, ["scan", "--policy", "abort"])
    assert r.exit_code == 1
    assert "FATAL:" in r.output


def test_scan_abort_policy_json(fake_fetch):
    r = CliRunner().invoke(cli.main, ["scan", "--policy", "abort", "--json"])
    assert r.exit_code == 1
    assert "FATAL:" not in r.output

    result = json.loads(r.output.strip().splitlines()[-1])
    assert result["status"] == "FAIL"
    assert result["error_count"] == 1
    assert result["errors"][0]["code"] == "E_SIZE_MISMATCH"
    assert "92 bytes" in result["errors"][0]["detail"]


def test_scan_fetch_failure(monkeypatch):
    def _boom(config):
        raise ConnectionError("node unreachable")

    monkeypatch.setattr("dlmm_scan.rpc.fetch_bin_arrays", _boom)

    r = CliRunner().invoke(cli.main, ["scan"])
    assert r.exit_code == 1
    assert "FATAL:" in r.output
    assert "node unreachable" in r.output

    r = CliRunner().invoke(cli.main, ["scan", "--json"])
    assert r.exit_code == 1
    result = json.loads(r.output.strip().splitlines()[-1])
    assert result["status"] == "FAIL"
    assert result["errors"][0]["code"] == "E_FETCH"


def test_scan_missing_rpc_url(monkeypatch):
    monkeypatch.delenv("RPC_URL")
    r = CliRunner().invoke(cli.main, ["scan"])
    assert r.exit_code == 1
    assert "RPC_URL must be set" in r.output


def test_decode_command(tmp_path, make_account):
    prices = [1] * MAX_BIN_PER_ARRAY
    prices[9] = 0
    raw = make_account(prices=prices, index=77)

    with_tag = tmp_path / "account.bin"
    with_tag.write_bytes(raw)
    payload_only = tmp_path / "payload.bin"
    payload_only.write_bytes(raw[8:])

    for path in (with_tag, payload_only):
        r = CliRunner().invoke(cli.main, ["decode", str(path)])
        assert r.exit_code == 0, r.output
        summary = json.loads(r.output)
        assert summary == {"bins": 70, "index": 77, "lb_pair": LB_PAIR, "version": 1, "zero_price_bin": 9}


def test_decode_command_bad_size(tmp_path):
    p = tmp_path / "short.bin"
    p.write_bytes(b"\x00" * 10)
    r = CliRunner().invoke(cli.main, ["decode", str(p)])
    assert r.exit_code == 1
    assert "FATAL:" in r.output


def test_decode_command_without_rpc_stack(tmp_path, monkeypatch, make_account):
    # decode only reads a local file; the RPC client must not be required.
    monkeypatch.setitem(sys.modules, "dlmm_scan.rpc", None)
    monkeypatch.setitem(sys.modules, "solana", None)

    p = tmp_path / "account.bin"
    p.write_bytes(make_account())
    r = CliRunner().invoke(cli.main, ["decode", str(p)])
    assert r.exit_code == 0, r.output
    assert json.loads(r.output)["zero_price_bin"] is None
