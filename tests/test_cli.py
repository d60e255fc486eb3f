import hashlib
import json
import logging

import pytest
from click.testing import CliRunner

from keccak_const import cli as cli_module
from keccak_const.cli import KNOWN_ANSWERS, cli, run_self_test
from keccak_const.config import Config
from keccak_const.log import PACKAGE_LOGGER, set_level


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    monkeypatch.delenv("KECCAK_CONST_CONFIG", raising=False)
    Config.reset()
    yield
    Config.reset()
    set_level("WARNING")
    logging.getLogger(PACKAGE_LOGGER).handlers.clear()


def test_digest_default_algorithm(runner):
    result = runner.invoke(cli, ["digest", "abc"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == hashlib.sha3_256(b"abc").hexdigest()


def test_digest_keccak_selector(runner):
    result = runner.invoke(cli, ["digest", "-a", "keccak256", "transfer(address,uint256)"])
    assert result.exit_code == 0, result.output
    assert result.output.strip().startswith("a9059cbb")


def test_digest_multiple_texts(runner):
    result = runner.invoke(cli, ["digest", "-a", "sha3_512", "a", "b"])
    assert result.exit_code == 0, result.output
    assert result.output.split() == [
        hashlib.sha3_512(b"a").hexdigest(),
        hashlib.sha3_512(b"b").hexdigest(),
    ]


def test_digest_shake_length(runner):
    result = runner.invoke(cli, ["digest", "-a", "shake_256", "-l", "10", "Rescue-XLIX"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "c021fb03de7b06008448"


def test_digest_shake_default_length_from_config(runner, tmp_path, monkeypatch):
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps({"cli": {"xof_length": 5}}))
    monkeypatch.setenv("KECCAK_CONST_CONFIG", str(config_file))
    Config.reset()
    result = runner.invoke(cli, ["digest", "-a", "shake128", "abc"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == hashlib.shake_128(b"abc").hexdigest(5)


def test_digest_hex_input(runner):
    result = runner.invoke(cli, ["digest", "-a", "sha3_256", "--hex-input", "00ff"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == hashlib.sha3_256(b"\x00\xff").hexdigest()


def test_digest_bad_hex_input(runner):
    result = runner.invoke(cli, ["digest", "--hex-input", "xyz"])
    assert result.exit_code == 2
    assert "not a hex string" in result.output


def test_digest_unknown_algorithm(runner):
    result = runner.invoke(cli, ["digest", "-a", "md5", "abc"])
    assert result.exit_code == 2
    assert "unsupported hash type" in result.output


def test_digest_length_on_fixed_variant(runner):
    result = runner.invoke(cli, ["digest", "-a", "sha3_256", "-l", "16", "abc"])
    assert result.exit_code == 1
    assert "produces 32 bytes" in result.output


def test_algorithms_lists_table(runner):
    result = runner.invoke(cli, ["algorithms"])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert len(lines) == 10
    assert any(line.startswith("shake_128") and "XOF" in line for line in lines)
    assert any(line.startswith("keccak_256") and "delimiter=0x01" in line for line in lines)


def test_self_test_passes(runner):
    assert run_self_test() == []
    result = runner.invoke(cli, ["--log-level", "DEBUG", "self-test"])
    assert result.exit_code == 0, result.output
    assert f"{len(KNOWN_ANSWERS)}/{len(KNOWN_ANSWERS)} passed" in result.output


def test_self_test_reports_mismatch(runner, monkeypatch):
    broken = [("sha3_256", b"", None, "00" * 32)]
    monkeypatch.setattr(cli_module, "KNOWN_ANSWERS", broken)
    result = runner.invoke(cli, ["self-test"])
    assert result.exit_code == 1
    assert "FAIL: sha3_256" in result.output


@pytest.mark.parametrize("contents", ["{oops", '["not", "a", "dict"]'])
def test_broken_config_is_reported(runner, tmp_path, monkeypatch, contents):
    config_file = tmp_path / "config.json"
    config_file.write_text(contents)
    monkeypatch.setenv("KECCAK_CONST_CONFIG", str(config_file))
    result = runner.invoke(cli, ["digest", "abc"])
    assert result.exit_code == 1
    assert "config file" in result.output.lower()
