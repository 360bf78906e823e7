"""
tests/test_run_catalog_harvest.py

Pytest unit tests for the catalog harvest CLI argument and prompt handling.
No network access: every case exits before a harvest starts.
"""

from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_catalog_harvest.py"


@pytest.fixture()
def cli():
    spec = importlib.util.spec_from_file_location("run_catalog_harvest", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestRunCatalogHarvest:
    def test_closed_stdin_exits_with_usage_code(self, cli, monkeypatch, capsys) -> None:
        def closed_input(prompt: str) -> str:
            raise EOFError

        monkeypatch.setattr("builtins.input", closed_input)

        assert cli.main([]) == 2
        assert "No merchant id given." in capsys.readouterr().out

    def test_invalid_prompted_id_exits_with_usage_code(self, cli, monkeypatch, capsys) -> None:
        monkeypatch.setattr("builtins.input", lambda prompt: "abc")

        assert cli.main([]) == 2
        assert "Invalid merchant id: 'abc'" in capsys.readouterr().out

    def test_invalid_argument_id_exits_with_usage_code(self, cli, capsys) -> None:
        assert cli.main(["12x"]) == 2
        assert "Invalid merchant id: '12x'" in capsys.readouterr().out

    def test_parse_merchant_id_trims_whitespace(self, cli) -> None:
        assert cli._parse_merchant_id(" 968 ") == 968
        assert cli._parse_merchant_id(None) is None
