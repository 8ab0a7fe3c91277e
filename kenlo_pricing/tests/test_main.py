"""
Tests: command-line entry point.

Run with:
    pytest kenlo_pricing/tests/test_main.py -v
"""

import json

import pytest

from kenlo_pricing.main import load_request, main, run
from kenlo_pricing.models.errors import InvalidConfigurationError


@pytest.fixture
def quote_file(tmp_path):
    path = tmp_path / "quote.json"
    path.write_text(json.dumps({
        "config": {"product": "imob", "imobPlan": "k2", "frequency": "monthly"},
        "client": {"clientName": "Ana"},
    }), encoding="utf-8")
    return path


class TestCli:
    def test_run_returns_export_record(self, quote_file):
        record = run(str(quote_file))
        assert record["clientName"] == "Ana"
        assert record["totalMonthly"] == 1497

    def test_main_prints_json(self, quote_file, capsys):
        assert main([str(quote_file)]) == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["imobPlan"] == "k2"

    def test_bare_configuration_accepted(self, tmp_path):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps({"product": "loc"}), encoding="utf-8")
        assert load_request(path).config.product.value == "loc"

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"config": {"product": "crm"}}), encoding="utf-8")
        with pytest.raises(InvalidConfigurationError):
            load_request(path)

    def test_usage_without_arguments(self, capsys):
        assert main([]) == 2
        assert "usage" in capsys.readouterr().err

    @pytest.mark.parametrize("content", ["{not json", json.dumps({"config": {"product": "crm"}})])
    def test_bad_quote_file_exits_with_error(self, tmp_path, capsys, content):
        path = tmp_path / "bad.json"
        path.write_text(content, encoding="utf-8")
        assert main([str(path)]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_missing_quote_file_exits_with_error(self, tmp_path, capsys):
        assert main([str(tmp_path / "absent.json")]) == 1
        assert "error:" in capsys.readouterr().err
