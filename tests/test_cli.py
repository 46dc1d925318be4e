"""Tests for the command-line interface."""

import json
import sys

import pytest

from seller_scout.cli import create_example_product, main


def _run(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["seller-scout", *args])
    return main()


class TestScoreCommand:
    def test_example_product(self, monkeypatch, capsys) -> None:
        assert _run(monkeypatch, "score") == 0

        out = capsys.readouterr().out
        assert "Using example product" in out
        assert "Opportunity Score:" in out
        assert "Recommendation:" in out

    def test_product_and_trend_from_json(self, monkeypatch, capsys, headphones) -> None:
        code = _run(
            monkeypatch,
            "score",
            "--json",
            headphones.model_dump_json(),
            "--trend",
            json.dumps({"rising_star": True}),
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "Using example product" not in out
        assert headphones.title in out
        assert "Growth:       70.00" in out

    def test_invalid_product_json(self, monkeypatch, capsys) -> None:
        assert _run(monkeypatch, "score", "--json", '{"id": "x"}') == 1
        assert "Invalid input:" in capsys.readouterr().err


class TestFilterCommand:
    def test_match_exits_zero(self, monkeypatch, capsys) -> None:
        filters = json.dumps({"category": "Home & Kitchen", "price_min": "100", "price_max": "600"})

        assert _run(monkeypatch, "filter", "--filters", filters) == 0
        assert "Result: MATCH" in capsys.readouterr().out

    def test_no_match_exits_two(self, monkeypatch, capsys) -> None:
        filters = json.dumps({"category": "Sports", "non_branded_friendly": True})

        assert _run(monkeypatch, "filter", "--filters", filters) == 2

        out = capsys.readouterr().out
        assert "Result: NO MATCH" in out
        assert "  - " in out

    def test_no_filters_matches(self, monkeypatch, capsys) -> None:
        assert _run(monkeypatch, "filter") == 0
        out = capsys.readouterr().out
        assert "Filters: none" in out
        assert "Result: MATCH" in out

    def test_malformed_filters_json(self, monkeypatch, capsys) -> None:
        assert _run(monkeypatch, "filter", "--filters", "{not json") == 1
        assert "Invalid input:" in capsys.readouterr().err


class TestProfitCommand:
    def test_breakdown(self, monkeypatch, capsys) -> None:
        code = _run(
            monkeypatch,
            "profit",
            "--selling-price",
            "1000",
            "--cost-price",
            "500",
            "--weight",
            "0.5",
            "--ads-budget",
            "50",
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "Net Profit/Unit:   ₹60.00" in out
        assert "ROI:               12.0%" in out
        assert "Break-even ACOS:   11.0%" in out

    def test_invalid_input_exits_one(self, monkeypatch, capsys) -> None:
        code = _run(
            monkeypatch, "profit", "--selling-price", "1000", "--cost-price", "0", "--weight", "1"
        )

        assert code == 1
        assert "Error: cost_price must be greater than 0" in capsys.readouterr().err


class TestExampleCommand:
    def test_prints_product_json(self, monkeypatch, capsys) -> None:
        assert _run(monkeypatch, "example", "--pretty") == 0

        data = json.loads(capsys.readouterr().out)
        assert data["id"] == "example-001"
        assert "last_modified" not in data
        assert data["title"] == create_example_product().title


def test_no_command_prints_help(monkeypatch, capsys) -> None:
    assert _run(monkeypatch) == 1
    assert "usage: seller-scout" in capsys.readouterr().out
