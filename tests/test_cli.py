"""CLI dispatch and output tests."""

from __future__ import annotations

import io
import json
import logging
import sys
from pathlib import Path

import pytest
from _pytest.monkeypatch import MonkeyPatch
from tabsplit.cli import main as unified_cli
from tabsplit.runtime import set_log_level
from tabsplit.runtime.logging import LOGGER_NAMESPACE


def test_parse_file_prints_json(tmp_path: Path, simple_receipt_text: str, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_path = tmp_path / "receipt.txt"
    receipt_path.write_text(simple_receipt_text, encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt_path)])

    assert exit_code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["merchant"] == "Joe's Restaurant"
    assert data["total"] == "50.66"
    assert [item["name"] for item in data["items"]] == ["Chicken Wings", "Caesar Salad", "Soda"]


def test_parse_reads_stdin(monkeypatch: MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("Soda $3.00\nTotal: $3.00\n"))

    exit_code = unified_cli.main(["parse", "--pretty"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("{\n")
    data = json.loads(out)
    assert data["items"] == [{"name": "Soda", "price": "3.00", "quantity": 1, "confidence": 0.85}]


def test_parse_with_merge(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_path = tmp_path / "receipt.txt"
    receipt_path.write_text("Wings $12.00\nWing $11.00\nTotal: $23.00\n", encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt_path), "--merge", "0.8"])

    assert exit_code == 0
    items = json.loads(capsys.readouterr().out)["items"]
    assert len(items) == 1
    assert items[0]["name"] == "Wings"
    assert items[0]["price"] == "11.50"
    assert items[0]["quantity"] == 2
    assert items[0]["merged_from"] == ["Wings $12.00", "Wing $11.00"]


def test_parse_default_merge_threshold_keeps_ocr_variants(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    receipt_path = tmp_path / "receipt.txt"
    receipt_path.write_text("Wings $12.00\nWing $11.00\n", encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt_path), "--merge"])

    assert exit_code == 0
    assert len(json.loads(capsys.readouterr().out)["items"]) == 2


def test_parse_missing_file_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["parse", str(tmp_path / "missing.txt")])

    assert exit_code == 1
    assert "cannot read" in capsys.readouterr().out


def test_parse_with_malformed_rules_fails(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules_path = tmp_path / "rules.toml"
    rules_path.write_text('bogus_labels = ["x"]\n', encoding="utf-8")
    receipt_path = tmp_path / "receipt.txt"
    receipt_path.write_text("Soda $3.00\n", encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt_path), "--rules", str(rules_path)])

    assert exit_code == 1
    assert "Invalid parser rules" in capsys.readouterr().out


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        (
            "2x Chicken Wings $24.00",
            {
                "kind": "item",
                "rule": "item_line",
                "name": "Chicken Wings",
                "price": "24.00",
                "quantity": 2,
                "confidence": 0.95,
            },
        ),
        ("Total: $50.66", {"kind": "total", "rule": "summary", "amount": "50.66"}),
        ("Joe's Restaurant", {"kind": "unknown", "rule": ""}),
    ],
)
def test_classify(line: str, expected: dict, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["classify", line])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == expected


def test_classify_with_rules(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules_path = tmp_path / "rules.toml"
    rules_path.write_text('tip_labels = ["pourboire"]\n', encoding="utf-8")

    exit_code = unified_cli.main(["classify", "Pourboire 2.00", "--rules", str(rules_path)])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["kind"] == "tip"


def test_price(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["price", "1.234,56"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "1234.56"


def test_similarity(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main(["similarity", "Wings", "Wing"])

    assert exit_code == 0
    assert capsys.readouterr().out.strip() == "0.8000"


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = unified_cli.main([])

    assert exit_code == 1
    assert "usage: tabsplit" in capsys.readouterr().out


def test_merge_threshold_out_of_range_is_rejected() -> None:
    with pytest.raises(SystemExit):
        unified_cli.main(["parse", "-", "--merge", "1.5"])


def test_cli_does_not_mutate_sys_argv(monkeypatch: MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    sentinel_argv = ["sentinel", "keep-this"]
    monkeypatch.setattr(sys, "argv", sentinel_argv)

    unified_cli.main(["price", "3.00"])

    assert sys.argv == sentinel_argv


def test_parse_merged_prices_are_shown_in_cents(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    receipt_path = tmp_path / "receipt.txt"
    receipt_path.write_text("Soda $10.00\nsoda $10.01\nSODA $10.01\n", encoding="utf-8")

    exit_code = unified_cli.main(["parse", str(receipt_path), "--merge"])

    assert exit_code == 0
    items = json.loads(capsys.readouterr().out)["items"]
    assert items == [
        {
            "name": "Soda",
            "price": "10.01",
            "quantity": 3,
            "confidence": pytest.approx(0.85 * 0.95),
            "merged_from": ["Soda $10.00", "soda $10.01", "SODA $10.01"],
        }
    ]


def test_debug_flag_lowers_log_level(capsys: pytest.CaptureFixture[str]) -> None:
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    original_level = package_logger.level
    try:
        exit_code = unified_cli.main(["--debug", "price", "3.00"])

        assert exit_code == 0
        assert package_logger.level == logging.DEBUG
    finally:
        set_log_level(original_level)
