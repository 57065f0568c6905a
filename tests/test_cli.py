"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from tablelens.main import cli


@pytest.fixture
def sales_csv(tmp_path, sales_rows):
    path = tmp_path / "sales.csv"
    header = list(sales_rows[0])
    lines = [",".join(header)]
    lines += [",".join(str(row[h]) for h in header) for row in sales_rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_analyze_json(sales_csv):
    result = CliRunner().invoke(cli, ["analyze", str(sales_csv), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["source"] == "sales.csv"
    assert data["rowCount"] == 25
    assert data["selection"]["region"] == "地区"


def test_analyze_table_output(sales_csv):
    result = CliRunner().invoke(cli, ["analyze", str(sales_csv)])
    assert result.exit_code == 0, result.output
    assert "TableLens" in result.stdout


def test_analyze_writes_report(sales_csv, tmp_path):
    out_dir = tmp_path / "reports"
    result = CliRunner().invoke(cli, ["analyze", str(sales_csv), "--json", "-o", str(out_dir)])
    assert result.exit_code == 0, result.output
    written = json.loads((out_dir / "sales_report.json").read_text(encoding="utf-8"))
    assert written["rowCount"] == 25


def test_analyze_with_config(sales_csv, tmp_path):
    config = tmp_path / "tablelens.yaml"
    config.write_text("analysis:\n  hot_product_limit: 1\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["analyze", str(sales_csv), "--json", "-c", str(config)])
    assert result.exit_code == 0, result.output
    assert len(json.loads(result.stdout)["hotProducts"]["products"]) == 1


def test_column_override(sales_csv):
    result = CliRunner().invoke(cli, ["analyze", str(sales_csv), "--json", "--value-col", "联系电话"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["selection"]["value"] == "联系电话"


def test_unsupported_file_exits_with_error(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("x", encoding="utf-8")
    result = CliRunner().invoke(cli, ["analyze", str(path)])
    assert result.exit_code == 1
    assert "Unsupported file type" in result.output


def test_scan_pii_json(sales_csv):
    result = CliRunner().invoke(cli, ["scan-pii", str(sales_csv), "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert {"type": "手机号", "count": 25} in data["summary"]


def test_columns(sales_csv):
    result = CliRunner().invoke(cli, ["columns", str(sales_csv)])
    assert result.exit_code == 0, result.output
    assert "categorical" in result.stdout


def test_version():
    result = CliRunner().invoke(cli, ["version"])
    assert result.exit_code == 0
    assert "TableLens" in result.stdout
