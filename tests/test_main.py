"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

from src import main as cli


@pytest.fixture(autouse=True)
def isolated_cli(tmp_path: Path, monkeypatch) -> None:
    """Keep config and logging side effects out of the test session."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(cli, "setup_logging", lambda level="INFO": None)
    monkeypatch.setattr(cli, "setup_exception_handler", lambda: None)


class TestCli:
    """Tests for main()."""

    def test_run_prints_csv(self, ppc_csv_path: Path, capsys) -> None:
        exit_code = cli.main(["run", "ppc", str(ppc_csv_path)])
        captured = capsys.readouterr()

        assert exit_code == 0
        assert captured.out.splitlines()[0].startswith("Name,Type,Spend,Sales,ACoS_Percent")
        assert len(captured.out.splitlines()) == 4
        assert "Row 2: Invalid or missing campaign name" in captured.err
        assert "Successfully processed 3 rows. Skipped 1 invalid rows." in captured.err

    def test_run_writes_output_file(self, fba_csv_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "out.csv"

        assert cli.main(["run", "fba", str(fba_csv_path), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8").startswith("product,cost,price,fees,profit,roi,margin")

    def test_export_generates_filename(self, fba_csv_path: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "exports"

        assert cli.main(["export", "fba", str(fba_csv_path), "--dir", str(out_dir)]) == 0
        files = list(out_dir.glob("fba_results_*.csv"))
        assert len(files) == 1

    def test_missing_columns_exit_code(self, invalid_csv_path: Path, capsys) -> None:
        exit_code = cli.main(["run", "ppc", str(invalid_csv_path)])

        assert exit_code == 2
        assert "Missing required columns: sales" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path) -> None:
        assert cli.main(["run", "sales", str(tmp_path / "nope.csv")]) == 2

    def test_unknown_tool_rejected(self, ppc_csv_path: Path) -> None:
        with pytest.raises(SystemExit):
            cli.main(["run", "profit", str(ppc_csv_path)])
