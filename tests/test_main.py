from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

import main
from config import SearchConfig
from search_client import SearchRejectedError
from session import SearchSession


def _session(search: MagicMock) -> SearchSession:
    return SearchSession(SearchConfig(api_base="https://search.example.org"), search=search)


def test_run_searches_prints_and_exports(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = tmp_path / "export.csv"
    search = MagicMock(return_value=[{"id": "1", "title": "Alpha", "matchPercent": 60}])
    args = main.parse_args(["--last-name", "Smith", "--keyword", "nmr", "--start-date", "2020-01-01",
                            "--output", str(out)])

    assert main.run(args, _session(search)) == 0

    request = search.call_args.args[0]
    assert request.params == {"lastNames": "Smith", "startDate": "2020-01-01", "endDate": "", "keywords": "nmr"}
    printed = capsys.readouterr().out
    assert "Showing 1 result" in printed
    assert "Alpha" in printed
    assert out.read_text(encoding="utf-8").endswith('"Alpha","Unknown Journal","","No DOI"')


def test_run_batch_file_posts_upload(tmp_path: Path) -> None:
    batch = tmp_path / "criteria.csv"
    batch.write_bytes(b"last_name\nSmith\n")
    search = MagicMock(return_value=[])
    args = main.parse_args(["--batch-file", str(batch), "--no-export"])

    assert main.run(args, _session(search)) == 0

    request = search.call_args.args[0]
    assert request.method == "POST"
    assert request.files["file"][0] == "criteria.csv"


def test_run_returns_error_code_on_failure() -> None:
    search = MagicMock(side_effect=SearchRejectedError(400, "bad request"))
    args = main.parse_args(["--no-export"])
    assert main.run(args, _session(search)) == 1


def test_run_selects_known_ids_only(tmp_path: Path) -> None:
    out = tmp_path / "export.csv"
    search = MagicMock(return_value=[{"id": "1", "title": "One"}, {"id": "2", "title": "Two"}])
    args = main.parse_args(["--select", "2", "--select", "missing", "--output", str(out)])

    main.run(args, _session(search))

    rows = out.read_text(encoding="utf-8").split("\n")
    assert len(rows) == 2
    assert '"Two"' in rows[1]


def test_repeated_sort_flag_toggles_direction() -> None:
    search = MagicMock(return_value=[])
    session = _session(search)
    args = main.parse_args(["--sort", "title", "--sort", "title", "--no-export"])

    main.run(args, session)

    assert session.sort.field == "title"
    assert session.sort.direction == "desc"


def test_run_missing_batch_file_returns_error_code(tmp_path: Path) -> None:
    search = MagicMock(return_value=[])
    args = main.parse_args(["--batch-file", str(tmp_path / "missing.csv"), "--no-export"])

    assert main.run(args, _session(search)) == 1
    search.assert_not_called()
