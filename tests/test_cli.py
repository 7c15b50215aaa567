import socket
import sqlite3
from unittest import mock

import pytest

from cuisine.cli import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.database == "cuisine.db"
    assert args.host == "0.0.0.0"
    assert args.port == 3000


def test_parse_args_overrides():
    args = parse_args(["--database", "other.db", "--host", "127.0.0.1", "--port", "8080"])
    assert args.database == "other.db"
    assert args.host == "127.0.0.1"
    assert args.port == 8080


@pytest.mark.parametrize("port", ["abc", "-1", "70000"])
def test_parse_args_rejects_bad_port(port):
    with pytest.raises(SystemExit) as info:
        parse_args(["--port", port])
    assert info.value.code == 2


def _table_names(path):
    with sqlite3.connect(path) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {name for (name,) in rows}


def test_main_reports_bind_failure(tmp_path, capsys):
    db_path = tmp_path / "cuisine.db"
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        code = main(["--database", str(db_path), "--host", "127.0.0.1", "--port", str(port)])

    assert code == 1
    err = capsys.readouterr().err
    assert f"Error: failed to bind port {port}" in err
    assert f"another process may already be using port {port}" in err
    assert f"lsof -i :{port}" in err


def test_main_migrates_before_binding(tmp_path):
    db_path = tmp_path / "cuisine.db"
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        main(["--database", str(db_path), "--host", "127.0.0.1", "--port", str(port)])

    tables = _table_names(db_path)
    assert {"dishes", "ingredients", "sauces", "utensils", "techniques"} <= tables
    assert {"term_relations", "recipes", "recipe_ingredients", "recipe_steps"} <= tables


def test_main_serves_and_returns_zero(tmp_path):
    db_path = tmp_path / "cuisine.db"
    with mock.patch(
        "wsgiref.simple_server.WSGIServer.serve_forever", return_value=None
    ) as serve:
        code = main(["--database", str(db_path), "--host", "127.0.0.1", "--port", "0"])
    assert code == 0
    assert serve.call_count == 1
    assert "recipes" in _table_names(db_path)


def test_main_stops_cleanly_on_interrupt(tmp_path):
    db_path = tmp_path / "cuisine.db"
    with mock.patch(
        "wsgiref.simple_server.WSGIServer.serve_forever", side_effect=KeyboardInterrupt
    ):
        code = main(["--database", str(db_path), "--host", "127.0.0.1", "--port", "0"])
    assert code == 0


def test_main_reports_unopenable_database(tmp_path, capsys):
    missing_dir = tmp_path / "missing" / "cuisine.db"
    code = main(["--database", str(missing_dir), "--host", "127.0.0.1", "--port", "0"])
    assert code == 1
    assert capsys.readouterr().err.startswith("Error: ")