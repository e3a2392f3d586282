"""
Tests for the command-line interface.
"""

from sqlalchemy import create_engine, inspect
from typer.testing import CliRunner

from generic_server import __version__
from generic_server.cli import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_routes_lists_registered_entities():
    result = runner.invoke(app, ["routes"])

    assert result.exit_code == 0
    assert "Author" in result.output
    assert "BookDTO" in result.output
    assert "/api/books" in result.output


def test_db_init_creates_tables(tmp_path, monkeypatch):
    from crud_shared.config.settings import settings
    from crud_shared.infrastructure import db

    database_path = tmp_path / "cli.db"
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{database_path}")
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.setattr(db, "_sessionmaker", None)

    result = runner.invoke(app, ["db-init"])

    assert result.exit_code == 0, result.output
    assert "Tables created" in result.output

    engine = create_engine(f"sqlite:///{database_path}")
    try:
        assert {"authors", "books"} <= set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
