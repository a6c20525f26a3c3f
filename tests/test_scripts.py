import importlib.util
from pathlib import Path

import pytest

SCRIPTS = Path(__file__).resolve().parents[1] / "scripts"


def _load(name):
    spec = importlib.util.spec_from_file_location(f"scripts_{name}", SCRIPTS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")


def test_init_db_lists_created_tables(monkeypatch, capsys):
    script = _load("init_db")
    applied = []
    monkeypatch.setattr(script, "apply_schema", lambda db_config, schema_path: applied.append(schema_path.name))
    monkeypatch.setattr(script, "list_tables", lambda db_config: ["users", "attendance_records", "holidays"])

    script.main()
    out = capsys.readouterr().out

    assert applied == ["schema.sql"]
    assert "HR portal schema ready" in out
    assert "attendance_records, holidays, users" in out


def test_seed_db_prints_demo_accounts(monkeypatch, capsys):
    script = _load("seed_db")
    monkeypatch.setattr(script, "apply_seed_sql", lambda db_config, seed_path: None)
    monkeypatch.setattr(script, "ensure_demo_users", lambda db_config: None)

    script.main()
    out = capsys.readouterr().out

    assert "Demo accounts:" in out
    assert "admin@example.com" in out
    assert "jane@example.com" in out
