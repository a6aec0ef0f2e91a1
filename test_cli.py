"""
Tests for the propstack command line.
"""

import logging

import pytest
import yaml

from propstack import cli


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_get_prints_display_value(capsys):
    assert cli.main(["--get", "database.host", "--profile", "prod"]) == 0
    assert capsys.readouterr().out.strip() == "prod-db.internal"


def test_get_masks_sensitive_value(capsys):
    assert cli.main(["--get", "database.password", "--set", "database.password=hunter2"]) == 0
    out = capsys.readouterr().out
    assert "***MASKED***" in out
    assert "hunter2" not in out


def test_get_missing_key_exits_nonzero(capsys):
    assert cli.main(["--get", "no.such.key"]) == 1
    assert "no.such.key" in capsys.readouterr().err


def test_property_and_override_precedence(capsys):
    cli.main(["--get", "app.name", "-D", "app.name=from-prop"])
    assert capsys.readouterr().out.strip() == "from-prop"
    cli.main(["--get", "app.name", "-D", "app.name=from-prop", "--set", "app.name=from-set"])
    assert capsys.readouterr().out.strip() == "from-set"


def test_status_output(capsys, monkeypatch):
    monkeypatch.setenv("FEATURE_NEW_UI", "true")
    assert cli.main(["--status", "--profile", "staging"]) == 0
    out = capsys.readouterr().out
    assert "Environment: staging" in out
    assert "Strict Security: ENABLED" in out
    assert "FEATURE_NEW_UI: true" in out
    assert "database.password: ***MASKED***" in out


def test_report_written_as_yaml(tmp_path, capsys):
    report_file = tmp_path / "report.yaml"
    assert cli.main(["--report", str(report_file), "--profile", "dev"]) == 0
    report = yaml.safe_load(report_file.read_text(encoding="utf-8"))
    assert report["profile"] == "development"
    assert report["sources"][0] == "override"
    assert report["properties"]["database.password"] == "***MASKED***"
    assert report["profile_configuration"]["metrics_enabled"] is True


def test_malformed_resources_exit_with_error(tmp_path, capsys):
    (tmp_path / "application.properties").write_text("not valid\n", encoding="utf-8")
    assert cli.main(["--status", "--resources", str(tmp_path)]) == 1
    assert "Malformed" in capsys.readouterr().err


def test_undecodable_resources_exit_with_error(tmp_path, capsys):
    (tmp_path / "application.properties").write_bytes(b"a=\xff\xfe\n")
    assert cli.main(["--get", "a", "--resources", str(tmp_path)]) == 1
    assert "invalid UTF-8" in capsys.readouterr().err


def test_bad_pair_argument_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--set", "novalue", "--status"])
    assert excinfo.value.code == 2


def test_env_file(tmp_path, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("ENVIRONMENT=prod\n", encoding="utf-8")
    assert cli.main(["--get", "environment.name", "--env-file", str(env_file)]) == 0
    assert capsys.readouterr().out.strip() == "Production"
