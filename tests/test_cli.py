import pytest

import jiraworklog.cli as cli
from jiraworklog.sync_manager import SyncManager


def test_init_creates_files(tmp_path):
    config_path = tmp_path / "config.yml"
    data_path = tmp_path / "data.yml"
    state_path = tmp_path / "state.yml"

    cli.main(["--init", "-c", str(config_path), "-f", str(data_path), "-s", str(state_path)])

    assert config_path.exists()
    assert data_path.exists()
    assert state_path.exists()


def test_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-c", str(tmp_path / "config.yml")])
    assert excinfo.value.code == 1


def test_run_failure_exits(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yml"
    config_path.write_text("server: jira.example.com\nusername: alex\npassword: pw\n")
    data_path = tmp_path / "data.yml"
    data_path.write_text("worklog:\n  '2016-04-14': ['I_am_not_a_jira:4h']\n")
    state_path = tmp_path / "state.yml"
    state_path.write_text("{}\n")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-c", str(config_path), "-f", str(data_path), "-s", str(state_path)])
    assert excinfo.value.code == 1


def test_preview_is_dispatched(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yml"
    config_path.write_text("server: jira.example.com\nusername: alex\npassword: pw\n")
    calls = []
    monkeypatch.setattr(SyncManager, "preview", lambda self: calls.append("preview"))
    monkeypatch.setattr(SyncManager, "run", lambda self: calls.append("run"))

    cli.main(["--preview", "-c", str(config_path)])
    cli.main(["-c", str(config_path)])

    assert calls == ["preview", "run"]
