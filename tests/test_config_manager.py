"""
Tests for configuration loading
"""

import pytest

from jiraworklog import config_manager
from jiraworklog.config_manager import ConfigurationError, init_files, load_config, load_worklog
from jiraworklog.models import Config
from jiraworklog.validator import EntrySyntaxError, MissingWorklogError


def write(path, text):
    path.write_text(text)
    return path


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError, match="File not found"):
        load_config(tmp_path / 'config.yml')


def test_bad_time_string(tmp_path):
    path = write(tmp_path / 'config.yml',
                 'server: jira.example.com\nusername: fred\ninfill: 8h\ntime_string: I_am_bad\n')
    with pytest.raises(ConfigurationError, match="Syntax error in config file"):
        load_config(path)


def test_bad_infill(tmp_path):
    path = write(tmp_path / 'config.yml', 'server: jira.example.com\nusername: fred\ninfill: I_am_bad\n')
    with pytest.raises(ConfigurationError, match="Syntax error in config file"):
        load_config(path)


def test_missing_server(tmp_path):
    path = write(tmp_path / 'config.yml', 'username: fred\n')
    with pytest.raises(ConfigurationError, match="server"):
        load_config(path)


def test_defaults_and_password_prompt(tmp_path, monkeypatch):
    monkeypatch.setattr(config_manager, 'get_password', lambda username: 'secret')
    path = write(tmp_path / 'config.yml', 'server: jira.example.com\nusername: fred\n')

    config = load_config(path)

    assert config.infill == '8h'
    assert config.time_string == 'T09:00:00.000+1000'
    assert config.password == 'secret'
    assert config.infill_seconds == 28800


def test_password_from_file_is_not_prompted(tmp_path, monkeypatch):
    def fail(username):
        raise AssertionError("prompted")

    monkeypatch.setattr(config_manager, 'get_password', fail)
    path = write(tmp_path / 'config.yml',
                 'server: jira.example.com\nusername: fred\npassword: pw\ninfill: 7h 30m\n')
    assert load_config(path).infill_seconds == 27000


def test_config_model_validation():
    with pytest.raises(ValueError, match="time_string"):
        Config(server='jira.example.com', username='fred', password='pw', time_string='T9:00')
    with pytest.raises(ValueError, match="infill"):
        Config(server='jira.example.com', username='fred', password='pw', infill='30m')


def test_load_worklog(tmp_path):
    path = write(tmp_path / 'data.yml',
                 "default: BKR-723\nworklog:\n  2016-04-14:\n    - MODULES-3125:1h 30m\n    - noinfill\n")
    worklog = load_worklog(path)
    assert worklog.default == 'BKR-723'
    assert worklog.days == {'2016-04-14': ['MODULES-3125:1h 30m', 'noinfill']}


def test_load_worklog_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_worklog(tmp_path / 'data.yml')
    with pytest.raises(MissingWorklogError):
        load_worklog(write(tmp_path / 'data.yml', 'default: BKR-723\n'))
    with pytest.raises(EntrySyntaxError):
        load_worklog(write(tmp_path / 'data.yml', "worklog:\n  '2016-04-14': ['MODULES-3125:8.5']\n"))


def test_init_files_creates_loadable_files(tmp_path):
    config_path = tmp_path / 'cfg' / 'config.yml'
    data_path = tmp_path / 'cfg' / 'data.yml'
    state_path = tmp_path / 'cfg' / 'state.yml'

    created = init_files(config_path, data_path, state_path)

    assert set(created) == {config_path, data_path, state_path}
    assert load_worklog(data_path).days == {}
    assert 'server:' in config_path.read_text()
    assert state_path.read_text() == '{}\n'


def test_init_files_keeps_existing(tmp_path):
    data_path = write(tmp_path / 'data.yml', "worklog: {}\n# mine\n")
    created = init_files(tmp_path / 'config.yml', data_path, tmp_path / 'state.yml')
    assert data_path not in created
    assert data_path.read_text().endswith('# mine\n')
