"""Tests for configuration loading."""

from pathlib import Path

from tasktracker.config import DATA_DIR, Config, load_config


def test_defaults_when_missing(tmp_path):
    config = load_config(tmp_path / "absent.conf")
    assert config == Config()
    assert config.tasks_file == DATA_DIR / "tasks.json"
    assert config.search_limit == 10


def test_reads_keys(tmp_path):
    conf = tmp_path / "tasktracker.conf"
    conf.write_text(
        "# comment\n"
        "\n"
        f'TASKS_FILE = "{tmp_path}/my tasks.json"\n'
        "SEARCH_LIMIT = 25  # inline comment\n"
        "LOG_LEVEL = debug\n"
        "BACKUP_ON_WRITE = yes\n"
    )

    config = load_config(conf)

    assert config.tasks_file == tmp_path / "my tasks.json"
    assert config.search_limit == 25
    assert config.log_level == "DEBUG"
    assert config.backup_on_write is True


def test_tilde_expanded(tmp_path):
    conf = tmp_path / "tasktracker.conf"
    conf.write_text("TASKS_FILE = ~/tasks.json\n")
    assert load_config(conf).tasks_file == Path.home() / "tasks.json"


def test_invalid_values_ignored(tmp_path, caplog):
    conf = tmp_path / "tasktracker.conf"
    conf.write_text("SEARCH_LIMIT = lots\nLOG_LEVEL = loud\nCOLOUR = blue\nno equals here\n")

    config = load_config(conf)

    assert config.search_limit == 10
    assert config.log_level == "WARNING"
    assert "Ignoring invalid SEARCH_LIMIT" in caplog.text
    assert "Unknown config key: colour" in caplog.text


def test_negative_search_limit_keeps_default(tmp_path, caplog):
    conf = tmp_path / "tasktracker.conf"
    conf.write_text("SEARCH_LIMIT = -1\n")

    config = load_config(conf)

    assert config.search_limit == 10
    assert "Ignoring invalid SEARCH_LIMIT: '-1'" in caplog.text


def test_zero_search_limit_allowed(tmp_path):
    conf = tmp_path / "tasktracker.conf"
    conf.write_text("SEARCH_LIMIT = 0\n")
    assert load_config(conf).search_limit == 0
