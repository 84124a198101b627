import json

import pytest
from click.testing import CliRunner

from snapagent import cli
from snapagent.naming import FULL_PREFIX, INCREMENTAL_MARKER
from tests.conftest import FakeStore


@pytest.fixture
def fake_store(monkeypatch):
    store = FakeStore(["tank", "tank@" + FULL_PREFIX + "1", "other"])
    monkeypatch.setattr(cli, "create_store", lambda config, console=None: store)
    return store


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"pattern": "tank", "log_file": str(tmp_path / "logs.jsonl")}))
    return str(path)


def invoke(config_file, *args):
    return CliRunner().invoke(cli.main, ["--config", config_file, *args])


def test_list(fake_store, config_file):
    result = invoke(config_file, "list")
    assert result.exit_code == 0
    assert result.stdout == f"tank [{FULL_PREFIX}1]\n"


def test_full(fake_store, config_file):
    result = invoke(config_file, "full", "tank", "2")
    assert result.exit_code == 0
    assert fake_store.calls[-2:] == [
        ("snapshot", "tank@" + FULL_PREFIX + "2"),
        ("send", "tank@" + FULL_PREFIX + "2", None),
    ]


def test_full_bad_timestamp(fake_store, config_file):
    result = invoke(config_file, "full", "tank", "now")
    assert result.exit_code == 1
    assert fake_store.calls == []


def test_incremental_missing_base_exits_nonzero(fake_store, config_file):
    result = invoke(config_file, "incremental", "tank", "99")
    assert result.exit_code == 1
    assert fake_store.ops()[-1] == "send"


def test_restore_legacy_base(fake_store, config_file):
    result = invoke(config_file, "restore", "tank", "--legacy-base", "1")
    assert result.exit_code == 0
    assert fake_store.ops() == ["unmount", "rollback", "receive"]


def test_delete_unmanaged_refused(fake_store, config_file):
    result = invoke(config_file, "delete", "tank", "my-own-snapshot")
    assert result.exit_code == 1
    assert fake_store.calls == []


def test_delete_incremental(fake_store, config_file):
    fake_store.names.append("tank@" + INCREMENTAL_MARKER)
    result = invoke(config_file, "delete", "tank", INCREMENTAL_MARKER)
    assert result.exit_code == 0
    assert ("destroy", "tank@" + INCREMENTAL_MARKER) in fake_store.calls


def test_volume_required(fake_store, config_file):
    result = invoke(config_file, "full")
    assert result.exit_code != 0
    assert fake_store.calls == []


def test_bad_config_exits_nonzero(fake_store, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    result = invoke(str(path), "list")
    assert result.exit_code == 1


def test_logs(fake_store, config_file):
    invoke(config_file, "full", "tank", "2")
    result = invoke(config_file, "logs")
    assert result.exit_code == 0
    assert "full" in result.stdout
    assert "tank" in result.stdout


def test_logs_empty(config_file):
    result = invoke(config_file, "logs")
    assert result.exit_code == 0
    assert "No logs found" in result.stdout


def test_unwritable_log_keeps_successful_exit(fake_store, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_file": str(blocker / "logs.jsonl")}))

    result = invoke(str(path), "full", "tank", "5")
    assert result.exit_code == 0
    assert ("send", "tank@" + FULL_PREFIX + "5", None) in fake_store.calls
    assert "could not write audit log" in result.output


def test_logs_limit_zero_shows_no_entries(fake_store, config_file):
    invoke(config_file, "full", "tank", "2")
    result = invoke(config_file, "logs", "-n", "0")
    assert result.exit_code == 0
    assert "tank" not in result.stdout
