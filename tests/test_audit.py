import json
from datetime import datetime

import pytest

from pvsadm import audit
from pvsadm.audit import AuditLog, delete_if_empty


def _read_entries(path):
    return [json.loads(line) for line in path.read_text().splitlines()]


def test_log_writes_json_line(tmp_path):
    path = tmp_path / "audit.log"
    with AuditLog(path) as logger:
        logger.log("images", "delete", "ws:img1")
    (entry,) = _read_entries(path)
    assert entry["name"] == "images"
    assert entry["op"] == "delete"
    assert entry["value"] == "ws:img1"
    assert entry["timestamp"].endswith("Z")
    parsed = datetime.fromisoformat(entry["timestamp"].replace("Z", "+00:00"))
    assert parsed.utcoffset().total_seconds() == 0


def test_log_appends_across_instances(tmp_path):
    path = tmp_path / "audit.log"
    with AuditLog(path) as first:
        first.log("vms", "delete", "a")
    with AuditLog(path) as second:
        second.log("volumes", "delete", "b")
    assert [e["value"] for e in _read_entries(path)] == ["a", "b"]


def test_module_log_uses_installed_logger(tmp_path):
    path = tmp_path / "audit.log"
    logger = AuditLog(path)
    audit.set_logger(logger)
    try:
        audit.log("networks", "delete", "ws:net")
    finally:
        audit.set_logger(None)
        logger.close()
    assert _read_entries(path)[0]["name"] == "networks"


def test_module_log_without_logger_raises():
    audit.set_logger(None)
    with pytest.raises(RuntimeError):
        audit.log("images", "delete", "x")


def test_delete_if_empty_removes_empty_file(tmp_path):
    path = tmp_path / "audit.log"
    AuditLog(path).close()
    assert delete_if_empty(path) is True
    assert not path.exists()


def test_delete_if_empty_keeps_nonempty_file(tmp_path):
    path = tmp_path / "audit.log"
    with AuditLog(path) as logger:
        logger.log("keys", "delete", "k")
    assert delete_if_empty(path) is False
    assert path.exists()


def test_delete_if_empty_missing_file(tmp_path):
    assert delete_if_empty(tmp_path / "missing.log") is False


def test_open_in_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        AuditLog(tmp_path / "no" / "such" / "audit.log")