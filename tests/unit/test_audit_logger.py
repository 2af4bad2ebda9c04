"""Tests for audit logger module."""

import json
from pathlib import Path

import jsonschema
import pytest

from typehunt.audit import AuditLogger, generate_run_id, get_package_version
from typehunt.report import load_schema


@pytest.fixture
def logger(tmp_path: Path) -> AuditLogger:
    """Create a logger that auto-closes after test."""
    lg = AuditLogger(run_id="test_run", log_path=tmp_path / "events.jsonl")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_logger_init_creates_file(logger: AuditLogger) -> None:
    """Test logger creates the log file and sets initial state."""
    assert logger.log_path.exists()
    assert logger.current_stage is None
    assert logger.run_id == "test_run"


@pytest.mark.unit
def test_logger_creates_parent_directories(tmp_path: Path) -> None:
    """Test missing parent directories are created."""
    with AuditLogger(tmp_path / "a" / "b" / "events.jsonl") as lg:
        lg.event("ping")

    assert (tmp_path / "a" / "b" / "events.jsonl").exists()


@pytest.mark.unit
def test_logger_event_writes_valid_jsonl(logger: AuditLogger) -> None:
    """Test event() writes a valid JSONL line with correct envelope."""
    logger.event("test_event", data={"key": "value"}, level="INFO", unit_id="src/a.ts")

    events = _read_events(logger.log_path)

    assert len(events) == 1
    evt = events[0]
    assert evt["run_id"] == "test_run"
    assert evt["event"] == "test_event"
    assert evt["level"] == "INFO"
    assert evt["data"] == {"key": "value"}
    assert evt["unit_id"] == "src/a.ts"
    assert evt["ts"].endswith("Z")


@pytest.mark.unit
def test_logger_stage_context_inheritance(logger: AuditLogger) -> None:
    """Test stage set via set_stage propagates to events."""
    logger.set_stage("extraction")
    logger.event("ev1")
    logger.event("ev2", stage="override")
    logger.set_stage(None)
    logger.event("ev3")

    events = _read_events(logger.log_path)

    assert [e["stage"] for e in events] == ["extraction", "override", None]


@pytest.mark.unit
def test_scan_lifecycle_events(logger: AuditLogger) -> None:
    """Test convenience methods write the expected payloads."""
    logger.scan_started({"mode": "both"})
    logger.stage_finished("discovery_complete", "discovery", {"files": 4})
    logger.unit_failed("src/x.ts", "parse", "Syntax error at line 2")
    logger.error("ConfigurationError", "bad root", stage="discovery")
    logger.scan_finished("success", 0.5, duplicate_count=3)

    events = _read_events(logger.log_path)

    assert events[0]["data"]["parameters"] == {"mode": "both"}
    assert "version" in events[0]["data"]
    assert events[1]["stage"] == "discovery"
    assert events[1]["data"] == {"counters": {"files": 4}}
    assert events[2]["level"] == "WARN"
    assert events[2]["stage"] == "discovery"
    assert events[2]["data"] == {"kind": "parse", "message": "Syntax error at line 2"}
    assert events[3]["level"] == "ERROR"
    assert events[3]["data"]["exception_class"] == "ConfigurationError"
    assert events[4]["stage"] is None
    assert events[4]["data"] == {
        "status": "success",
        "duration_seconds": 0.5,
        "duplicate_count": 3,
    }


@pytest.mark.unit
def test_events_validate_against_schema(logger: AuditLogger) -> None:
    """Test generated events conform to the bundled event schema."""
    schema = load_schema("log_event.schema.json")
    logger.scan_started({})
    logger.unit_failed("src/x.ts", "read", "No such file or directory")
    logger.scan_finished("failed", 0.1)

    for event in _read_events(logger.log_path):
        jsonschema.validate(instance=event, schema=schema)


@pytest.mark.unit
def test_event_schema_rejects_bad_level() -> None:
    """Test the schema rejects unknown levels."""
    schema = load_schema("log_event.schema.json")
    event = {"ts": "2026-01-01T00:00:00Z", "run_id": "r", "level": "LOUD", "event": "x", "data": {}}

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=event, schema=schema)


@pytest.mark.unit
def test_close_is_idempotent(tmp_path: Path) -> None:
    """Test closing twice is harmless."""
    lg = AuditLogger(tmp_path / "events.jsonl")
    lg.close()
    lg.close()


@pytest.mark.unit
def test_generate_run_id_unique() -> None:
    """Test run ids are unique and timestamp-prefixed."""
    first, second = generate_run_id(), generate_run_id()

    assert first != second
    assert "__" in first
    assert first.split("__")[0].endswith("Z")


@pytest.mark.unit
def test_get_package_version_returns_string() -> None:
    """Test the version lookup never raises."""
    assert isinstance(get_package_version(), str)
