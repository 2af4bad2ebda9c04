"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle for efficient I/O.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from typehunt.audit.helpers import generate_run_id, get_package_version
from typehunt.audit.models import LogEvent
from typehunt.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write for durability.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Current stage name for context.
    """

    def __init__(self, log_path: Path, run_id: str | None = None) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        log_path : Path
            Path to JSONL log file.
        run_id : str | None, optional
            Unique run identifier, generated if not provided.
        """
        self.run_id = run_id or generate_run_id()
        self.log_path = log_path
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        unit_id: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "scan_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Stage identifier, uses current_stage if not provided.
        unit_id : str | None, optional
            Source unit identifier if event is unit-specific.
        """
        if data is None:
            data = {}

        if stage is None:
            stage = self.current_stage

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data,
            stage=stage,
            unit_id=unit_id,
        )

        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        event_dict = asdict(event)
        json.dump(event_dict, self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def scan_started(self, parameters: dict[str, Any]) -> None:
        """Log scan_started event.

        Parameters
        ----------
        parameters : dict[str, Any]
            Scan configuration.
        """
        self.event(
            "scan_started",
            data={"version": get_package_version(), "parameters": parameters},
        )

    def scan_finished(
        self,
        status: str,
        duration_seconds: float,
        duplicate_count: int | None = None,
    ) -> None:
        """Log scan_finished event.

        Parameters
        ----------
        status : str
            Run status ("success", "failed").
        duration_seconds : float
            Total execution time in seconds.
        duplicate_count : int | None, optional
            Number of duplicate groups reported.
        """
        data: dict[str, Any] = {
            "status": status,
            "duration_seconds": duration_seconds,
        }
        if duplicate_count is not None:
            data["duplicate_count"] = duplicate_count

        self.set_stage(None)
        self.event("scan_finished", data=data)

    def stage_finished(self, event_type: str, stage: str, counters: dict[str, int]) -> None:
        """Log a stage completion event with its counters."""
        self.set_stage(stage)
        self.event(event_type, data={"counters": counters}, stage=stage)

    def unit_failed(self, unit_id: str, kind: str, message: str) -> None:
        """Log a skipped source unit.

        Parameters
        ----------
        unit_id : str
            Source unit identifier.
        kind : str
            Failure kind ("read" or "parse").
        message : str
            Error message.
        """
        self.event(
            "unit_failed",
            data={"kind": kind, "message": message},
            level="WARN",
            unit_id=unit_id,
        )

    def error(self, exception_class: str, message: str, stage: str | None = None) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        """
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            stage=stage,
            level="ERROR",
        )
