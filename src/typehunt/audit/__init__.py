"""Audit logging subsystem for typehunt.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: structured event record
"""

from typehunt.audit.helpers import generate_run_id, get_package_version
from typehunt.audit.logger import AuditLogger
from typehunt.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_package_version",
]
