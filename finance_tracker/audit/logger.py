"""
Audit Logger

DESIGN DECISION: Every change to the transaction collection is logged.
This provides:
1. Traceability of what the user did
2. Debugging capability when a write fails
3. A recent-activity history the UI can show

The audit logger writes through structlog and keeps a bounded in-memory
history. It never raises: a logging problem must not undo a user action.
"""

import logging
import sys
from collections import deque
from typing import Any, Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditSeverity


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Minimum level name (e.g. "INFO")
        json_logs: Render JSON lines; otherwise use the console renderer
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events to the structured log and remembers the most recent ones.
    """

    def __init__(
        self,
        logger: Optional[Any] = None,
        history_size: int = 200,
    ):
        """
        Initialize audit logger.

        Args:
            logger: structlog-compatible logger. Defaults to
                    structlog.get_logger("finance_tracker.audit").
            history_size: How many events to keep in memory.
        """
        self._logger = logger or structlog.get_logger("finance_tracker.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._history.append(event)

        log_dict = event.to_log_dict()
        try:
            if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
                self._logger.error("audit_event", **log_dict)
            elif event.severity == AuditSeverity.WARNING:
                self._logger.warning("audit_event", **log_dict)
            elif event.severity == AuditSeverity.DEBUG:
                self._logger.debug("audit_event", **log_dict)
            else:
                self._logger.info("audit_event", **log_dict)
        except Exception as e:
            # Log output is best effort; fall back to stderr.
            print(f"WARNING: Failed to write audit event: {e}", file=sys.stderr)

    def recent_events(self, limit: int = 20) -> list[AuditEvent]:
        """Most recent events, newest first."""
        events = list(self._history)
        events.reverse()
        return events[:limit]
