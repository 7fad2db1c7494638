"""
Audit Logger

DESIGN DECISION: Every change to the account and every advisor call is
logged. This provides:
1. Traceability of balance changes
2. Debugging capability when storage or the advisor fails

The audit logger:
- Writes structured events through structlog
- Keeps a short in-memory history for the UI
"""

import structlog

from novabank.models.audit import AuditEvent, AuditSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Keeps the most recent events in memory so the UI (and tests) can
    show what just happened.
    """

    def __init__(self, name: str = "novabank.audit", history_size: int = 200):
        self._logger = structlog.get_logger(name)
        self._history_size = history_size
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        """Recent events, oldest first."""
        return list(self._events)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        self._events.append(event)
        if len(self._events) > self._history_size:
            del self._events[: len(self._events) - self._history_size]

        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
