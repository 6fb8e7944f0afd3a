"""
Audit service.

Records business events through the structured logger. Audit records are
written by a logger bound with ``log_type="audit"`` so handlers can route
them to a dedicated sink.
"""

import json

from ..domain.entities import AuditEvent
from .ports import AuditService, Logger


class LoggingAuditService(AuditService):
    """AuditService that writes one structured log record per event."""

    def __init__(self, logger: Logger):
        self.logger = logger.bind(log_type="audit")

    def record_event(self, event: AuditEvent) -> None:
        """Record a business event. Never raises."""
        try:
            details = json.dumps(event.details)
        except (TypeError, ValueError) as e:
            self.logger.error("Failed to marshal audit event details", error=str(e))
            return

        self.logger.info(
            "Audit event recorded",
            timestamp=event.timestamp.isoformat(),
            user_id=event.user_id,
            action=event.action,
            entity=event.entity,
            entity_id=event.entity_id,
            details=details,
        )
