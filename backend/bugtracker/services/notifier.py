"""
Simulated e-mail notifications.

Delivery is fire-and-forget: the message is written to the application
log and a failure while sending never reaches the caller.
"""
import logging

logger = logging.getLogger(__name__)

ASSIGNED_SUBJECT = "New Bug Assigned"


class EmailNotifier:
    def notify(self, recipient: str, subject: str, body: str) -> None:
        try:
            self.send(recipient, subject, body)
        except Exception:
            logger.warning("Notification to %s failed", recipient, exc_info=True)

    def send(self, recipient: str, subject: str, body: str) -> None:
        logger.info("EMAIL to=%s subject=%r body=%r", recipient, subject, body)


def reported_body(title: str) -> str:
    return f"You were assigned: {title}"


def assigned_body(title: str) -> str:
    return f"You were assigned bug: {title}"
