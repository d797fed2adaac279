"""Email adapter used when no mail provider is configured.

Writes the message to the log instead of sending it, so a store without
mail credentials can still see what would have gone out.
"""

from uuid import uuid4

import structlog

from dropshipping.mail.port import EmailPort

logger = structlog.get_logger(__name__)


class LogEmailAdapter(EmailPort):
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message_id = f"log-{uuid4().hex[:12]}"
        logger.info("Email not sent (no mail provider configured)", to=to, subject=subject, body=body)
        return {"message_id": message_id, "status": "sent"}
