"""Development email gateway that only logs messages."""

from uuid import uuid4

import structlog

from domain.gateways.email_gateway import EmailResult

logger = structlog.get_logger()


class ConsoleEmailGateway:
    """IEmailGateway implementation that writes messages to the log.

    Every send succeeds. Use it locally and in tests where no mail should
    leave the process.
    """

    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> EmailResult:
        """Log the message and report success."""
        message_id = f"console-{uuid4().hex}"
        logger.info(
            "email_logged",
            to=to,
            subject=subject,
            message_id=message_id,
            body=text_body or html_body,
        )
        return EmailResult(success=True, message_id=message_id)
