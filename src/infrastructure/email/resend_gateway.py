"""Email delivery through the Resend API."""

import asyncio
from typing import Any

import resend
import structlog

from domain.gateways.email_gateway import EmailResult

logger = structlog.get_logger()


class ResendEmailGateway:
    """IEmailGateway implementation backed by Resend.

    The Resend SDK is synchronous, so each send runs in a worker thread.
    Without an API key every send reports failure.
    """

    def __init__(self, api_key: str, from_address: str, from_name: str | None = None) -> None:
        self._api_key = api_key
        self._sender = f"{from_name} <{from_address}>" if from_name else from_address

    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> EmailResult:
        """Send one message."""
        if not self._api_key:
            logger.warning("email_not_configured", to=to, subject=subject)
            return EmailResult(success=False, error="Email transport is not configured")

        params: dict[str, Any] = {
            "from": self._sender,
            "to": [to],
            "subject": subject,
            "html": html_body,
        }
        if text_body:
            params["text"] = text_body

        try:
            response = await asyncio.to_thread(self._send_sync, params)
        except Exception as exc:
            logger.warning("email_send_failed", to=to, subject=subject, error=str(exc))
            return EmailResult(success=False, error=str(exc))

        message_id = response.get("id") if response else None
        logger.info("email_sent", to=to, subject=subject, message_id=message_id)
        return EmailResult(success=True, message_id=message_id)

    def _send_sync(self, params: dict[str, Any]) -> Any:
        resend.api_key = self._api_key
        return resend.Emails.send(params)  # type: ignore[arg-type]
