"""Outbound email gateway protocol."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class EmailResult:
    """Outcome of a single send attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None


class IEmailGateway(Protocol):
    """Transport used by services to deliver email.

    Implementations report failure through ``EmailResult`` rather than
    raising, so callers decide how to compensate.
    """

    async def send(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> EmailResult:
        """Send one message."""
        ...
