"""Selects the email gateway configured for this deployment."""

from core.config import Settings
from domain.gateways.email_gateway import IEmailGateway
from infrastructure.email.console_gateway import ConsoleEmailGateway
from infrastructure.email.resend_gateway import ResendEmailGateway


def build_email_gateway(settings: Settings) -> IEmailGateway:
    """Create the gateway named by ``EMAIL_BACKEND``."""
    if settings.email_backend == "resend":
        return ResendEmailGateway(
            api_key=settings.resend_api_key,
            from_address=settings.email_from_address,
            from_name=settings.email_from_name,
        )
    return ConsoleEmailGateway()
