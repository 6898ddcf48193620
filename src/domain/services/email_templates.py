"""Transactional email content."""

from dataclasses import dataclass
from datetime import datetime
from html import escape

from domain.entities.shop import ShopRole

_ROLE_NAMES = {
    ShopRole.OWNER: "Owner",
    ShopRole.MANAGER: "Manager",
    ShopRole.STAFF: "Staff",
}


@dataclass
class EmailContent:
    subject: str
    html_body: str
    text_body: str


def invitation_email(
    shop_name: str,
    role: ShopRole,
    invite_url: str,
    inviter_name: str | None,
    expires_at: datetime,
) -> EmailContent:
    """Render the staff invitation email."""
    role_name = _ROLE_NAMES[role]
    inviter = inviter_name or "A shop manager"
    expiry = expires_at.strftime("%Y-%m-%d %H:%M UTC")

    subject = f"[{shop_name}] You have been invited as {role_name}"

    html_body = f"""\
<div style="font-family: sans-serif; max-width: 560px; margin: 0 auto;">
  <h2>{escape(shop_name)}</h2>
  <p>{escape(inviter)} invited you to join <strong>{escape(shop_name)}</strong>
  as <strong>{role_name}</strong>.</p>
  <p>
    <a href="{escape(invite_url, quote=True)}"
       style="display: inline-block; padding: 12px 24px; background: #4f46e5;
              color: #ffffff; text-decoration: none; border-radius: 6px;">
      Accept invitation
    </a>
  </p>
  <p style="color: #6b7280; font-size: 13px;">This invitation expires on {expiry}.</p>
  <p style="color: #6b7280; font-size: 13px;">
    If you were not expecting this email you can ignore it.
  </p>
</div>
"""

    text_body = (
        f"{inviter} invited you to join {shop_name} as {role_name}.\n\n"
        f"Accept the invitation: {invite_url}\n\n"
        f"This invitation expires on {expiry}.\n"
    )

    return EmailContent(subject=subject, html_body=html_body, text_body=text_body)
