"""Invitation service layer with business logic."""

import secrets
from collections.abc import Callable
from uuid import UUID

import structlog
from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    AlreadyAMemberError,
    DuplicateInvitationError,
    EmailDeliveryFailedError,
    InvalidInvitationStateError,
    InvitationAlreadyProcessedError,
    InvitationEmailMismatchError,
    InvitationExpiredError,
    InvitationNotFoundError,
    UserNotFoundError,
)
from domain.entities.invitation import (
    AcceptedInvitation,
    Invitation,
    InvitationStatus,
    InvitationView,
    ShopSummary,
)
from domain.entities.profile import Profile
from domain.entities.shop import Shop, ShopMember, ShopRole
from domain.gateways.email_gateway import EmailResult, IEmailGateway
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access import check_can_grant, get_shop_or_raise, require_role
from domain.services.email_templates import invitation_email

logger = structlog.get_logger()


class InvitationService:
    """Service layer for shop staff invitations.

    Lifecycle: ``pending`` moves to ``accepted`` or ``cancelled`` explicitly,
    and to ``expired`` lazily the first time an overdue invitation is read.
    All three are terminal.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        email_gateway: IEmailGateway,
        frontend_url: str,
    ) -> None:
        self._uow_factory = uow_factory
        self._email = email_gateway
        self._frontend_url = frontend_url.rstrip("/")

    async def create_invitation(
        self,
        shop_id: UUID,
        user_id: UUID,
        email: str,
        role: ShopRole = ShopRole.STAFF,
    ) -> Invitation:
        """Create a shop invitation and email the invitee.

        Args:
            shop_id: The shop to invite to.
            user_id: The user creating the invitation (must be Manager+).
            email: The email address to invite.
            role: The role granted on acceptance.

        Returns:
            The persisted invitation.

        Raises:
            ShopNotFoundError: If the shop does not exist.
            UserNotFoundError: If the inviter has no profile.
            NotAShopMemberError: If the inviter is not a member.
            InsufficientPermissionsError: If the inviter is Staff, or a
                Manager inviting as Owner.
            AlreadyAMemberError: If the email belongs to an active member.
            DuplicateInvitationError: If a pending invitation already exists.
            EmailDeliveryFailedError: If the email could not be sent. The
                invitation is removed again in that case.
        """
        normalized_email = email.lower().strip()

        async with self._uow_factory() as uow:
            shop = await get_shop_or_raise(uow, shop_id)

            inviter = await uow.profiles.get(user_id)
            if not inviter:
                raise UserNotFoundError(str(user_id))

            actor = await require_role(uow, shop_id, user_id, ShopRole.MANAGER)
            check_can_grant(actor, role)

            invitee = await uow.profiles.get_by_email(normalized_email)
            if invitee:
                member = await uow.shops.get_member(shop_id, invitee.id)
                if member and member.is_active:
                    raise AlreadyAMemberError(str(invitee.id))

            existing = await uow.invitations.get_pending_for_shop_email(shop_id, normalized_email)
            if existing:
                raise DuplicateInvitationError(normalized_email)

            invitation = Invitation(
                shop_id=shop_id,
                email=normalized_email,
                token=self._generate_token(),
                invited_by=user_id,
                role=role,
            )
            created = await uow.invitations.create(invitation)

            result = await self._send_invitation_email(created, shop, inviter)
            if not result.success:
                # Leave nothing behind for an invitation nobody received.
                await uow.invitations.delete(created.id)
                await uow.commit()
                logger.warning(
                    "invitation_email_failed",
                    shop_id=str(shop_id),
                    invitation_id=str(created.id),
                    error=result.error,
                )
                raise EmailDeliveryFailedError(result.error)

            await uow.commit()
            logger.info(
                "invitation_created",
                shop_id=str(shop_id),
                invitation_id=str(created.id),
                role=role.label,
                message_id=result.message_id,
            )
            return created

    async def get_by_token(self, token: str) -> InvitationView:
        """Resolve an invitation link for display.

        Raises:
            InvitationNotFoundError: If no invitation has this token.
            InvitationExpiredError: If the invitation is (or just became) expired.
            InvitationAlreadyProcessedError: If it was accepted or cancelled.
        """
        async with self._uow_factory() as uow:
            invitation = await self._get_pending_by_token(uow, token)

            shop = await get_shop_or_raise(uow, invitation.shop_id)
            return InvitationView(
                email=invitation.email,
                role=invitation.role,
                expires_at=invitation.expires_at,
                shop=ShopSummary(id=shop.id, name=shop.name),
            )

    async def accept_invitation(self, token: str, user_id: UUID) -> AcceptedInvitation:
        """Accept an invitation on behalf of the authenticated user.

        Membership, the user's primary shop and the invitation status are
        written in one transaction.

        Raises:
            InvitationNotFoundError: If no invitation has this token.
            InvitationExpiredError: If the invitation has expired.
            InvitationAlreadyProcessedError: If it was accepted or cancelled.
            UserNotFoundError: If the user has no profile.
            InvitationEmailMismatchError: If the user's email differs.
            AlreadyAMemberError: If the user already belongs to the shop.
        """
        async with self._uow_factory() as uow:
            invitation = await self._get_pending_by_token(uow, token)

            user = await uow.profiles.get(user_id)
            if not user:
                raise UserNotFoundError(str(user_id))

            if user.email.lower().strip() != invitation.email.lower().strip():
                raise InvitationEmailMismatchError()

            shop = await get_shop_or_raise(uow, invitation.shop_id)

            existing_member = await uow.shops.get_member(invitation.shop_id, user_id)
            if existing_member and existing_member.is_active:
                # Consume the invitation anyway so the link cannot be reused
                invitation.accept()
                await uow.invitations.update(invitation)
                await uow.commit()
                raise AlreadyAMemberError(str(user_id))

            try:
                if existing_member:
                    existing_member.is_active = True
                    existing_member.role = invitation.role
                    await uow.shops.update_member(existing_member)
                else:
                    await uow.shops.add_member(
                        ShopMember(
                            shop_id=invitation.shop_id,
                            user_id=user_id,
                            role=invitation.role,
                        )
                    )

                user.shop_id = invitation.shop_id
                await uow.profiles.update(user)

                invitation.accept()
                await uow.invitations.update(invitation)

                await uow.commit()
            except IntegrityError:
                # A concurrent accept inserted the same (shop, user) row first.
                await uow.rollback()
                logger.info(
                    "invitation_accept_race",
                    shop_id=str(invitation.shop_id),
                    user_id=str(user_id),
                )
                raise AlreadyAMemberError(str(user_id)) from None

            logger.info(
                "invitation_accepted",
                shop_id=str(invitation.shop_id),
                invitation_id=str(invitation.id),
                user_id=str(user_id),
            )
            return AcceptedInvitation(
                shop=ShopSummary(id=shop.id, name=shop.name),
                role=invitation.role,
            )

    async def cancel_invitation(self, invitation_id: UUID, user_id: UUID) -> None:
        """Cancel a pending invitation. Requires Manager+ role.

        Raises:
            InvitationNotFoundError: If the invitation does not exist.
            NotAShopMemberError: If the actor is not a member of its shop.
            InsufficientPermissionsError: If the actor is Staff.
            InvalidInvitationStateError: If the invitation is not pending.
        """
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id)
            if not invitation:
                raise InvitationNotFoundError(str(invitation_id))

            await require_role(uow, invitation.shop_id, user_id, ShopRole.MANAGER)

            if invitation.status != InvitationStatus.PENDING:
                raise InvalidInvitationStateError("cancelled", invitation.status.value)

            invitation.cancel()
            await uow.invitations.update(invitation)
            await uow.commit()

            logger.info(
                "invitation_cancelled",
                shop_id=str(invitation.shop_id),
                invitation_id=str(invitation_id),
            )

    async def resend_invitation(self, invitation_id: UUID, user_id: UUID) -> Invitation:
        """Issue a fresh token and expiry for a pending invitation and email it again.

        The refreshed token is committed before sending. When delivery fails
        the new token stays valid and EmailDeliveryFailedError is raised.

        Raises:
            InvitationNotFoundError: If the invitation does not exist.
            NotAShopMemberError: If the actor is not a member of its shop.
            InsufficientPermissionsError: If the actor is Staff.
            InvalidInvitationStateError: If the invitation is not pending.
            EmailDeliveryFailedError: If the email could not be sent.
        """
        async with self._uow_factory() as uow:
            invitation = await uow.invitations.get_by_id(invitation_id)
            if not invitation:
                raise InvitationNotFoundError(str(invitation_id))

            await require_role(uow, invitation.shop_id, user_id, ShopRole.MANAGER)

            if invitation.status != InvitationStatus.PENDING:
                raise InvalidInvitationStateError("resent", invitation.status.value)

            shop = await get_shop_or_raise(uow, invitation.shop_id)
            inviter = await uow.profiles.get(invitation.invited_by)

            invitation.refresh(self._generate_token())
            updated = await uow.invitations.update(invitation)
            await uow.commit()

        result = await self._send_invitation_email(updated, shop, inviter)
        if not result.success:
            logger.warning(
                "invitation_resend_email_failed",
                shop_id=str(updated.shop_id),
                invitation_id=str(invitation_id),
                error=result.error,
            )
            raise EmailDeliveryFailedError(result.error)

        logger.info(
            "invitation_resent",
            shop_id=str(updated.shop_id),
            invitation_id=str(invitation_id),
            message_id=result.message_id,
        )
        return updated

    async def get_shop_invitations(self, shop_id: UUID, user_id: UUID) -> list[Invitation]:
        """Get all invitations for a shop, newest first. Requires membership."""
        async with self._uow_factory() as uow:
            await get_shop_or_raise(uow, shop_id)
            await require_role(uow, shop_id, user_id, ShopRole.STAFF)
            return await uow.invitations.get_for_shop(shop_id)  # type: ignore[no-any-return]

    # --- Internal helpers ---

    async def _get_pending_by_token(self, uow: IUnitOfWork, token: str) -> Invitation:
        """Load an invitation that can still be acted on.

        A pending invitation found past its expiry is persisted as expired
        before the error is raised, so later reads fail the same way.
        """
        invitation = await uow.invitations.get_by_token(token)
        if not invitation:
            raise InvitationNotFoundError()

        if invitation.status == InvitationStatus.EXPIRED:
            raise InvitationExpiredError()

        if invitation.status == InvitationStatus.PENDING and invitation.is_expired:
            invitation.expire()
            await uow.invitations.update(invitation)
            await uow.commit()
            logger.info("invitation_expired", invitation_id=str(invitation.id))
            raise InvitationExpiredError()

        if invitation.status != InvitationStatus.PENDING:
            raise InvitationAlreadyProcessedError(invitation.status.value)

        return invitation

    async def _send_invitation_email(
        self,
        invitation: Invitation,
        shop: Shop,
        inviter: Profile | None,
    ) -> EmailResult:
        content = invitation_email(
            shop_name=shop.name,
            role=invitation.role,
            invite_url=self.invite_url(invitation.token),
            inviter_name=inviter.name if inviter else None,
            expires_at=invitation.expires_at,
        )
        return await self._email.send(  # type: ignore[no-any-return]
            to=invitation.email,
            subject=content.subject,
            html_body=content.html_body,
            text_body=content.text_body,
        )

    def invite_url(self, token: str) -> str:
        """Deep link the invitee opens to view and accept the invitation."""
        return f"{self._frontend_url}/invite?token={token}"

    @staticmethod
    def _generate_token() -> str:
        """Generate an opaque 256-bit invitation token."""
        return secrets.token_hex(32)
