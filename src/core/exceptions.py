"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    SHOP_NOT_FOUND = "SHOP_NOT_FOUND"
    SHOP_MEMBER_NOT_FOUND = "SHOP_MEMBER_NOT_FOUND"
    DOG_NOT_FOUND = "DOG_NOT_FOUND"
    APPOINTMENT_NOT_FOUND = "APPOINTMENT_NOT_FOUND"
    GROOMING_TYPE_NOT_FOUND = "GROOMING_TYPE_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    LAST_OWNER = "LAST_OWNER"
    SHOP_HAS_EMPLOYEES = "SHOP_HAS_EMPLOYEES"
    DOG_HAS_APPOINTMENTS = "DOG_HAS_APPOINTMENTS"
    INVALID_PERIOD = "INVALID_PERIOD"
    ASSIGNEE_NOT_IN_SHOP = "ASSIGNEE_NOT_IN_SHOP"

    # Authorization errors (403) - shop-specific
    NOT_A_MEMBER = "NOT_A_MEMBER"
    INSUFFICIENT_PERMISSIONS = "INSUFFICIENT_PERMISSIONS"
    DOG_NOT_IN_SHOP = "DOG_NOT_IN_SHOP"

    # Invitation errors
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"
    INVITATION_EXPIRED = "INVITATION_EXPIRED"
    INVITATION_ALREADY_PROCESSED = "INVITATION_ALREADY_PROCESSED"
    INVALID_INVITATION_STATE = "INVALID_INVITATION_STATE"
    DUPLICATE_INVITATION = "DUPLICATE_INVITATION"
    INVITATION_EMAIL_MISMATCH = "INVITATION_EMAIL_MISMATCH"

    # Grooming service line errors
    UNKNOWN_GROOMING_TYPE = "UNKNOWN_GROOMING_TYPE"
    INACTIVE_GROOMING_TYPE = "INACTIVE_GROOMING_TYPE"

    # Conflict errors (409)
    ALREADY_A_MEMBER = "ALREADY_A_MEMBER"
    DUPLICATE_GROOMING_TYPE = "DUPLICATE_GROOMING_TYPE"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Upstream errors (502)
    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"

    # Server errors (500)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class UserNotFoundError(AppException):
    """User profile not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ShopNotFoundError(AppException):
    """Shop not found."""

    def __init__(self, shop_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SHOP_NOT_FOUND,
            message=f"Shop not found: {shop_id}",
            status_code=404,
            details={"shop_id": shop_id},
        )


class ShopMemberNotFoundError(AppException):
    """Shop membership not found."""

    def __init__(self, member_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SHOP_MEMBER_NOT_FOUND,
            message=f"Employee not found: {member_id}",
            status_code=404,
            details={"member_id": member_id},
        )


class DogNotFoundError(AppException):
    """Dog not found."""

    def __init__(self, dog_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DOG_NOT_FOUND,
            message=f"Dog not found: {dog_id}",
            status_code=404,
            details={"dog_id": dog_id},
        )


class AppointmentNotFoundError(AppException):
    """Appointment not found."""

    def __init__(self, appointment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.APPOINTMENT_NOT_FOUND,
            message=f"Appointment not found: {appointment_id}",
            status_code=404,
            details={"appointment_id": appointment_id},
        )


class GroomingTypeNotFoundError(AppException):
    """Grooming type not found in the shop catalog."""

    def __init__(self, grooming_type_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.GROOMING_TYPE_NOT_FOUND,
            message=f"Grooming type not found: {grooming_type_id}",
            status_code=404,
            details={"grooming_type_id": grooming_type_id},
        )


class NotAShopMemberError(AppException):
    """User is not an active member of the shop."""

    def __init__(self, shop_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.NOT_A_MEMBER,
            message="You are not a member of this shop",
            status_code=403,
            details={"shop_id": shop_id},
        )


class InsufficientPermissionsError(AppException):
    """User does not have sufficient permissions."""

    def __init__(self, required_role: str = "manager") -> None:
        super().__init__(
            error_code=ErrorCode.INSUFFICIENT_PERMISSIONS,
            message=f"Insufficient permissions. Required role: {required_role}",
            status_code=403,
            details={"required_role": required_role},
        )


class DogNotInShopError(AppException):
    """Dog is registered to a different shop."""

    def __init__(self, dog_id: str, shop_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DOG_NOT_IN_SHOP,
            message="This dog is not registered to this shop",
            status_code=403,
            details={"dog_id": dog_id, "shop_id": shop_id},
        )


class AssigneeNotInShopError(AppException):
    """Assigned groomer is not an active member of the appointment's shop."""

    def __init__(self, user_id: str, shop_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ASSIGNEE_NOT_IN_SHOP,
            message="The assigned user is not an employee of this shop",
            status_code=400,
            details={"user_id": user_id, "shop_id": shop_id},
        )


class LastOwnerError(AppException):
    """Cannot remove or demote the last owner of a shop."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.LAST_OWNER,
            message="Cannot remove or demote the last owner of a shop",
            status_code=400,
        )


class ShopHasEmployeesError(AppException):
    """Shop still has employees and cannot be deleted."""

    def __init__(self, shop_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.SHOP_HAS_EMPLOYEES,
            message="A shop with employees cannot be deleted. Remove the employees first",
            status_code=400,
            details={"shop_id": shop_id},
        )


class DogHasAppointmentsError(AppException):
    """Dog has appointments and cannot be deleted."""

    def __init__(self, dog_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.DOG_HAS_APPOINTMENTS,
            message="A dog with appointments cannot be deleted. Cancel the appointments first",
            status_code=400,
            details={"dog_id": dog_id},
        )


class InvalidPeriodError(AppException):
    """Period start is after period end."""

    def __init__(self, start: str, end: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_PERIOD,
            message="Period start must not be after period end",
            status_code=400,
            details={"start": start, "end": end},
        )


class AlreadyAMemberError(AppException):
    """User is already a member of the shop."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_A_MEMBER,
            message="User is already an employee of this shop",
            status_code=409,
            details={"user_id": user_id},
        )


class DuplicateGroomingTypeError(AppException):
    """An active grooming type with this name already exists in the shop."""

    def __init__(self, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_GROOMING_TYPE,
            message=f"Grooming type '{name}' already exists",
            status_code=409,
            details={"name": name},
        )


class InvitationNotFoundError(AppException):
    """Invitation not found."""

    def __init__(self, invitation_id: str = "") -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_NOT_FOUND,
            message="Invitation not found",
            status_code=404,
            details={"invitation_id": invitation_id} if invitation_id else None,
        )


class InvitationExpiredError(AppException):
    """Invitation has expired."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_EXPIRED,
            message="This invitation has expired",
            status_code=400,
        )


class InvitationAlreadyProcessedError(AppException):
    """Invitation is no longer pending (accepted or cancelled)."""

    def __init__(self, status: str) -> None:
        if status == "accepted":
            message = "This invitation has already been accepted"
        else:
            message = "This invitation has already been processed"
        super().__init__(
            error_code=ErrorCode.INVITATION_ALREADY_PROCESSED,
            message=message,
            status_code=400,
            details={"status": status},
        )
        self.status = status


class InvalidInvitationStateError(AppException):
    """Requested transition is only allowed on pending invitations."""

    def __init__(self, action: str, status: str) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_INVITATION_STATE,
            message=f"Only pending invitations can be {action}",
            status_code=400,
            details={"action": action, "status": status},
        )


class DuplicateInvitationError(AppException):
    """A pending invitation already exists for this email and shop."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.DUPLICATE_INVITATION,
            message="A pending invitation already exists for this email",
            status_code=409,
            details={"email": email},
        )


class InvitationEmailMismatchError(AppException):
    """The user's email does not match the invitation email."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVITATION_EMAIL_MISMATCH,
            message="Your email does not match the invitation email",
            status_code=403,
        )


class EmailDeliveryFailedError(AppException):
    """Outbound email could not be delivered."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            error_code=ErrorCode.EMAIL_DELIVERY_FAILED,
            message="Failed to send the invitation email",
            status_code=502,
            details={"reason": reason} if reason else None,
        )


class UnknownGroomingTypeError(AppException):
    """Grooming type does not exist or belongs to another shop."""

    def __init__(self, grooming_type_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.UNKNOWN_GROOMING_TYPE,
            message=f"Unknown grooming type: {grooming_type_id}",
            status_code=400,
            details={"grooming_type_id": grooming_type_id},
        )


class InactiveGroomingTypeError(AppException):
    """Grooming type is deactivated and cannot be attached to appointments."""

    def __init__(self, grooming_type_id: str, name: str) -> None:
        super().__init__(
            error_code=ErrorCode.INACTIVE_GROOMING_TYPE,
            message=f"Grooming type '{name}' is no longer offered",
            status_code=400,
            details={"grooming_type_id": grooming_type_id, "name": name},
        )
        self.name = name
