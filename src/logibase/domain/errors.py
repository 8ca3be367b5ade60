"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class UnauthorizedError(DomainError):
    """Caller identity is missing where the operation requires one."""


class InternalError(DomainError):
    """Unexpected failure; the message never carries storage details."""


GENERIC_FAILURE = "Something went wrong, please try again"


def partner_not_found(kind: str, partner_id: int) -> str:
    """Return message for missing aggregate root."""
    return f"{kind.capitalize()} {partner_id} not found"


def child_not_found(label: str, child_id: int, kind: str, partner_id: int) -> str:
    """Return message for a child id that does not belong to the aggregate."""
    return f"{label.capitalize()} {child_id} not found for {kind} {partner_id}"


def missing_required_field(label: str, field: str) -> str:
    """Return message for an incomplete new child record."""
    return f"Missing required field '{field}' to create a new {label}"


def unknown_field(label: str, field: str) -> str:
    """Return message for a key that is not a field of the record."""
    return f"Unknown {label} field '{field}'"


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside its enumeration."""
    return f"Invalid value {value!r} for '{field}'. Expected one of: {', '.join(choices)}"


def duplicate_code(kind: str, code: str | None = None) -> str:
    """Return message for a business code that is already taken."""
    if code is None:
        return f"{kind.capitalize()} code is already in use"
    return f"{kind.capitalize()} code '{code}' is already in use"


def not_authenticated() -> str:
    """Return message when no caller identity was supplied."""
    return "User not authenticated"


def operation_failed(action: str, kind: str) -> str:
    """Return the opaque message shown for unexpected failures."""
    return f"Failed to {action} {kind}. {GENERIC_FAILURE}"
