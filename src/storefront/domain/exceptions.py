"""Errors raised by the storefront domain.

Everything derives from DomainException, which the CLI turns into a
click error and the GraphQL layer reports in the ``errors`` list.
Rejected saves are not exceptions: repositories return False.
"""


class DomainException(Exception):
    """Root of the storefront error hierarchy."""


class ValidationError(DomainException):
    """Input breaks a business rule, e.g. a negative amount."""


class EntityNotFoundError(DomainException):
    """No category, product or order with the given key."""


class InvalidArgumentError(DomainException, ValueError):
    """Malformed domain input, e.g. an unknown attribute type."""


class InvalidFormatError(InvalidArgumentError):
    """A value does not match the format its attribute requires."""


class OrderPlacementError(DomainException):
    """An order could not be persisted."""
