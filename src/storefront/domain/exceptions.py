"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or incomplete, or a business rule was violated."""


class NotFoundError(DomainException):
    """A referenced entity does not exist."""


class ForbiddenError(DomainException):
    """The requester is known but not permitted to perform the operation."""


class InvalidTransitionError(DomainException):
    """An order status change breaks the status state machine."""


class ConflictError(DomainException):
    """A write lost a race (duplicate order number, stale version)."""


class UnexpectedError(DomainException):
    """Infrastructure failure: storage unreadable, unwritable or corrupt."""
