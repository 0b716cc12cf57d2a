"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class NoTargetShipmentError(DomainException):
    """No shipment or stock location can receive the requested quantity.

    Raised when a line item grows but none of the order's open shipments
    leave from a location that stocks the variant.  This is a setup
    problem upstream, so the quantity is never dropped silently.
    """
