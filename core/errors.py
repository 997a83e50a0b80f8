from typing import Optional

from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

TRANSIENT = "transient"
PERMANENT = "permanent"
VALIDATION = "validation"


class FleetError(Exception):
    """Base class for domain errors raised by the derivation layer."""

    kind = PERMANENT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailure(FleetError):
    kind = VALIDATION

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


def classify_store_error(exc: SQLAlchemyError) -> str:
    """Connection drops, locks and timeouts are worth retrying; anything else is not."""
    if isinstance(exc, OperationalError):
        return TRANSIENT
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return TRANSIENT
    return PERMANENT
