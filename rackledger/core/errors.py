from typing import Any, Optional


class LedgerError(Exception):
    """Base class for errors raised by the inventory ledger.

    Every subclass maps to one HTTP status code and is rendered as
    ``{"error": message}`` by the API.
    """

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        out: dict = {"error": self.message}
        if self.details is not None:
            out["details"] = self.details
        return out


class ValidationError(LedgerError):
    status_code = 400
    default_message = "Validation error"


class InsufficientQuantity(LedgerError):
    status_code = 400
    default_message = "Insufficient quantity"


class InvalidTransfer(LedgerError):
    status_code = 400
    default_message = "Source and destination cannot be the same"


class NotFound(LedgerError):
    status_code = 404
    default_message = "Not found"


class Conflict(LedgerError):
    status_code = 409
    default_message = "Already exists"
