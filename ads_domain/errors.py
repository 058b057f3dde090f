"""Exception hierarchy for the ads domain and the service layer above it."""

from typing import List, Optional


class AdsError(Exception):
    """Base error. ``status_code`` is the HTTP status the API maps it to."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AdsError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str] = None):
        message = f"{entity} not found" if entity_id is None else f"{entity} not found: {entity_id}"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(AdsError):
    status_code = 400

    def __init__(self, errors: List[str]):
        super().__init__(", ".join(errors) if errors else "Validation failed")
        self.errors = list(errors)


class ConflictError(AdsError):
    status_code = 409


class PermissionDeniedError(AdsError):
    status_code = 403


class WalletError(AdsError):
    status_code = 400


__all__ = [
    "AdsError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "PermissionDeniedError",
    "WalletError",
]
