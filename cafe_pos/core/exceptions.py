class CafePosError(Exception):
    """Base error for the POS service."""


class NotFoundError(CafePosError):
    """Referenced entity does not exist."""


class BusinessError(CafePosError):
    """Operator input rejected by a business rule."""


class RemoteBackendError(CafePosError):
    """Remote backend call failed (transport, status or payload)."""


class RemoteInitError(CafePosError):
    """Remote client could not be built from the current settings."""


class InsightUnavailableError(CafePosError):
    """Text generation endpoint failed or returned nothing usable."""
