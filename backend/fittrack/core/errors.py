"""Error taxonomy shared by the stores and the API layer.

The aggregation functions never raise any of these: they only see workouts
that were already fetched and validated.
"""


class FitTrackError(Exception):
    """Base class for application errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FitTrackError):
    """Malformed or out-of-range input (duration < 1, blank exercise type...)."""

    status_code = 422


class NotFoundError(FitTrackError):
    status_code = 404


class AuthError(FitTrackError):
    """No user id could be resolved for the request."""

    status_code = 401


class StoreUnavailableError(FitTrackError):
    """The persistence backend could not be reached."""

    status_code = 503


class StorageConfigError(FitTrackError):
    """Raised at startup when the storage connection string is missing or unusable."""
