from __future__ import annotations


class AppError(Exception):
    """Base app error. `status_code` is what the API layer answers with."""

    status_code: int = 500

    def __init__(self, message: str = "", *, status_code: int | None = None):
        super().__init__(message)
        self.message = message or self.__class__.__doc__ or self.__class__.__name__
        if status_code is not None:
            self.status_code = status_code


class ResolutionFailure(AppError):
    """Raised when geocoding produced no match for the origin or destination."""

    status_code = 422


class ProviderFailure(AppError):
    """Raised when a routing, geocoding or emission provider fails or times out."""

    status_code = 502


class ValidationFailure(AppError):
    """Raised when a caller omitted required fields."""

    status_code = 400


class AuthenticationError(AppError):
    """Raised when credentials are missing, invalid or expired."""

    status_code = 401


class PermissionDenied(AppError):
    """Raised when a caller touches a record it does not own."""

    status_code = 403


class TripNotFound(AppError):
    """Raised when a trip id does not exist."""

    status_code = 404

    def __init__(self, trip_id: int | str):
        super().__init__(f"Trip {trip_id} not found")
        self.trip_id = trip_id


class DuplicateUserError(AppError):
    """Raised on signup with an email that is already registered."""

    status_code = 400
