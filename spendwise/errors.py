"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class ConflictError(AppError):
    """Raised when trying to claim a resource that is already taken."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class InitializationError(AppError):
    """Raised when the Firestore client is not ready."""

    def __init__(self, message="Firestore is not initialized."):
        """Initialize the error."""
        super().__init__(message, 500)


class UpstreamError(AppError):
    """Raised when an external service reports a failure."""

    def __init__(self, message="An upstream service failed."):
        """Initialize the error."""
        super().__init__(message, 502)
