"""
Custom exceptions for the apiary service.
These exceptions represent domain-specific errors and are part of the core business logic.
"""


class ApiaryError(Exception):
    """Base exception for apiary service errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidMetricError(ApiaryError):
    """Raised when an unsupported metric is requested."""

    def __init__(self, metric_name: str, supported_metrics: list = None):
        self.metric_name = metric_name
        self.supported_metrics = supported_metrics
        message = f"Metric '{metric_name}' is not supported"
        if supported_metrics:
            message += f". Supported metrics: {', '.join(supported_metrics)}"
        super().__init__(message)


class InvalidRangeError(ApiaryError):
    """Raised when an unknown time range label is requested."""

    def __init__(self, range_label: str, supported_ranges: list = None):
        self.range_label = range_label
        self.supported_ranges = supported_ranges
        message = f"Range '{range_label}' is not supported"
        if supported_ranges:
            message += f". Supported ranges: {', '.join(supported_ranges)}"
        super().__init__(message)


class ValidationError(ApiaryError):
    """Raised when user supplied data is incomplete or malformed."""
    pass


class HiveNotFoundError(ApiaryError):
    """Raised when a hive does not exist for the given user."""

    def __init__(self, user_id: str, hive_id: str):
        self.user_id = user_id
        self.hive_id = hive_id
        super().__init__(f"Hive '{hive_id}' not found for user '{user_id}'")


class NoteNotFoundError(ApiaryError):
    """Raised when a note does not exist for the given user."""

    def __init__(self, user_id: str, note_id: str):
        self.user_id = user_id
        self.note_id = note_id
        super().__init__(f"Note '{note_id}' not found for user '{user_id}'")


class RepositoryError(ApiaryError):
    """Raised when data repository operations fail."""

    def __init__(self, message: str, source_error: Exception = None):
        self.source_error = source_error
        details = str(source_error) if source_error else None
        super().__init__(message, details)


class ExternalServiceError(RepositoryError):
    """Raised when an external backend is unavailable or returns errors."""

    def __init__(self, service_name: str, status_code: int = None, response_body: str = None):
        self.service_name = service_name
        self.status_code = status_code
        self.response_body = response_body

        message = f"External service '{service_name}' error"
        if status_code:
            message += f" (HTTP {status_code})"

        super().__init__(message)
        self.details = response_body if response_body else None
