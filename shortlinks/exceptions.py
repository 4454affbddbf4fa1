"""Application-wide exception hierarchy.

Two families live here:

    - Internal errors (configuration, infrastructure), which never leave the
      process as-is.
    - ApiError and its four subclasses, the closed set of error kinds a caller
      can observe. Each kind carries a stable HTTP status code, message prefix
      and error code, which boundary infrastructure can route on.

Example:
    >>> from shortlinks.exceptions import NotFoundError
    >>> error = NotFoundError('Link not found with short ID: abc1')
    >>> error.status_code
    404
    >>> error.message
    'Not Found: Link not found with short ID: abc1'
"""


class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ApiError(ShortLinksError):
    """Base class for errors rendered to API callers.

    Subclasses pin down `kind`, `status_code` and `prefix`. The summary passed
    to the constructor must be safe to show to a caller.
    """

    kind = 'ApiError'
    status_code = 500
    prefix = 'Internal Error'
    error_code = 'api:api_error'

    def __init__(self, summary: str):
        super().__init__(summary)
        self.summary = summary

    @property
    def message(self) -> str:
        return f'{self.prefix}: {self.summary}'


class InvalidInputError(ApiError):
    """Raised on malformed or conflicting caller-supplied data."""

    kind = 'InvalidInput'
    status_code = 400
    prefix = 'Bad Request'
    error_code = 'api:invalid_input'


class NotFoundError(ApiError):
    """Raised when the resolution target is absent."""

    kind = 'NotFound'
    status_code = 404
    prefix = 'Not Found'
    error_code = 'api:not_found'


class ServiceUnavailableError(ApiError):
    """Raised on transient conditions the caller should retry."""

    kind = 'ServiceUnavailable'
    status_code = 503
    prefix = 'Service Unavailable'
    error_code = 'api:service_unavailable'


class InternalError(ApiError):
    """Raised on unexpected or internal faults."""

    kind = 'InternalError'
    status_code = 500
    prefix = 'Internal Error'
    error_code = 'api:internal_error'
