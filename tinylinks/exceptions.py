class TinyLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:tinylinks_error'


class ConfigurationError(TinyLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ShortcodeLifecycleError(TinyLinksError):
    """Base exception for errors raised by the shortcode lifecycle operations.

    Subclasses carry the HTTP status the boundary responds with and an
    upper-case error code returned to clients in the `errorCode` field.
    """

    error_code = 'SHORTCODE_LIFECYCLE_ERROR'
    status_code = 500
    public_message = 'Internal Server Error'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.public_message)


class MissingUrlError(ShortcodeLifecycleError):
    """Raised when the original URL is empty or absent."""

    error_code = 'MISSING_URL'
    status_code = 400
    public_message = 'URL is required'


class InvalidUrlError(ShortcodeLifecycleError):
    """Raised when the original URL is not an absolute URL."""

    error_code = 'INVALID_URL'
    status_code = 400
    public_message = 'Invalid URL format'


class InvalidValidityError(ShortcodeLifecycleError):
    """Raised when the validity window is not a positive number of minutes."""

    error_code = 'INVALID_VALIDITY'
    status_code = 400
    public_message = 'Validity must be a positive integer (minutes)'


class DuplicateShortcodeError(ShortcodeLifecycleError):
    """Raised when a requested shortcode is already taken."""

    error_code = 'DUPLICATE_SHORTCODE'
    status_code = 400
    public_message = 'Shortcode already exists'


class ShortcodeNotFoundError(ShortcodeLifecycleError):
    """Raised when no record exists for a shortcode."""

    error_code = 'SHORTCODE_NOT_FOUND'
    status_code = 404
    public_message = 'Shortcode not found'


class ShortcodeExpiredError(ShortcodeLifecycleError):
    """Raised when a record's validity window has passed."""

    error_code = 'SHORTCODE_EXPIRED'
    status_code = 410
    public_message = 'Short URL has expired'


class InternalError(ShortcodeLifecycleError):
    """Raised on data store failures and unexpected exceptions.

    The message shown to clients is always the generic one; the cause is
    chained (`raise ... from e`) and logged.
    """

    error_code = 'INTERNAL_ERROR'
    status_code = 500
    public_message = 'Internal Server Error'


class ShortcodeGenerationError(InternalError):
    """Raised when no free shortcode was found within the retry cap."""

    error_code = 'SHORTCODE_GENERATION_FAILED'
