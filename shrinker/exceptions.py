class ShrinkerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shrinker_error'


class ConfigurationError(ShrinkerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InvalidRedirectError(ShrinkerError):
    """Raised when a redirect mapping is rejected before reaching the data store."""

    error_code = 'shrink:invalid_redirect_error'


class OriginGenerationExhaustedError(ShrinkerError):
    """Raised when no free origin was found within the allowed number of attempts."""

    error_code = 'shrink:origin_generation_exhausted_error'


class QRCodeError(ShrinkerError):
    """Raised when a QR code can't be encoded."""

    error_code = 'qr:qr_code_error'
