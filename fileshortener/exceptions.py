class FileShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:file_shortener_error'


class ValidationError(FileShortenerError):
    """Raised when a required field is missing or empty."""

    error_code = 'app:validation_error'


class AuthenticationError(FileShortenerError):
    """Raised when a username/password pair doesn't match the configured credentials."""

    error_code = 'app:authentication_error'


class ConfigurationError(FileShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
