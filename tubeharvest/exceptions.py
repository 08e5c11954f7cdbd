class AuthenticationError(Exception):
    """Raised when Google credentials are missing or invalid."""


class IntegrationError(Exception):
    """Raised when an external API call fails."""


class RateLimitError(Exception):
    """Raised when an external API rate limit or quota is hit."""


class ConfigurationError(Exception):
    """Raised when required settings are missing at startup."""
