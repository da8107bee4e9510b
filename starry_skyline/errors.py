"""Exception types."""


class ConfigurationError(ValueError):
    """Raised when a scene, surface or config is built with invalid parameters."""
