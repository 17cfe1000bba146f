class ConfigurationError(ValueError):
    """Raised when a ring cannot be built from the given configuration."""
