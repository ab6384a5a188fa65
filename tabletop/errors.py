class ConfigurationError(ValueError):
    """Raised when a generator or scene file is given unusable parameters."""
