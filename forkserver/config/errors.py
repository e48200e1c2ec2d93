"""Exceptions raised while assembling server configuration."""


class ServerConfigError(Exception):
    """Base class for all configuration failures."""

    pass


class ConfigLoadError(ServerConfigError):
    """Raised when the config file cannot be opened, read or parsed."""

    pass


class UnexpectedRootError(ServerConfigError):
    """Raised when the config document's root element is not 'properties'."""

    pass


class BindError(ServerConfigError):
    """Raised when a config key/value cannot be applied to a field."""

    def __init__(self, message: str, property_name: str) -> None:
        super().__init__(message)
        self.property_name = property_name


class NoSuchSetterError(BindError):
    """Raised when no field is bound to the given config key."""

    pass


class BindInvocationError(BindError):
    """Raised when the value for a known key is rejected."""

    pass


class InvalidConfigError(ServerConfigError):
    """Raised when the assembled configuration is inconsistent."""

    pass


class MissingHostError(InvalidConfigError):
    """Raised when no host is configured."""

    pass
