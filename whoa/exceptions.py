"""Framework exception hierarchy."""


class WhoaError(Exception):
    """Base class for all framework errors."""


class ServiceNotFoundError(WhoaError, KeyError):
    """Requested key is not registered in the container."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Service not found in container: {self.key!r}"


class SettingsError(WhoaError):
    """Base class for settings errors."""

    def __init__(self, class_name: str):
        super().__init__(class_name)
        self.class_name = class_name


class AlreadyRegisteredSettingsError(SettingsError):
    def __str__(self):
        return f"Settings `{self.class_name}` are already registered."


class AmbiguousSettingsError(SettingsError):
    def __str__(self):
        return f"Settings `{self.class_name}` match more than one registered settings."


class NotRegisteredSettingsError(SettingsError):
    def __str__(self):
        return f"Settings `{self.class_name}` are not registered."


class InvalidSettingsClassError(SettingsError):
    def __str__(self):
        return f"`{self.class_name}` cannot be used as a settings class."


class FileSystemError(WhoaError, OSError):
    """File system operation failed."""


class ModelSchemaError(WhoaError):
    """Model schema registration is inconsistent."""


class AuthorizationError(WhoaError):
    """Action is not allowed for the current account."""

    status_code = 403

    def __init__(self, action: str, resource_type=None, identity=None):
        super().__init__(action)
        self.action = action
        self.resource_type = resource_type
        self.identity = identity

    def __str__(self):
        return f"Action `{self.action}` is not allowed."


class InvalidQueryError(WhoaError):
    """JSON:API query parameters could not be parsed."""

    status_code = 400

    def __init__(self, errors):
        super().__init__(errors)
        self.errors = list(errors)

    def __str__(self):
        details = "; ".join(f"{name}: {message}" for name, message in self.errors)
        return f"Invalid query parameters ({details})"
