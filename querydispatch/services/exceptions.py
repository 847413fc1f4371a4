"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class ControllerClosedError(ServiceError):
    """Raised when a torn-down controller or coordinator is invoked."""
