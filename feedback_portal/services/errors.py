class ServiceError(RuntimeError):
    """Recoverable service error (validation/missing resource)."""


class ValidationError(ServiceError):
    """Client input rejected before anything was written."""


class NotFoundError(ServiceError):
    """A referenced resource does not exist."""
