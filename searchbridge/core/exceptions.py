__all__ = [
    "BaseError",
    "BadRequestError",
    "ConflictError",
    "InternalError",
    "LoadError",
    "MalformedInputError",
    "NotFoundError",
    "NotSupportedError",
]


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class MalformedInputError(BadRequestError):
    """Predicate input rejected before any engine call."""

    status_code = 422


class NotFoundError(BaseError):
    status_code = 404


class ConflictError(BaseError):
    status_code = 409


class NotSupportedError(BaseError):
    status_code = 415


class InternalError(Exception):
    status_code = 500


class LoadError(Exception):
    status_code = 500
