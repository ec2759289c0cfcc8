class GameNightError(Exception):
    category = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GameNightError):
    """Bad caller input. Raised before the store is touched."""

    category = "invalid_input"


class ConflictError(GameNightError):
    category = "conflict"


class NotFound(GameNightError):
    category = "not_found"


class StoreError(GameNightError):
    """
    The store failed to run a statement.
    The driver's exception is kept as `cause` and should be logged, not shown
    to callers.
    """

    category = "internal"

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ConstraintViolation(StoreError):
    pass
