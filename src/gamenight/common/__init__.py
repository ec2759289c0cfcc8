from . import tables
from .errors import (
    ConflictError,
    ConstraintViolation,
    GameNightError,
    NotFound,
    StoreError,
    ValidationError,
)
from .store import Store

__all__ = [
    "tables",
    "Store",
    "GameNightError",
    "ValidationError",
    "ConflictError",
    "NotFound",
    "StoreError",
    "ConstraintViolation",
]
