"""Version domain models and errors."""

from .models import Version
from .exceptions import FreezeTransactionError, VersionError

__all__ = [
    "FreezeTransactionError",
    "Version",
    "VersionError",
]
