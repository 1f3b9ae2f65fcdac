"""Version domain specific exceptions."""


class VersionError(Exception):
    """Base class for version domain errors."""


class FreezeTransactionError(VersionError):
    """Raised when the record store step of a freeze fails after the copy succeeded."""
