"""Asset domain specific exceptions."""


class AssetError(Exception):
    """Base class for asset domain errors."""


class AssetNotFoundError(AssetError):
    """Raised when the requested asset cannot be found."""


class MissingUploadError(AssetError):
    """Raised when an upload request carries no file."""


class UploadTooLargeError(AssetError):
    """Raised when an upload exceeds the configured size limit."""


class PublishConflictError(AssetError):
    """Raised when another publish moved the current version pointer first."""


class ForeignVersionError(AssetError, ValueError):
    """Raised when a version is attached to an asset that does not own it."""
