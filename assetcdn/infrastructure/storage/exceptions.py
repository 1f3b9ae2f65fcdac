"""Object store errors."""


class StoreUnavailableError(Exception):
    """Raised when the object store cannot complete a read, write or copy."""

    def __init__(self, operation: str, key: str, reason: object = None) -> None:
        self.operation = operation
        self.key = key
        message = f"object store {operation} failed for {key}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
