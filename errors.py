class EnergyError(Exception):
    """Base class for errors raised by the consumption pipeline."""


class NotFound(EnergyError):
    """Raised when a device or record does not exist."""

    def __init__(self, what, key):
        self.what = what
        self.key = key
        super().__init__(f"{what} not found: {key}")


class StoreError(EnergyError):
    """Raised when a read or write against the consumption store fails."""

    def __init__(self, operation, cause):
        self.operation = operation
        self.cause = cause
        super().__init__(f"store {operation} failed: {cause}")


class ValidationError(EnergyError):
    """Raised for malformed input such as a bad month token."""

    def __init__(self, field, value, reason):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {field} {value!r}: {reason}")


class ReadingError(EnergyError):
    """Raised when the reading source cannot deliver a device's counter."""

    def __init__(self, device_id, cause):
        self.device_id = device_id
        self.cause = cause
        super().__init__(f"reading {device_id} failed: {cause}")
