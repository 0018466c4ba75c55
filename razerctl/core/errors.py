"""Domain-specific errors for razerctl."""


class RazerctlError(Exception):
    """Base error for razerctl."""


class ConfigValidationError(RazerctlError):
    """Raised when the config file does not conform to schema or semantics."""


class ConfigLoadError(RazerctlError):
    """Raised when reading the config file fails."""


class EnumerationError(RazerctlError):
    """Raised when the device bus cannot be opened or scanned."""


class DeviceNotFoundError(RazerctlError):
    """Raised when a serial lookup yields no device."""

    def __init__(self, serial: str) -> None:
        super().__init__(f"device with serial `{serial}` not found")
        self.serial = serial


class DeviceAttributeError(RazerctlError):
    """Base error for a single named attribute."""

    kind = "attribute_error"

    def __init__(self, attribute: str, message: str) -> None:
        super().__init__(f"{attribute}: {message}")
        self.attribute = attribute


class MissingAttributeError(DeviceAttributeError):
    """Raised when a mandatory attribute is not reported by the device."""

    kind = "missing_attribute"


class InvalidAttributeError(DeviceAttributeError):
    """Raised when a reported attribute violates its wire format."""

    kind = "invalid_attribute"


class UnsupportedValueError(InvalidAttributeError):
    """Raised when a value is outside the attribute's closed set of values."""

    kind = "unsupported_value"


class AttributeReadError(DeviceAttributeError):
    """Raised when the attribute store fails to read a reported attribute."""

    kind = "read_failed"


class WriteRejectedError(DeviceAttributeError):
    """Raised when the attribute store refuses a write."""

    kind = "write_rejected"


class UnknownAttributeError(DeviceAttributeError):
    """Raised when an attribute is not known or not writable."""

    kind = "unknown_attribute"
