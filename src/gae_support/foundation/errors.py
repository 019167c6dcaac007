"""Foundation-layer error definitions."""


class GaeSupportError(Exception):
    """Base class for gae-support errors."""


class BindingResolutionError(GaeSupportError, LookupError):
    """Raised when the container has no binding for a requested key."""

    def __init__(self, key: object) -> None:
        super().__init__(f"No binding registered for {key!r}.")
        self.key = key


class MissingLogTransportError(GaeSupportError):
    """Raised when the flexible runtime is detected without a log transport."""

    def __init__(self) -> None:
        super().__init__("The flexible runtime needs a log transport for remote logging.")
