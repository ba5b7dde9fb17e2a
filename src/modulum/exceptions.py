"""Custom exceptions for the modulum registry."""


class RegistrationError(Exception):
    """Raised when a module definition is malformed.

    Only ``define`` and the registration helpers raise this. Resolving a
    module never raises; failures are reported through ``None`` results and
    notifications instead.

    Args:
        message: Description of the problem.
        key: The normalized key of the offending definition, when known.

    Examples:
        >>> raise RegistrationError("Factory requires a callable")
        Traceback (most recent call last):
            ...
        modulum.exceptions.RegistrationError: Factory requires a callable
    """

    def __init__(self, message: str, key: "str | None" = None) -> None:
        if key:
            message = f"{message} (module: {key})"
        super().__init__(message)
        self.key = key
