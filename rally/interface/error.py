"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """The operation needs a signed-in viewer."""

    def __init__(self) -> None:
        super().__init__("Authentication required")
