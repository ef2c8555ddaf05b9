class ShellError(Exception):
    """Base class for errors raised by the interpreter."""


class ParseError(ShellError):
    """
    Malformed redirection syntax. The command is never executed.
    """


class RedirectionError(ShellError):
    """
    A redirection target could not be opened.
    """

    def __init__(self, path: str, strerror: str) -> None:
        super().__init__(f"{path}: {strerror}")
        self.path = path
        self.strerror = strerror


class LaunchError(ShellError):
    """
    A resolved executable failed to start.
    """

    def __init__(self, command: str, strerror: str) -> None:
        super().__init__(f"{command}: {strerror}")
        self.command = command
        self.strerror = strerror
