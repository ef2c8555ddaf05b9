from typing import List, NamedTuple, Optional


class ShellToken(NamedTuple):
    lex: str
    quoted: bool = False

    def __str__(self) -> str:
        return f"ShellToken('{self.lex}', quoted={self.quoted})"


class Redirect(NamedTuple):
    path: str
    append: bool = False


class ParsedCommand:
    """
    Class that represents a parsed command line: name, arguments and the
    redirection targets for stdout and stderr.
    """

    def __init__(
        self,
        command: Optional[str],
        args: List[str] = None,
        stdout: Optional[Redirect] = None,
        stderr: Optional[Redirect] = None,
    ) -> None:
        self.command = command
        self.args = args if args else []
        self.stdout = stdout
        self.stderr = stderr

    @property
    def is_empty(self) -> bool:
        return self.command is None

    def __eq__(self, other) -> bool:
        if not isinstance(other, ParsedCommand):
            return NotImplemented
        return (
            self.command == other.command
            and self.args == other.args
            and self.stdout == other.stdout
            and self.stderr == other.stderr
        )

    def __repr__(self) -> str:
        return (
            f"ParsedCommand({self.command!r}, {self.args}, "
            f"stdout={self.stdout}, stderr={self.stderr})"
        )
