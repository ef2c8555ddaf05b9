import argparse
import logging
import readline
import sys
from typing import Callable, List, Optional, TextIO

from minishell.ast_tree import ParsedCommand
from minishell.builtins import Builtin
from minishell.config import ShellConfig
from minishell.errors import ParseError
from minishell.executer import CommandExecutor
from minishell.lexer import ShellLexer
from minishell.parser import ShellParser
from minishell.state import ShellState

logger = logging.getLogger(__name__)

# a line holding only this word is read as ``exit 0``
EXIT_SYNONYM = "0"


class Shell:
    """
    Read-eval loop. Reads a line, runs it to completion, then prompts again
    until ``exit`` or end of input.
    """

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        state: Optional[ShellState] = None,
        read_line: Optional[Callable[[str], str]] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.config = config if config is not None else ShellConfig.from_env()
        self.state = state if state is not None else ShellState()
        self.read_line = read_line if read_line is not None else input
        self.lexer = ShellLexer()
        self.executor = CommandExecutor(
            self.state, stdout, stderr, use_colors=self.config.use_colors
        )

    def parse(self, line: str) -> ParsedCommand:
        tokens = self.lexer.tokenize(line)
        logger.debug("tokens: %s", [str(t) for t in tokens])
        parsed = ShellParser(tokens).parse()
        if parsed.command == EXIT_SYNONYM and not parsed.args:
            parsed.command = "exit"
        return parsed

    def run_line(self, line: str) -> None:
        if not line.strip():
            return

        try:
            parsed = self.parse(line)
        except ParseError as e:
            self.executor.report(f"minishell: {e}")
            self.state.last_return_code = 2
            return

        try:
            self.executor.execute(parsed)
        except Exception as e:
            logger.exception("unexpected error running %r", line)
            self.executor.report(f"minishell: {e}")
            self.state.last_return_code = 1

    def run(self) -> int:
        while not self.state.stopped:
            try:
                line = self.read_line(self.config.prompt)
            except EOFError:
                print(file=self.executor.stdout)
                self.state.exit_code = self.state.last_return_code
                break
            except KeyboardInterrupt:
                print(file=self.executor.stdout)
                continue

            self.run_line(line)

        return self.state.exit_code


def complete_builtin(text: str, index: int) -> Optional[str]:
    """readline completer over the builtin names."""
    matches = sorted(b.value for b in Builtin if b.value.startswith(text))
    if index < len(matches):
        return matches[index] + " "
    return None


def setup_completion() -> None:
    readline.set_completer(complete_builtin)
    readline.set_completer_delims(" \t\n")
    readline.parse_and_bind("tab: complete")
    readline.parse_and_bind("set enable-bracketed-paste off")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="minishell")
    parser.add_argument(
        "--color", action="store_true", help="print error messages in red on a terminal"
    )
    args = parser.parse_args(argv)

    config = ShellConfig.from_env()
    if args.color:
        config.use_colors = True

    logging.basicConfig(
        level=config.log_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if sys.stdin.isatty():
        setup_completion()

    sys.exit(Shell(config).run())
