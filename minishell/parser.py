from typing import Dict, List, Optional, Tuple

from minishell.ast_tree import ParsedCommand, Redirect, ShellToken
from minishell.errors import ParseError

# operator -> (stream, append)
REDIRECT_OPERATORS: Dict[str, Tuple[str, bool]] = {
    ">": ("stdout", False),
    "1>": ("stdout", False),
    ">>": ("stdout", True),
    "1>>": ("stdout", True),
    "2>": ("stderr", False),
    "2>>": ("stderr", True),
}


class ShellParser:
    """
    Class that represents the shell parser.

    Takes the lexer tokens out of the redirection operators and their file
    names. The first remaining word is the command, the rest are its
    arguments in their original order.
    """

    def __init__(self, tokens: List[ShellToken]) -> None:
        self.tokens = tokens
        self.pos = 0

    def parse(self) -> ParsedCommand:
        command: Optional[str] = None
        args: List[str] = []
        redirects: Dict[str, Redirect] = {}

        while self.pos < len(self.tokens):
            token = self.consume_any()

            if self.is_operator(token):
                stream, append = REDIRECT_OPERATORS[token.lex]
                target = self._redirect_target()
                # a later redirection of the same stream replaces the earlier one
                redirects[stream] = Redirect(target.lex, append)
            elif command is None:
                command = token.lex
            else:
                args.append(token.lex)

        if command is None and redirects:
            raise ParseError("syntax error: missing command")

        return ParsedCommand(
            command, args, redirects.get("stdout"), redirects.get("stderr")
        )

    def _redirect_target(self) -> ShellToken:
        if self.pos >= len(self.tokens):
            raise ParseError("syntax error near unexpected token `newline'")
        if self.is_operator(self.peek()):
            raise ParseError(
                f"syntax error near unexpected token `{self.peek().lex}'"
            )
        return self.consume_any()

    @staticmethod
    def is_operator(token: ShellToken) -> bool:
        return not token.quoted and token.lex in REDIRECT_OPERATORS

    def peek(self) -> Optional[ShellToken]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def consume_any(self) -> ShellToken:
        token = self.tokens[self.pos]
        self.pos += 1
        return token
