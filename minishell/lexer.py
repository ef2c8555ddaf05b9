import logging
from typing import List

from minishell.ast_tree import ShellToken

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')
WHITESPACE = (" ", "\t", "\n", "\r")


class ShellLexer:
    """
    Class that represents the shell lexer.

    Splits a line into words. Quoted text is kept literally, quote characters
    are dropped and fragments touching each other form a single word, so
    ``foo"bar baz"`` is the word ``foobar baz``. An unterminated quote runs to
    the end of the line.
    """

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.tokens: List[ShellToken] = []
        self.current_token = ""
        self.in_token = False
        self.quote_char = ""
        self.token_was_quoted = False

    def tokenize(self, line: str) -> List[ShellToken]:
        self._reset()

        for char in line:
            if self.quote_char:
                if char == self.quote_char:
                    self.quote_char = ""
                else:
                    self.current_token += char
                continue

            if char in QUOTES:
                self.quote_char = char
                self.in_token = True
                self.token_was_quoted = True
                continue

            if char in WHITESPACE:
                self.add_token()
                continue

            self.current_token += char
            self.in_token = True

        if self.quote_char:
            logger.debug("unterminated %s quote in %r", self.quote_char, line)
        self.add_token()

        tokens = self.tokens
        self._reset()
        return tokens

    def add_token(self) -> None:
        # '' and "" still produce a (empty) word
        if self.in_token:
            self.tokens.append(ShellToken(self.current_token, self.token_was_quoted))
        self.current_token = ""
        self.in_token = False
        self.token_was_quoted = False
        self.quote_char = ""


def tokenize(line: str) -> List[ShellToken]:
    return ShellLexer().tokenize(line)
