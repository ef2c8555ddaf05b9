from minishell.ast_tree import ParsedCommand, Redirect, ShellToken
from minishell.executer import CommandExecutor
from minishell.lexer import ShellLexer
from minishell.parser import ShellParser
from minishell.shell import Shell, main
from minishell.state import ShellState

__version__ = "1.0.0"

__all__ = [
    "CommandExecutor",
    "ParsedCommand",
    "Redirect",
    "Shell",
    "ShellLexer",
    "ShellParser",
    "ShellState",
    "ShellToken",
    "main",
]
