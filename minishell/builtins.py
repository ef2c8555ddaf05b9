import logging
import os
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, TextIO

from minishell.colors import print_error
from minishell.resolver import find_all_executables, find_executable
from minishell.state import ShellState

logger = logging.getLogger(__name__)


class Builtin(Enum):
    EXIT = "exit"
    ECHO = "echo"
    PWD = "pwd"
    CD = "cd"
    TYPE = "type"
    CAT = "cat"

    @classmethod
    def lookup(cls, name: Optional[str]) -> Optional["Builtin"]:
        try:
            return cls(name)
        except ValueError:
            return None


class CommandStreams(NamedTuple):
    stdout: TextIO
    stderr: TextIO
    use_colors: bool = False

    def error(self, message: str) -> None:
        print_error(message, self.stderr, self.use_colors)


BuiltinHandler = Callable[[ShellState, List[str], CommandStreams], int]


def _builtin_exit(state: ShellState, args: List[str], io: CommandStreams) -> int:
    if len(args) > 1:
        io.error("exit: too many arguments")
        return 1

    code = 0
    if args:
        try:
            code = int(args[0])
        except ValueError:
            io.error(f"exit: {args[0]}: numeric argument required")
            code = 2

    state.exit_code = code & 0xFF
    return state.exit_code


def _builtin_echo(state: ShellState, args: List[str], io: CommandStreams) -> int:
    print(" ".join(args), file=io.stdout, flush=True)
    return 0


def _builtin_pwd(state: ShellState, args: List[str], io: CommandStreams) -> int:
    print(state.cwd, file=io.stdout, flush=True)
    return 0


def _expand_home(state: ShellState, target: str) -> Optional[str]:
    if target != "~" and not target.startswith("~/"):
        return target
    if state.home is None:
        return None
    return state.home + target[1:]


def _builtin_cd(state: ShellState, args: List[str], io: CommandStreams) -> int:
    if len(args) > 1:
        io.error("cd: too many arguments")
        return 1

    target = args[0] if args else "~"
    expanded = _expand_home(state, target)
    if expanded is None:
        io.error("cd: HOME not set")
        return 1

    new_dir = state.resolve(expanded)
    if not os.path.exists(new_dir):
        io.error(f"cd: {target}: No such file or directory")
        return 1
    if not os.path.isdir(new_dir):
        io.error(f"cd: {target}: Not a directory")
        return 1
    if not os.access(new_dir, os.X_OK):
        io.error(f"cd: {target}: Permission denied")
        return 1

    logger.debug("cd %s -> %s", state.cwd, new_dir)
    state.cwd = new_dir
    return 0


def _builtin_type(state: ShellState, args: List[str], io: CommandStreams) -> int:
    show_all = False
    while args and args[0] == "-a":
        show_all = True
        args = args[1:]

    if not args:
        io.error("type: usage: type [-a] name [name ...]")
        return 2

    status = 0
    for name in args:
        found = False
        if Builtin.lookup(name) is not None:
            print(f"{name} is a shell builtin", file=io.stdout)
            found = True
            if not show_all:
                continue

        if show_all:
            paths = find_all_executables(name, state.env, state.cwd)
        else:
            path = find_executable(name, state.env, state.cwd)
            paths = [path] if path else []

        for path in paths:
            print(f"{name} is {path}", file=io.stdout)
            found = True

        if not found:
            io.error(f"{name}: not found")
            status = 1

    io.stdout.flush()
    return status


def _write_raw(stream: TextIO, data: bytes) -> None:
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(data.decode("utf-8", errors="replace"))
        return
    stream.flush()
    buffer.write(data)
    buffer.flush()


def _builtin_cat(state: ShellState, args: List[str], io: CommandStreams) -> int:
    status = 0
    for name in args:
        try:
            with open(state.resolve(name), "rb") as f:
                data = f.read()
        except FileNotFoundError:
            io.error(f"cat: {name}: No such file or directory")
            status = 1
            continue
        except IsADirectoryError:
            io.error(f"cat: {name}: Is a directory")
            status = 1
            continue
        except OSError as e:
            io.error(f"cat: {name}: {e.strerror}")
            status = 1
            continue

        _write_raw(io.stdout, data)

    io.stdout.flush()
    return status


BUILTINS: Dict[Builtin, BuiltinHandler] = {
    Builtin.EXIT: _builtin_exit,
    Builtin.ECHO: _builtin_echo,
    Builtin.PWD: _builtin_pwd,
    Builtin.CD: _builtin_cd,
    Builtin.TYPE: _builtin_type,
    Builtin.CAT: _builtin_cat,
}

if set(BUILTINS) != set(Builtin):
    raise RuntimeError(
        f"builtins without a handler: {sorted(b.value for b in set(Builtin) - set(BUILTINS))}"
    )


def run_builtin(
    builtin: Builtin,
    state: ShellState,
    args: List[str],
    stdout: TextIO,
    stderr: TextIO,
    use_colors: bool = False,
) -> int:
    return BUILTINS[builtin](state, args, CommandStreams(stdout, stderr, use_colors))
