import logging
import os
import subprocess
import sys
from typing import List, Optional, TextIO

from minishell.ast_tree import ParsedCommand, Redirect
from minishell.builtins import Builtin, run_builtin
from minishell.colors import print_error
from minishell.errors import LaunchError, RedirectionError
from minishell.resolver import find_executable
from minishell.state import ShellState

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127
CANNOT_EXECUTE = 126


class CommandExecutor:
    """
    Class that represents the command executor.

    Runs one parsed command at a time: builtins in process, anything else as
    a child process the executor waits for. Redirection files live for a
    single command and are always closed before ``execute`` returns.
    """

    def __init__(
        self,
        state: Optional[ShellState] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        use_colors: bool = False,
    ) -> None:
        self.state = state if state is not None else ShellState()
        self._stdout = stdout
        self._stderr = stderr
        self.use_colors = use_colors

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def report(self, message: str, stream: Optional[TextIO] = None) -> None:
        stream = stream if stream is not None else self.stderr
        print_error(message, stream, self.use_colors)

    def execute(self, cmd: ParsedCommand) -> int:
        if cmd.is_empty:
            return self.state.last_return_code

        handles: List[TextIO] = []
        try:
            try:
                err_file = self._open_redirect(cmd.stderr, handles)
                out_file = self._open_redirect(cmd.stdout, handles)
            except RedirectionError as e:
                # stderr is opened first, so a failed stdout reports into it
                self.report(f"minishell: {e}", handles[0] if handles else self.stderr)
                return_code = 1
            else:
                return_code = self._execute_command(cmd, out_file, err_file)
        finally:
            self._close_all(handles)

        self.state.last_return_code = return_code
        return return_code

    def _execute_command(
        self, cmd: ParsedCommand, out_file: Optional[TextIO], err_file: Optional[TextIO]
    ) -> int:
        stdout = out_file or self.stdout
        stderr = err_file or self.stderr

        builtin = Builtin.lookup(cmd.command)
        if builtin is not None:
            logger.debug("builtin %s %s", builtin.value, cmd.args)
            return run_builtin(
                builtin, self.state, cmd.args, stdout, stderr, self.use_colors
            )

        path = find_executable(cmd.command, self.state.env, self.state.cwd)
        if path is None:
            self.report(f"{cmd.command}: command not found", stderr)
            return COMMAND_NOT_FOUND

        try:
            return self._spawn_process(cmd, path, out_file, err_file)
        except LaunchError as e:
            self.report(f"minishell: {e}", stderr)
            return CANNOT_EXECUTE

    def _spawn_process(
        self,
        cmd: ParsedCommand,
        path: str,
        out_file: Optional[TextIO],
        err_file: Optional[TextIO],
    ) -> int:
        # keep our own output ahead of the child's on a shared terminal
        self.stdout.flush()
        self.stderr.flush()

        logger.debug("launching %s as %r with %s", path, cmd.command, cmd.args)
        try:
            process = subprocess.Popen(
                [cmd.command] + cmd.args,
                executable=os.path.join(self.state.cwd, path),
                stdout=out_file,
                stderr=err_file,
                cwd=self.state.cwd,
                env=self.state.env,
            )
        except OSError as e:
            raise LaunchError(cmd.command, e.strerror or str(e)) from e

        while True:
            try:
                process.wait()
                break
            except KeyboardInterrupt:
                # the child got the same SIGINT, keep waiting until it is gone
                continue

        return_code = process.returncode
        if return_code < 0:
            return_code = 128 - return_code
        logger.debug("%s exited with %d", cmd.command, return_code)
        return return_code

    def _open_redirect(
        self,
        redirect: Optional[Redirect],
        handles: List[TextIO],
    ) -> Optional[TextIO]:
        if redirect is None:
            return None

        # a trailing slash always names a directory
        if redirect.path.endswith(os.sep):
            raise RedirectionError(redirect.path, "Is a directory")

        path = self.state.resolve(redirect.path)
        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            f = open(path, "a" if redirect.append else "w", encoding="utf-8")
        except OSError as e:
            raise RedirectionError(redirect.path, e.strerror or str(e)) from e

        handles.append(f)
        return f

    @staticmethod
    def _close_all(handles: List[TextIO]) -> None:
        for f in handles:
            try:
                f.close()
            except OSError as e:
                logger.warning("could not close %s: %s", getattr(f, "name", f), e)
