import io
import logging
import os
import tempfile
import unittest
from unittest import mock

from minishell.config import ShellConfig
from minishell.shell import Shell, complete_builtin
from minishell.state import ShellState
from support import read_file


def make_reader(lines):
    """Feeds the given lines to the shell, then behaves like Ctrl-D."""
    calls = iter(lines)

    def read_line(prompt):
        try:
            item = next(calls)
        except StopIteration:
            raise EOFError
        if isinstance(item, BaseException):
            raise item
        return item

    return read_line


class TestShell(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = os.path.realpath(self.temp_dir.name)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.state = ShellState(
            cwd=self.root, env={"PATH": "/usr/bin:/bin", "HOME": self.root}
        )

    def tearDown(self):
        self.temp_dir.cleanup()

    def make_shell(self, lines=()):
        return Shell(
            config=ShellConfig(use_colors=False),
            state=self.state,
            read_line=make_reader(lines),
            stdout=self.stdout,
            stderr=self.stderr,
        )

    def test_blank_lines_do_nothing(self):
        shell = self.make_shell()
        for line in ["", "   ", "\t \t", "\n"]:
            shell.run_line(line)
        self.assertEqual(self.stdout.getvalue(), "")
        self.assertEqual(self.stderr.getvalue(), "")
        self.assertEqual(self.state.cwd, self.root)
        self.assertEqual(self.state.last_return_code, 0)
        self.assertFalse(self.state.stopped)

    def test_echo_quoting(self):
        self.make_shell().run_line("echo 'a  b' \"c d\"")
        self.assertEqual(self.stdout.getvalue(), "a  b c d\n")

    def test_type(self):
        shell = self.make_shell()
        shell.run_line("type cd")
        shell.run_line("type nonexistent_cmd_xyz")
        self.assertEqual(self.stdout.getvalue(), "cd is a shell builtin\n")
        self.assertEqual(self.stderr.getvalue(), "nonexistent_cmd_xyz: not found\n")

    def test_cd_then_pwd(self):
        os.makedirs(os.path.join(self.root, "holamundo"))
        shell = self.make_shell()
        shell.run_line("cd holamundo")
        shell.run_line("pwd")
        self.assertEqual(self.stdout.getvalue(), os.path.join(self.root, "holamundo") + "\n")

    def test_parse_error_is_reported_and_not_executed(self):
        shell = self.make_shell()
        shell.run_line("echo hi >")
        self.assertEqual(
            self.stderr.getvalue(),
            "minishell: syntax error near unexpected token `newline'\n",
        )
        self.assertEqual(self.stdout.getvalue(), "")
        self.assertEqual(self.state.last_return_code, 2)
        self.assertFalse(self.state.stopped)

    def test_run_until_exit(self):
        shell = self.make_shell(["echo one", "exit 4", "echo never"])
        self.assertEqual(shell.run(), 4)
        self.assertEqual(self.stdout.getvalue(), "one\n")

    def test_zero_is_exit(self):
        shell = self.make_shell(["0", "echo never"])
        self.assertEqual(shell.run(), 0)
        self.assertEqual(self.stdout.getvalue(), "")

    def test_exit_with_redirection_still_exits(self):
        shell = self.make_shell(["exit > out.txt", "echo never"])
        self.assertEqual(shell.run(), 0)
        self.assertEqual(read_file(os.path.join(self.root, "out.txt")), "")

    def test_end_of_input_returns_last_status(self):
        shell = self.make_shell(["nosuch_cmd_xyz"])
        self.assertEqual(shell.run(), 127)
        self.assertEqual(self.stdout.getvalue(), "\n")
        self.assertEqual(self.stderr.getvalue(), "nosuch_cmd_xyz: command not found\n")

    def test_ctrl_c_at_prompt_prompts_again(self):
        shell = self.make_shell([KeyboardInterrupt(), "echo after", "exit"])
        self.assertEqual(shell.run(), 0)
        self.assertEqual(self.stdout.getvalue(), "\nafter\n")

    def test_prompt_is_passed_to_reader(self):
        prompts = []

        def read_line(prompt):
            prompts.append(prompt)
            return "exit"

        shell = Shell(
            config=ShellConfig(prompt="> ", use_colors=False),
            state=self.state,
            read_line=read_line,
            stdout=self.stdout,
            stderr=self.stderr,
        )
        shell.run()
        self.assertEqual(prompts, ["> "])

    def test_unexpected_error_keeps_loop_alive(self):
        shell = self.make_shell(["boom", "echo still here", "exit"])
        original = shell.executor.execute
        calls = []

        def flaky(parsed):
            calls.append(parsed.command)
            if parsed.command == "boom":
                raise RuntimeError("boom")
            return original(parsed)

        with mock.patch.object(shell.executor, "execute", side_effect=flaky):
            with self.assertLogs("minishell.shell", level="ERROR"):
                self.assertEqual(shell.run(), 0)

        self.assertEqual(calls, ["boom", "echo", "exit"])
        self.assertEqual(self.stderr.getvalue(), "minishell: boom\n")
        self.assertEqual(self.stdout.getvalue(), "still here\n")


class TtyStringIO(io.StringIO):
    def isatty(self):
        return True


class TestErrorColors(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.state = ShellState(cwd=self.temp_dir.name, env={"PATH": ""})

    def tearDown(self):
        self.temp_dir.cleanup()

    def run_on_tty(self, use_colors, line):
        stderr = TtyStringIO()
        shell = Shell(
            config=ShellConfig(use_colors=use_colors),
            state=self.state,
            read_line=make_reader([]),
            stdout=TtyStringIO(),
            stderr=stderr,
        )
        shell.run_line(line)
        return stderr.getvalue()

    def test_plain_on_a_terminal_by_default(self):
        shell = Shell(
            config=ShellConfig(),
            state=self.state,
            read_line=make_reader([]),
            stderr=TtyStringIO(),
        )
        shell.run_line("cd /definitely/missing")
        self.assertEqual(
            shell.executor.stderr.getvalue(),
            "cd: /definitely/missing: No such file or directory\n",
        )

    def test_colors_belong_to_each_shell(self):
        colored = self.run_on_tty(True, "nonexistent_cmd_xyz")
        plain = self.run_on_tty(False, "nonexistent_cmd_xyz")
        self.assertEqual(colored, "\x1b[91mnonexistent_cmd_xyz: command not found\x1b[0m\n")
        self.assertEqual(plain, "nonexistent_cmd_xyz: command not found\n")
        # a colored shell made earlier leaves later ones plain
        self.assertEqual(self.run_on_tty(False, "type nope_xyz"), "nope_xyz: not found\n")


class TestCompletion(unittest.TestCase):
    def test_completes_builtin_names(self):
        self.assertEqual(complete_builtin("ec", 0), "echo ")
        self.assertIsNone(complete_builtin("ec", 1))
        self.assertEqual(complete_builtin("c", 0), "cat ")
        self.assertEqual(complete_builtin("c", 1), "cd ")
        self.assertIsNone(complete_builtin("ls", 0))


class TestShellConfig(unittest.TestCase):
    def test_defaults(self):
        config = ShellConfig.from_env({})
        self.assertEqual(config.prompt, "$ ")
        self.assertFalse(config.use_colors)
        self.assertFalse(ShellConfig().use_colors)
        self.assertEqual(config.log_level, logging.WARNING)

    def test_from_env(self):
        config = ShellConfig.from_env(
            {"MINISHELL_PROMPT": "% ", "MINISHELL_COLORS": "on", "MINISHELL_LOG_LEVEL": "debug"}
        )
        self.assertEqual(config.prompt, "% ")
        self.assertTrue(config.use_colors)
        self.assertEqual(config.log_level, logging.DEBUG)

    def test_no_color_and_bad_level(self):
        config = ShellConfig.from_env(
            {"MINISHELL_COLORS": "1", "NO_COLOR": "", "MINISHELL_LOG_LEVEL": "loud"}
        )
        self.assertFalse(config.use_colors)
        self.assertEqual(config.log_level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
