"""Tests for the dispatch loop, line reading and scratch files."""

import io
import os
from collections.abc import Callable

import pytest

from simplecli.commands import CommandRegistry
from simplecli.config.schema import SimpleCLIConfig
from simplecli.exceptions import TokenizeError
from simplecli.output.plain import PlainFormatter
from simplecli.script.environment import ScriptEnvironment
from simplecli.shell import LineInterrupt, Shell, ShellState, StreamReader, scratch_file


class ScriptedReader:
    """Replays lines, interrupts and end of input."""

    def __init__(self, *events: str | BaseException) -> None:
        self.events = list(events)
        self.prompts: list[str] = []

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.events:
            raise EOFError
        event = self.events.pop(0)
        if isinstance(event, BaseException):
            raise event
        return event


@pytest.fixture
def make_shell(
    make_env: Callable[[str], ScriptEnvironment],
    formatter: PlainFormatter,
    default_config: SimpleCLIConfig,
) -> Callable[..., Shell]:
    def _make(source: str, *events: str | BaseException) -> Shell:
        env = make_env(source)
        registry = CommandRegistry.from_environment(env, default_config.commands)
        return Shell(env, registry, ScriptedReader(*events), formatter, default_config)

    return _make


class TestRun:
    """Tests for the loop's states and exits."""

    def test_eof_stops(self, make_shell) -> None:
        shell = make_shell("")

        assert shell.run() == 0
        assert shell.state is ShellState.STOPPED

    def test_interrupt_on_empty_line_stops(self, make_shell, stdout) -> None:
        shell = make_shell(
            "def do_hi(args):\n    cli_variable('seen', 'yes')\n",
            LineInterrupt(""),
            "hi",
        )
        shell.run()

        assert stdout.getvalue() == ""

    def test_interrupt_with_text_discards_line(self, make_shell, stdout) -> None:
        shell = make_shell(
            "def do_hi(args):\n    cli_variable('seen', 'yes')\n",
            LineInterrupt("partial"),
            "hi",
        )
        shell.run()

        assert stdout.getvalue() == "seen=yes\n"

    def test_banner_printed_once(self, make_shell, stdout) -> None:
        shell = make_shell("def banner():\n    return 'Example CLI'\n", "", "  ")
        shell.run()

        assert stdout.getvalue() == "Example CLI\n"

    def test_banner_failure_reported(self, make_shell, stderr) -> None:
        shell = make_shell("def banner():\n    raise ValueError('no banner')\n")

        assert shell.run() == 0
        assert "no banner" in stderr.getvalue()

    def test_banner_exit_contained(self, make_shell, stderr) -> None:
        shell = make_shell(
            "import sys\n"
            "def banner():\n"
            "    sys.exit(2)\n"
            "def do_hi(args):\n"
            "    cli_variable('seen', 'yes')\n",
            "hi",
        )

        assert shell.run() == 0
        assert shell.env.get("seen") == "yes"
        assert "Error in banner(): SystemExit: 2" in stderr.getvalue()

    def test_prompt_exit_keeps_previous(self, make_shell, stderr) -> None:
        shell = make_shell(
            "def prompt():\n"
            "    raise SystemExit('bye')\n",
            "",
        )

        assert shell.run() == 0
        assert shell.reader.prompts == ["> ", "> "]
        assert "SystemExit: bye" in stderr.getvalue()

    def test_prompt_function(self, make_shell) -> None:
        shell = make_shell(
            "n = 0\n"
            "def prompt():\n"
            "    global n\n"
            "    n += 1\n"
            "    return f'{n}> '\n",
            "",
            "",
        )
        shell.run()

        assert shell.reader.prompts == ["1> ", "2> ", "3> "]

    def test_static_prompt(self, make_shell) -> None:
        shell = make_shell("", "")
        shell.run()

        assert shell.reader.prompts == ["> ", "> "]

    def test_prompt_failure_keeps_previous(self, make_shell, stderr) -> None:
        shell = make_shell(
            "calls = 0\n"
            "def prompt():\n"
            "    global calls\n"
            "    calls += 1\n"
            "    if calls > 1:\n"
            "        raise RuntimeError('bad prompt')\n"
            "    return 'first> '\n",
            "",
        )
        shell.run()

        assert shell.reader.prompts == ["first> ", "first> "]
        assert "bad prompt" in stderr.getvalue()


class TestDispatch:
    """Tests for routing one line."""

    SCRIPT = (
        "received = []\n"
        "def do_echo(args):\n"
        "    received.append(args)\n"
        "def do_fail(args):\n"
        "    raise RuntimeError('kaput')\n"
        "def do_quit(args):\n"
        "    raise SystemExit(3)\n"
        "def do_help(args):\n"
        "    received.append('overridden')\n"
    )

    @pytest.fixture
    def shell(self, make_shell) -> Shell:
        return make_shell(self.SCRIPT)

    def test_shell_word_splitting(self, shell: Shell) -> None:
        shell.dispatch("""  echo plain "two words" 'single quoted' esc\\ aped  """)

        assert shell.env.get("received") == [
            ["plain", "two words", "single quoted", "esc aped"]
        ]

    def test_no_arguments(self, shell: Shell) -> None:
        shell.dispatch("echo")
        assert shell.env.get("received") == [[]]

    def test_blank_line(self, shell: Shell, stdout, stderr) -> None:
        shell.dispatch("   ")
        assert stdout.getvalue() == stderr.getvalue() == ""

    def test_bad_quoting(self, shell: Shell, stderr) -> None:
        shell.dispatch('echo "unterminated')

        assert shell.env.get("received") == []
        assert "Error splitting up command string" in stderr.getvalue()

    def test_tokenize_error(self) -> None:
        with pytest.raises(TokenizeError):
            Shell.tokenize("echo 'open")

    def test_unknown_command(self, shell: Shell, stderr) -> None:
        shell.dispatch("frobnicate now")
        assert stderr.getvalue() == "Unknown command: frobnicate\n"

    def test_failure_contained(self, shell: Shell, stderr) -> None:
        shell.dispatch("fail")
        shell.dispatch("echo after")

        assert "fail: RuntimeError: kaput" in stderr.getvalue()
        assert shell.env.get("received") == [["after"]]

    def test_system_exit_contained(self, shell: Shell, stderr) -> None:
        shell.dispatch("quit")
        assert "quit: SystemExit: 3" in stderr.getvalue()

    def test_keyboard_interrupt_contained(self, make_shell, stderr) -> None:
        shell = make_shell("def do_slow(args):\n    raise KeyboardInterrupt\n")
        shell.dispatch("slow")
        assert "slow: interrupted" in stderr.getvalue()

    def test_help_is_reserved(self, shell: Shell, stdout) -> None:
        shell.dispatch("help")

        assert "overridden" not in shell.env.get("received")
        assert stdout.getvalue().splitlines() == [
            "Available commands:",
            "echo",
            "fail",
            "help",
            "quit",
        ]


class TestHelp:
    """Tests for the help verb."""

    def test_list_without_help_text(self, make_shell, stdout) -> None:
        shell = make_shell("def do_b(args): pass\ndef do_a(args): pass\n")
        shell.dispatch("help")

        assert stdout.getvalue() == "Available commands:\na\nb\n"

    def test_command_help(self, make_shell, stdout) -> None:
        shell = make_shell(
            'def do_hello(args): pass\n'
            'help_hello = """\n'
            "    A simple hello world command\n"
            "\n"
            "    Usage: hello ARG\n"
            '"""\n'
        )
        shell.dispatch("help hello")

        assert stdout.getvalue() == (
            "A simple hello world command\n\nUsage: hello ARG\n"
        )

    def test_no_help(self, make_shell, stderr) -> None:
        shell = make_shell("def do_hello(args): pass\n")
        shell.dispatch("help hello")

        assert stderr.getvalue() == "No help for command: hello\n"

    def test_non_string_help(self, make_shell, stdout, stderr) -> None:
        shell = make_shell("def do_x(args): pass\nhelp_x = 3\n")
        shell.dispatch("help x")

        assert stdout.getvalue() == ""
        assert stderr.getvalue() == "No help for command: x\n"

    def test_failing_help_function(self, make_shell, stderr) -> None:
        shell = make_shell("def help_x():\n    raise ValueError('nope')\n")
        shell.dispatch("help x")

        assert "help_x: nope" in stderr.getvalue()


class TestScratchFile:
    """Tests for the scratch file around two-parameter commands."""

    SCRIPT = (
        "seen = {}\n"
        "def do_probe(args, tempfile):\n"
        "    import os\n"
        "    seen['path'] = tempfile\n"
        "    seen['exists'] = os.path.exists(tempfile)\n"
        "    seen['size'] = os.path.getsize(tempfile)\n"
        "    if args and args[0] == 'fail':\n"
        "        raise RuntimeError('probe failed')\n"
        "    if args and args[0] == 'delete':\n"
        "        os.remove(tempfile)\n"
    )

    @pytest.mark.parametrize("mode", ["ok", "fail", "delete"])
    def test_lifecycle(self, make_shell, stderr, mode: str) -> None:
        shell = make_shell(self.SCRIPT)
        shell.dispatch(f"probe {mode}")

        seen = shell.env.get("seen")
        assert seen["exists"] is True
        assert seen["size"] == 0
        assert not os.path.exists(seen["path"])
        if mode == "fail":
            assert "probe failed" in stderr.getvalue()
        else:
            assert stderr.getvalue() == ""

    def test_prefix(self, make_shell) -> None:
        shell = make_shell(self.SCRIPT)
        shell.dispatch("probe")

        assert os.path.basename(shell.env.get("seen")["path"]).startswith("simplecli")

    def test_context_manager(self) -> None:
        with scratch_file("unit") as path:
            assert os.path.getsize(path) == 0
            with open(path, "w") as f:
                f.write("data")
        assert not os.path.exists(path)

    def test_context_manager_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with scratch_file() as path:
                raise RuntimeError("boom")
        assert not os.path.exists(path)


class TestStreamReader:
    """Tests for the non-interactive reader."""

    def test_lines_then_eof(self) -> None:
        prompts = io.StringIO()
        reader = StreamReader(io.StringIO("one\r\ntwo\n"), prompt_stream=prompts)

        assert reader.read_line("> ") == "one"
        assert reader.read_line("> ") == "two"
        with pytest.raises(EOFError):
            reader.read_line("> ")
        assert prompts.getvalue() == "> > > "


class TestEndToEnd:
    """Whole sessions through the loop."""

    SCRIPT = (
        "myvar = 'default'\n"
        "cwd = '/'\n"
        "def do_myvar(args):\n"
        "    cli_variable('myvar', args[0] if args else '')\n"
        "def do_debug(args):\n"
        "    cli_toggle('debug_mode')\n"
        "def do_cd(args):\n"
        "    cli_cd('cwd', args[0] if args else '')\n"
        "def do_template(args):\n"
        "    local_value = 'L'\n"
        "    print_line(t('{{myvar}} {{local_value}} {{args[0]}} {{missing}}|'))\n"
    )

    def run_session(
        self,
        make_env,
        formatter: PlainFormatter,
        default_config: SimpleCLIConfig,
        text: str,
    ) -> ScriptEnvironment:
        env = make_env(self.SCRIPT)
        registry = CommandRegistry.from_environment(env)
        reader = StreamReader(io.StringIO(text))
        Shell(env, registry, reader, formatter, default_config).run()
        return env

    def test_variable_persists(
        self, make_env, formatter, default_config, stdout
    ) -> None:
        self.run_session(make_env, formatter, default_config, "myvar foo\nmyvar\n")
        assert stdout.getvalue() == "myvar=foo\nmyvar=foo\n"

    def test_toggle_twice(self, make_env, formatter, default_config, stdout) -> None:
        self.run_session(make_env, formatter, default_config, "debug\ndebug\n")
        assert stdout.getvalue() == "debug_mode=true\ndebug_mode=false\n"

    def test_cd(self, make_env, formatter, default_config, stdout) -> None:
        self.run_session(make_env, formatter, default_config, "cd a/b\ncd ..\ncd .\n")
        assert stdout.getvalue() == "cwd=/a/b/\ncwd=/a/\ncwd=/a/\n"

    def test_template(self, make_env, formatter, default_config) -> None:
        lines: list[str] = []
        env = make_env(self.SCRIPT)
        env.set("print_line", lines.append)
        registry = CommandRegistry.from_environment(env)
        reader = StreamReader(io.StringIO("myvar bar\ntemplate first\n"))
        Shell(env, registry, reader, formatter, default_config).run()

        assert lines == ["bar L first |"]
