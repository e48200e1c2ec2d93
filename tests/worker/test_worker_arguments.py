"""
Unit tests for worker argument derivation.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from forkserver.config.assembler import assemble
from forkserver.config.settings import ServerConfig
from forkserver.worker import arguments
from forkserver.worker.arguments import escape_command_line
from forkserver.worker.arguments import forked_process_args


@pytest.mark.unit
class TestForkedProcessArgs:
    """Test the argument list for a new worker."""

    def test_without_config_file(self) -> None:
        """Test only port and id are passed when no file was used."""
        config = assemble({"p": "7000", "h": "0.0.0.0", "i": "worker-1"})

        args = forked_process_args(config, config.port, config.id)

        assert args == ["-p", "7000", "-i", "worker-1"]

    def test_uses_given_port_and_id(self) -> None:
        """Test the caller's port and id win over the config's."""
        args = forked_process_args(ServerConfig(port=1), 9100, "child-7")

        assert args == ["-p", "9100", "-i", "child-7"]

    def test_with_config_file(self, write_config: Callable[..., Path]) -> None:
        """Test the absolute config path is passed with -c."""
        path = write_config("<host>example.com</host>")
        config = assemble({"c": str(path)})

        args = forked_process_args(config, 9998, "worker-2")

        assert args == ["-p", "9998", "-i", "worker-2", "-c", str(path.absolute())]

    def test_relative_config_path_made_absolute(self) -> None:
        """Test a relative config path is resolved against the working directory."""
        config = ServerConfig(config_path=Path("conf/server.xml"))

        args = forked_process_args(config, 9998, "w")

        assert Path(args[-1]).is_absolute()
        assert args[-1].endswith(str(Path("conf/server.xml")))

    def test_parent_only_settings_not_passed(self, write_config: Callable[..., Path]) -> None:
        """Test timeouts and restart policy stay out of the worker's arguments."""
        path = write_config("<taskTimeoutMillis>5</taskTimeoutMillis><maxRestarts>2</maxRestarts>")
        config = assemble({"c": str(path), "numRestarts": "1"})

        args = forked_process_args(config, 9998, "w")

        assert args[:4] == ["-p", "9998", "-i", "w"]
        assert args[4] == "-c"
        assert len(args) == 6

    def test_deterministic(self, write_config: Callable[..., Path]) -> None:
        """Test loading the same file twice derives the same arguments."""
        path = write_config("<host>example.com</host><port>8080</port>")

        first = forked_process_args(assemble({"c": str(path)}), 8080, "w")
        second = forked_process_args(assemble({"c": str(path)}), 8080, "w")

        assert first == second


@pytest.mark.unit
class TestEscapeCommandLine:
    """Test escaping of a single argument."""

    def test_unchanged_on_posix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test arguments pass through when no shell quoting is needed."""
        monkeypatch.setattr(arguments, "IS_WINDOWS", False)

        assert escape_command_line("/path/with space/config.xml") == "/path/with space/config.xml"

    def test_quotes_spaces_on_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test paths with spaces are quoted on Windows."""
        monkeypatch.setattr(arguments, "IS_WINDOWS", True)

        assert escape_command_line(r"C:\Program Files\config.xml") == r'"C:\Program Files\config.xml"'

    def test_already_quoted_left_alone_on_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an already quoted argument isn't quoted twice."""
        monkeypatch.setattr(arguments, "IS_WINDOWS", True)

        assert escape_command_line('"C:\\a b\\c.xml"') == '"C:\\a b\\c.xml"'

    def test_no_spaces_unchanged_on_windows(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test arguments without spaces are left alone."""
        monkeypatch.setattr(arguments, "IS_WINDOWS", True)

        assert escape_command_line(r"C:\conf\config.xml") == r"C:\conf\config.xml"
