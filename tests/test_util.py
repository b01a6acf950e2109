import subprocess
import sys
from unittest import mock

import pytest

from go101 import util


def test_bytes_with_length_truncates():
    assert util.bytes_with_length(b"abcdef", 3) == b"abc"


def test_bytes_with_length_shorter_than_limit():
    assert util.bytes_with_length(b"abc", 256) == b"abc"


def test_bytes_with_length_works_on_str():
    text = "x" * 300
    assert len(util.bytes_with_length(text, 256)) == 256


@pytest.mark.parametrize(
    "host, expected",
    [
        ("localhost:55555", True),
        ("localhost", True),
        ("127.0.0.1:55555", False),
        ("example.com", False),
        ("", False),
    ],
)
def test_is_local_request(host, expected):
    assert util.is_local_request(host) is expected


def test_run_shell_command_returns_output():
    out = util.run_shell_command(30, None, sys.executable, "-c", "print('hi')")
    assert out.strip() == b"hi"


def test_run_shell_command_uses_cwd(tmp_path):
    out = util.run_shell_command(
        30, str(tmp_path), sys.executable, "-c", "import os; print(os.getcwd())"
    )
    assert out.decode().strip() == str(tmp_path.resolve()) or out.decode().strip() == str(tmp_path)


def test_run_shell_command_failure_raises():
    with pytest.raises(subprocess.CalledProcessError):
        util.run_shell_command(30, None, sys.executable, "-c", "import sys; sys.exit(3)")


def test_run_shell_command_timeout_raises():
    with pytest.raises(subprocess.TimeoutExpired):
        util.run_shell_command(0.2, None, sys.executable, "-c", "import time; time.sleep(5)")


def test_git_pull_returns_output_on_success():
    done = subprocess.CompletedProcess(["git", "pull"], 0, stdout=b"up to date", stderr=b"")
    with mock.patch("go101.util.subprocess.run", return_value=done) as run:
        assert util.git_pull("somewhere") == b"up to date"
    assert run.call_args.args[0] == ["git", "pull"]
    assert run.call_args.kwargs["cwd"] == "somewhere"


def test_git_pull_returns_none_on_failure():
    error = subprocess.CalledProcessError(1, ["git", "pull"])
    with mock.patch("go101.util.subprocess.run", side_effect=error):
        assert util.git_pull("") is None


def test_go_get_success_and_failure():
    done = subprocess.CompletedProcess([], 0, stdout=b"", stderr=b"")
    with mock.patch("go101.util.subprocess.run", return_value=done) as run:
        assert util.go_get("example.com/pkg", "") is True
    assert run.call_args.args[0] == ["go", "get", "-u", "example.com/pkg"]
    with mock.patch("go101.util.subprocess.run", side_effect=FileNotFoundError("go")):
        assert util.go_get("example.com/pkg", "") is False


@pytest.mark.parametrize(
    "platform, command",
    [
        ("win32", ["cmd", "/c", "start"]),
        ("darwin", ["open"]),
        ("linux", ["xdg-open"]),
    ],
)
def test_open_browser_command_and_failure(platform, command):
    url = "http://localhost:55555/"
    with mock.patch.object(sys, "platform", platform), mock.patch(
        "go101.util.subprocess.Popen", side_effect=OSError("no browser")
    ) as popen:
        with pytest.raises(OSError):
            util.open_browser(url)
    assert popen.call_args.args[0] == command + [url]