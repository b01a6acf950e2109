"""Small helpers shared by the server, the generator and the command line."""

from __future__ import annotations

import logging
import subprocess
import sys

log = logging.getLogger(__name__)

SHELL_TIMEOUT = 30.0


def bytes_with_length(data, n):
    """Return at most the first ``n`` items of ``data``."""
    return data[: max(0, min(n, len(data)))]


def is_local_request(host):
    """Tell whether a request's Host header names ``localhost``."""
    hostname, _, _ = (host or "").partition(":")
    return hostname == "localhost"


def run_shell_command(timeout, cwd, cmd, *args):
    """Run a command and return its standard output.

    ``timeout`` is in seconds. Raises ``subprocess.CalledProcessError`` when the
    command fails and ``subprocess.TimeoutExpired`` when it runs too long.
    """
    completed = subprocess.run(
        [cmd, *args],
        cwd=cwd or None,
        capture_output=True,
        timeout=timeout,
        check=True,
    )
    return completed.stdout


def git_pull(cwd):
    """Run ``git pull`` in ``cwd``; return its output, or None on failure."""
    try:
        output = run_shell_command(SHELL_TIMEOUT, cwd, "git", "pull")
    except (subprocess.SubprocessError, OSError) as err:
        log.info("git pull: %s", err)
        return None
    log.info("git pull: %s", output.decode(errors="replace"))
    return output


def go_get(pkg_path, cwd):
    """Run ``go get -u`` for a package; return whether it succeeded."""
    try:
        run_shell_command(SHELL_TIMEOUT, cwd, "go", "get", "-u", pkg_path)
    except (subprocess.SubprocessError, OSError) as err:
        log.info("go get -u %s: %s", pkg_path, err)
        return False
    log.info("go get -u %s succeeded.", pkg_path)
    return True


def open_browser(url):
    """Open ``url`` in the system's default browser without waiting for it."""
    if sys.platform.startswith("win"):
        command = ["cmd", "/c", "start", url]
    elif sys.platform == "darwin":
        command = ["open", url]
    else:
        command = ["xdg-open", url]
    return subprocess.Popen(command)