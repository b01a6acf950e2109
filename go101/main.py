"""The command that starts the server or generates a static copy of the site."""

from __future__ import annotations

import argparse
import errno
import logging
import os
import subprocess
import sys
import threading
import time
from pathlib import Path
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from .gen import gen_static_files
from .resources import ROOT_MARKER, find_project_root
from .server import Go101
from .util import SHELL_TIMEOUT, git_pull, open_browser, run_shell_command

log = logging.getLogger(__name__)

DEFAULT_PORT = "55555"
MAX_PORT = 65535
FIRST_PULL_DELAY = 30.0
PULL_INTERVAL = 24 * 60 * 60.0


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _QuietHandler(WSGIRequestHandler):
    timeout = 10

    def log_message(self, format, *args):
        log.debug(format, *args)


def parse_args(argv=None):
    """Parse the command-line options."""
    parser = argparse.ArgumentParser(prog="go101", allow_abbrev=False)
    parser.add_argument("-port", "--port", default=DEFAULT_PORT, help="server port")
    parser.add_argument("-gen", "--gen", action="store_true", help="HTML generation mode?")
    parser.add_argument("-theme", "--theme", default="", help="theme (auto | dark | light)")
    parser.add_argument("-nob", "--nob", action="store_true", help="not open browser?")
    return parser.parse_args(argv)


def _pull_project(wd):
    time.sleep(FIRST_PULL_DELAY)
    git_pull(wd)
    while True:
        time.sleep(PULL_INTERVAL)
        git_pull(wd)


def update_go101(root, wd_is_root):
    """Keep the project up to date.

    In a project checkout this pulls from git periodically and never returns.
    Otherwise, when started as ``go101``, it reinstalls the command and returns
    whether that succeeded; it returns False when there is no way to update.
    """
    if wd_is_root:
        _pull_project(root)
    if Path(".", ROOT_MARKER).is_file():
        _pull_project("")
    if Path(sys.argv[0]).name != "go101":
        return False
    log.info("go install go101.org/go101@latest")
    try:
        run_shell_command(SHELL_TIMEOUT, "", "go", "install", "go101.org/go101@latest")
    except subprocess.CalledProcessError as err:
        output = (err.output or b"").decode(errors="replace")
        log.info("error: %s\n%s", err, output)
        return False
    except (subprocess.SubprocessError, OSError) as err:
        log.info("error: %s", err)
        return False
    log.info("done.")
    return True


def _parse_port(port):
    number = int(port)
    if not 0 <= number <= MAX_PORT:
        raise ValueError(f"invalid port {port}")
    return number


def _listen(port, app):
    while True:
        try:
            return make_server(
                "", port, app, server_class=_ThreadingWSGIServer, handler_class=_QuietHandler
            )
        except OSError as err:
            if err.errno == errno.EADDRINUSE and port + 1 < MAX_PORT:
                port += 1
                continue
            raise


def _run_server(server):
    port = server.server_port
    log.info("Server started:")
    log.info("   http://localhost:%d (non-cached version)", port)
    log.info("   http://127.0.0.1:%d (cached version)", port)
    server.serve_forever()


def main(argv=None):
    """Start the server, or generate the static site with ``-gen``."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = parse_args(argv)

    port, is_app_engine = args.port, False
    env_port = os.environ.get("PORT")
    if env_port:
        port, is_app_engine = env_port, True
    try:
        port_number = _parse_port(port)
    except ValueError:
        log.error("invalid port: %s", port)
        return 1

    root, wd_is_root = find_project_root()
    app = Go101(root, args.theme)
    try:
        server = _listen(port_number, app)
    except OSError as err:
        log.error("%s", err)
        return 1

    print("go101.theme: ", app.theme, file=sys.stderr)

    root_url = f"http://localhost:{server.server_port}/"
    if not args.gen and not is_app_engine:
        if not args.nob:
            try:
                open_browser(root_url)
            except OSError as err:
                log.info("%s", err)
        threading.Thread(target=update_go101, args=(root, wd_is_root), daemon=True).start()

    if args.gen:
        threading.Thread(target=_run_server, args=(server,), daemon=True).start()
        try:
            gen_static_files(root_url, os.getcwd())
        except (OSError, RuntimeError) as err:
            log.error("%s", err)
            return 1
        finally:
            server.shutdown()
            server.server_close()
        return 0

    try:
        _run_server(server)
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0