"""Generating a static copy of the website from a running server."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
import urllib.error
import urllib.parse
import urllib.request
from collections import deque
from pathlib import Path

from .util import run_shell_command

log = logging.getLogger(__name__)

GENERATED_FOLDER_NAME = "generated"
MD2HTMLS_TIMEOUT = 30.0
FETCH_TIMEOUT = 30.0
_RES_SUFFIXES = (".png", ".jpg")


def read_folder(path):
    """Return ``(filenames, subfolders)`` directly inside ``path``, sorted by name.

    Symbolic links are listed as files. Raises ``OSError`` when the folder
    cannot be read.
    """
    with os.scandir(path) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    filenames, subfolders = [], []
    for entry in entries:
        full = os.path.join(path, entry.name)
        if entry.is_dir(follow_symlinks=False):
            subfolders.append(full)
        else:
            filenames.append(full)
    return filenames, subfolders


def read_folder_recursively(path):
    """Return every file under ``path``, visiting folders breadth first."""
    filenames, subfolders = read_folder(path)
    pending = deque(subfolders)
    while pending:
        files, subs = read_folder(pending.popleft())
        pending.extend(subs)
        filenames.extend(files)
    return filenames


def url_prefix_for_output(group):
    """Return the path prefix under which a page group's files are generated."""
    # For historical reasons, fundamentals pages use "/article/xxx" URLs.
    if group == "fundamentals":
        return "article/"
    if group == "website":
        return ""
    return group + "/"


def _relative(base, path):
    return Path(path).relative_to(base).as_posix()


def _load(root_url, uri):
    url = root_url + urllib.parse.quote(uri)
    try:
        with urllib.request.urlopen(url, timeout=FETCH_TIMEOUT) as res:
            content = res.read()
    except urllib.error.HTTPError as err:
        content = err.read()
    except urllib.error.URLError as err:
        raise RuntimeError(f"Load file {uri} error: {err.reason}") from err
    log.info("%d %s", len(content), url)
    return content


def _md2htmls(group_dir):
    try:
        run_shell_command(MD2HTMLS_TIMEOUT, str(group_dir), "ebooktool", "-md2htmls")
    except (subprocess.SubprocessError, OSError) as err:
        output = getattr(err, "output", b"") or b""
        raise RuntimeError(
            f"ebooktool failed to execute in directory: {group_dir}.\n"
            f"{output.decode(errors='replace')}"
        ) from err


def _collect_group(files, root_url, group_dir, url_prefix, collect_res):
    if collect_res:
        res_dir = group_dir / "res"
        filenames, _ = read_folder(res_dir)
        for f in filenames:
            if f.endswith(_RES_SUFFIXES):
                files[f"{url_prefix}res/{_relative(res_dir, f)}"] = Path(f).read_bytes()

    _md2htmls(group_dir)

    filenames, _ = read_folder(group_dir)
    for f in filenames:
        if f.endswith(".html"):
            name = url_prefix + _relative(group_dir, f)
            files[name] = _load(root_url, name)


def _remove(path):
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except NotADirectoryError:
        path.unlink()


def gen_static_files(root_url, wd=None):
    """Fetch every page from the server at ``root_url`` and write them under ``generated/``.

    ``wd`` is the project folder (the current directory by default). Returns the
    generated files as a mapping from their relative names to their contents.
    """
    wd = Path(wd if wd is not None else os.getcwd())
    if not wd.joinpath("web", "static", "go101").exists():
        raise FileNotFoundError("File web/static/go101 not found. Not run in go101 folder?")

    files = {"index.html": _load(root_url, "")}

    static_dir = wd / "web" / "static"
    for f in read_folder_recursively(static_dir):
        files["static/" + _relative(static_dir, f)] = Path(f).read_bytes()

    _, groups = read_folder(wd / "pages")
    for group_path in groups:
        group_dir = Path(group_path)
        _collect_group(
            files,
            root_url,
            group_dir,
            url_prefix_for_output(group_dir.name),
            (group_dir / "res").exists(),
        )

    out = wd / GENERATED_FOLDER_NAME
    _remove(out)
    for name, data in files.items():
        target = out.joinpath(*re.split(r"[\\/]", name))
        target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        target.write_bytes(data)
        log.info("Generated %s (size: %d).", name, len(data))
    return files