"""Locating the project and reading its page groups and article files."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .articles import extract_index, parse_article

log = logging.getLogger(__name__)

ROOT_MARKER = "go101.go"
INDEX_PAGE = "101.html"

_PACKAGE_PATHS = (
    "gitlab.com/go101/go101",
    "gitlab.com/Go101/go101",
    "github.com/go101/go101",
    "github.com/Go101/go101",
)


@dataclass
class PageGroup:
    """A folder of pages under ``pages/`` and where its resources live."""

    name: str
    url_prefix: str = ""
    res_dir: Path | None = None
    index_content: str = ""


def _gopaths():
    env = os.environ.get("GOPATH")
    if env:
        return [p for p in env.split(os.pathsep) if p]
    return [str(Path.home() / "go")]


def find_project_root():
    """Return ``(root, cwd_is_root)`` for the project's files.

    The current directory is the root when it holds ``go101.go``; otherwise the
    project is looked for in the Go source paths.
    """
    if Path(ROOT_MARKER).is_file():
        return ".", True
    for name in _PACKAGE_PATHS:
        for gopath in _gopaths():
            candidate = Path(gopath, "src", *name.split("/"))
            if candidate.is_dir():
                return str(candidate), False
    return ".", False


def url_prefix_for_group(group):
    """Return the URL prefix under which a page group is served."""
    # For historical reasons, fundamentals pages use "/article/xxx" URLs.
    if group == "fundamentals":
        return "/article"
    if group == "website":
        return ""
    return "/" + group


def collect_page_groups(root):
    """Map each folder under ``pages/`` to its PageGroup.

    Raises ``OSError`` when the pages folder cannot be read.
    """
    groups = {}
    for entry in sorted(Path(root, "pages").iterdir()):
        if not entry.is_dir():
            continue
        group = PageGroup(name=entry.name, url_prefix=url_prefix_for_group(entry.name))
        res = entry / "res"
        try:
            res.stat()
        except FileNotFoundError:
            pass
        except OSError as err:
            log.warning("%s", err)
        else:
            group.res_dir = res
        group.index_content = retrieve_index_content(root, entry.name)
        groups[entry.name] = group
    return groups


def load_article_file(root, group, file):
    """Read an article file as text.

    Raises ``FileNotFoundError`` when it does not exist or lies outside its group.
    """
    base = Path(root, "pages", group).resolve()
    target = (base / file).resolve()
    if not target.is_relative_to(base):
        raise FileNotFoundError(f"{group}/{file}")
    return target.read_text(encoding="utf-8", errors="replace")


def retrieve_article_content(root, group, file):
    """Load and split an article file."""
    return parse_article(load_article_file(root, group, file), group, file)


def retrieve_index_content(root, group):
    """Return the index part of a group's ``101.html``, or "" when it has none."""
    try:
        article = retrieve_article_content(root, group, INDEX_PAGE)
    except FileNotFoundError:
        return ""
    return extract_index(article.content)