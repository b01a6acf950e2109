"""Splitting article pages into title and body, and index helpers."""

from __future__ import annotations

from dataclasses import dataclass

MAX_TITLE_LEN = 256
INDEX_START = "<!-- index starts (don't remove) -->"
INDEX_END = "<!-- index ends (don't remove) -->"

_TITLE_TAGS = (("<h1>", "</h1>"), ("<h2>", "</h2>"))
_TAG_SIGNS = "<>"
_A_END = "</a>"
_A_HREF = 'href="'
_A_ID = 'id="i-'


@dataclass
class Article:
    """An article page split into its parts."""

    content: str = ""
    title: str = ""
    index: str = ""
    title_without_tags: str = ""
    group: str = ""
    filename: str = ""
    filename_without_ext: str = ""


def strip_tags(title):
    """Remove everything between ``<`` and ``>`` from a title."""
    kept = []
    k = 0
    for ch in title:
        if ch == _TAG_SIGNS[k]:
            k ^= 1
        elif k == 0:
            kept.append(ch)
    return "".join(kept)


def _find_title(content, start_tag, end_tag):
    start = content.find(start_tag)
    if start < 0:
        return None
    body = start + len(start_tag)
    j = content[body : body + MAX_TITLE_LEN].find(end_tag)
    if j < 0:
        return None
    return start, body + j + len(end_tag)


def parse_article(content, group, file):
    """Build an Article, taking the first h1 (or else h2) as its title."""
    article = Article(
        content=content,
        group=group,
        filename=file,
        filename_without_ext=file.removesuffix(".html"),
    )
    for start_tag, end_tag in _TITLE_TAGS:
        span = _find_title(content, start_tag, end_tag)
        if span is not None:
            title_start, content_start = span
            article.title = content[title_start:content_start]
            article.content = content[content_start:]
            article.title_without_tags = strip_tags(article.title)
            break
    return article


def extract_index(content):
    """Return the text between the index markers, or "" if they are missing."""
    i = content.find(INDEX_START)
    if i < 0:
        return ""
    rest = content[i + len(INDEX_START) :]
    j = rest.find(INDEX_END)
    if j < 0:
        return ""
    return rest[:j]


def disable_article_link(html, page):
    """Turn the index link to ``page`` into a non-link ``<b>`` element."""
    a_start = f'<a class="index" href="{page}'
    i = html.find(a_start)
    if i < 0:
        return html
    end = html.find(_A_END, i + len(a_start))
    if end < 0:
        return html
    href = html.find(_A_HREF, i)
    chars = list(html)
    chars[i + 1] = "b"
    chars[end + 2] = "b"
    chars[href : href + len(_A_ID)] = _A_ID
    return "".join(chars)