"""The web application that serves the articles, resources and go-get pages."""

from __future__ import annotations

import html
import logging
import mimetypes
import threading
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path

import jinja2

from .articles import disable_article_link
from .cache import PageCache
from .goget import lookup, normalize_version, split_version
from .redirects import redirect_target
from .resources import collect_page_groups, retrieve_article_content
from .templates import PageTemplate, TemplateStore
from .util import is_local_request

log = logging.getLogger(__name__)

ONE_YEAR = "max-age=31536000"
ABOUT_14_HOURS = "max-age=50000"
NO_CACHE = "no-cache, private, max-age=0"
HTML_TYPE = "text/html; charset=utf-8"

ARTICLE_GROUPS = frozenset(
    {"optimizations", "details-and-tips", "quizzes", "generics", "apps-and-libs", "blog"}
)


@dataclass
class Response:
    """An HTTP response: status, headers and body."""

    status: int = 200
    headers: dict = field(default_factory=dict)
    body: bytes = b""


class _HTML(str):
    """Text that templates insert without escaping."""

    def __html__(self):
        return str(self)


def _not_found():
    return Response(404, {"Content-Type": "text/plain; charset=utf-8"}, b"404 page not found\n")


def _redirect(location, status):
    phrase = HTTPStatus(status).phrase
    body = f'<a href="{html.escape(location)}">{phrase}</a>.\n'.encode()
    return Response(status, {"Location": location, "Content-Type": HTML_TYPE}, body)


def _serve_file(directory, rel_path):
    base = Path(directory).resolve()
    target = (base / rel_path.lstrip("/")).resolve()
    if not target.is_relative_to(base):
        return _not_found()
    if target.is_dir():
        target = target / "index.html"
    try:
        data = target.read_bytes()
    except OSError:
        return _not_found()
    content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
    return Response(200, {"Content-Type": content_type}, data)


def _page_response(page, is_local):
    cache_control = NO_CACHE if is_local else ABOUT_14_HOURS
    return Response(200, {"Content-Type": HTML_TYPE, "Cache-Control": cache_control}, page)


def _article_context(article):
    return {
        "Content": _HTML(article.content),
        "Title": _HTML(article.title),
        "Index": _HTML(article.index),
        "TitleWithoutTags": article.title_without_tags,
        "Group": article.group,
        "Filename": article.filename,
        "FilenameWithoutExt": article.filename_without_ext,
    }


class Go101:
    """A WSGI application serving a project folder.

    Pages are cached only while requests come through a non-local host name;
    the first request through ``localhost`` drops every cache.
    """

    def __init__(self, root=".", theme=""):
        self.root = Path(root)
        self.theme = theme
        self.templates = TemplateStore(self.root / "web" / "templates")
        self.static_dir = self.root / "web" / "static"
        self.page_groups = collect_page_groups(self.root)
        self.article_pages = PageCache()
        self.goget_pages = PageCache()
        self._lock = threading.Lock()
        self._is_local = False

    def __call__(self, environ, start_response):
        raw_path = environ.get("PATH_INFO") or "/"
        path = raw_path.encode("latin-1", errors="replace").decode("utf-8", errors="replace")
        host = environ.get("HTTP_HOST") or environ.get("SERVER_NAME", "")
        response = self.handle(path, host)
        status = HTTPStatus(response.status)
        headers = [(k, v) for k, v in response.headers.items() if k.lower() != "content-length"]
        headers.append(("Content-Length", str(len(response.body))))
        start_response(f"{status.value} {status.phrase}", headers)
        return [response.body]

    def handle(self, path, host):
        """Serve one request for ``path`` made through ``host``."""
        if not path.startswith("/"):
            path = "/" + path
        self.pre_handle(host)
        tokens = path[1:].split("/", 1)
        if len(tokens) == 2:
            group, item = tokens
        else:
            group, item = "", tokens[0]

        if group == "":
            return self.serve_go_get_page(path, item, "")
        if group == "res":
            return self.serve_group_item(path, "website", path[1:])
        if group == "static":
            response = _serve_file(self.static_dir, path[len("/static/"):])
            response.headers["Cache-Control"] = ONE_YEAR
            return response
        if group == "article":
            # Fundamentals pages have always lived under "article/".
            return self.serve_group_item(path, "fundamentals", item)
        if group in ARTICLE_GROUPS:
            return self.serve_group_item(path, group, item)
        return self.serve_go_get_page(path, group, item)

    def pre_handle(self, host):
        """Track whether requests are local; entering local mode drops all caches."""
        local = is_local_request(host)
        with self._lock:
            if self._is_local != local:
                self._is_local = local
                if local:
                    self.templates.unload()
                    self.article_pages.clear()
                    self.goget_pages.clear()

    def is_local_server(self):
        """Tell whether the latest request came through ``localhost``."""
        with self._lock:
            return self._is_local

    def _render(self, which, cache_it, context):
        template = self.templates.retrieve(which, cache_it)
        try:
            return template.render(**context).encode("utf-8")
        except jinja2.TemplateError as err:
            return str(err).encode("utf-8")

    def serve_go_get_page(self, path, root_pkg, sub_pkg):
        """Serve a vanity import page, or fall back to the website group."""
        root_pkg, sub_pkg, version = split_version(root_pkg, sub_pkg)
        version = normalize_version(version)

        info = lookup(root_pkg)
        if info is None:
            if not sub_pkg:
                return self.serve_group_item(path, "website", root_pkg or "index.html")
            return _redirect("/", 404)

        item = f"{root_pkg}/{sub_pkg}" if sub_pkg else root_pkg
        page, is_local = self.goget_pages.get(item, version), self.is_local_server()
        if page is None:
            page_info = info.for_page(sub_pkg, version)
            page = self._render(
                PageTemplate.GO_GET,
                not is_local,
                {
                    "RootPackage": page_info.root_package,
                    "GoGetSourceRepo": page_info.go_get_source_repo,
                    "GoDocWebsite": page_info.go_doc_website,
                },
            )
            if not is_local:
                self.goget_pages.set(item, version, page)
        return _page_response(page, is_local)

    def serve_group_item(self, path, group, item):
        """Serve a resource file or an article page of a group."""
        item = item.lower()
        if item.startswith("res/"):
            response = self._serve_resource(self.page_groups.get(group), path)
            response.headers["Cache-Control"] = ONE_YEAR
            return response
        response = self.redirect_article_page(group, item)
        if response is None:
            response = self.render_article_page(group, item)
        return response

    def _serve_resource(self, page_group, path):
        if page_group is None:
            return _not_found()
        if page_group.res_dir is None:
            return Response()
        prefix = page_group.url_prefix + "/res/"
        if not path.startswith(prefix):
            return _not_found()
        return _serve_file(page_group.res_dir, path[len(prefix):])

    def redirect_article_page(self, group, file):
        """Serve a moved article's redirect page, or return None if it did not move."""
        target = redirect_target(group, file)
        if target is None:
            return None
        page, is_local = self.article_pages.get(group, file), self.is_local_server()
        if page is None:
            page = self._render(PageTemplate.REDIRECT, not is_local, {"RedirectPage": target})
            if not is_local:
                self.article_pages.set(group, file, page)
        if not page:
            log.info("article page %s/%s is not found", group, file)
            return _redirect("/article/101.html", 404)
        return _page_response(page, is_local)

    def render_article_page(self, group, file):
        """Serve an article page; a missing article redirects to the home page."""
        page, is_local = self.article_pages.get(group, file), self.is_local_server()
        if page is None:
            try:
                article = retrieve_article_content(self.root, group, file)
            except FileNotFoundError:
                page = b""
            except OSError as err:
                log.info("article page %s/%s: %s", group, file, err)
            else:
                page_group = self.page_groups.get(group)
                index = page_group.index_content if page_group else ""
                article.index = disable_article_link(index, file)
                page = self._render(
                    PageTemplate.ARTICLE,
                    not is_local,
                    {
                        "Article": _article_context(article),
                        "Title": article.title_without_tags,
                        "Theme": self.theme,
                    },
                )
            if not is_local and page is not None:
                self.article_pages.set(group, file, page)

        if not page:
            log.info("article page %s/%s is not found", group, file)
            return _redirect("/", 404)
        return _page_response(page, is_local)