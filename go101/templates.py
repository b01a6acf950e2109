"""Loading and caching of the page templates."""

from __future__ import annotations

import enum
import threading

import jinja2


class PageTemplate(enum.IntEnum):
    """The kinds of page template."""

    ARTICLE = 0
    GO_GET = 1
    REDIRECT = 2
    BLANK = 3


_TEMPLATE_FILES = {
    PageTemplate.ARTICLE: "article",
    PageTemplate.GO_GET: "go-get",
    PageTemplate.REDIRECT: "redirect",
}


class TemplateStore:
    """Parses templates from a directory and keeps the ones asked to be cached.

    All templates are loaded on construction, so a missing file raises
    ``jinja2.TemplateNotFound`` straight away.
    """

    def __init__(self, template_dir):
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=True,
            cache_size=0,
        )
        self._lock = threading.Lock()
        self._templates = {}
        for which in PageTemplate:
            self.retrieve(which, True)

    def retrieve(self, which, cache_it):
        """Return the template for ``which``, parsing it if it is not cached."""
        which = PageTemplate(min(int(which), PageTemplate.BLANK))
        with self._lock:
            template = self._templates.get(which)
        if template is None:
            name = _TEMPLATE_FILES.get(which)
            if name is None:
                template = self._env.from_string("")
            else:
                template = self._env.get_template(name)
            if cache_it:
                with self._lock:
                    self._templates[which] = template
        return template

    def unload(self):
        """Forget all cached templates."""
        with self._lock:
            self._templates = {}