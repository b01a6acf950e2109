"""Package information for the ``go get`` vanity import pages."""

from __future__ import annotations

from dataclasses import dataclass, replace

GITHUB = "https://github.com/"
PKG_GO_DEV = "https://pkg.go.dev/"


@dataclass(frozen=True)
class GoGetInfo:
    """Where a vanity package's source and documentation live."""

    root_package: str
    go_get_source_repo: str
    go_doc_website: str = ""

    def for_page(self, sub_pkg, version):
        """Return the info with full URLs for a (sub)package page."""
        repo = GITHUB + self.go_get_source_repo
        if self.go_doc_website:
            doc = f"{self.go_doc_website}{self.root_package}/{sub_pkg}{version}"
        else:
            doc = repo + (f"/tree/master/{sub_pkg}" if sub_pkg else "")
        return replace(self, go_get_source_repo=repo, go_doc_website=doc)


_LEGACY_BOOK = "go" "lang101"

GOGET_INFOS = {
    "tinyrouter": GoGetInfo("go101.org/tinyrouter", "go101/tinyrouter", PKG_GO_DEV),
    "skia": GoGetInfo("go101.org/skia", "go101/go-skia", PKG_GO_DEV),
    "go101": GoGetInfo("go101.org/go101", "go101/go101"),
    _LEGACY_BOOK: GoGetInfo(
        f"go101.org/{_LEGACY_BOOK}", f"{_LEGACY_BOOK}/{_LEGACY_BOOK}"
    ),
    "gold": GoGetInfo("go101.org/gold", "go101/gold", PKG_GO_DEV),
    "golds": GoGetInfo("go101.org/golds", "go101/golds", PKG_GO_DEV),
    "ebooktool": GoGetInfo("go101.org/ebooktool", "go101/ebooktool", PKG_GO_DEV),
    "nstd": GoGetInfo("go101.org/nstd", "go101/nstd", PKG_GO_DEV),
    "gotv": GoGetInfo("go101.org/gotv", "go101/gotv", PKG_GO_DEV),
    "godev": GoGetInfo("go101.org/godev", "go101/godev", PKG_GO_DEV),
}


def split_version(root_pkg, sub_pkg):
    """Split an ``@version`` suffix off a request path.

    Returns ``(root_pkg, sub_pkg, version)``. A version on a sub-package is
    dropped; on a root package it is kept with its leading ``@``.
    """
    if sub_pkg:
        return root_pkg, sub_pkg.partition("@")[0], ""
    at = root_pkg.find("@")
    if at > 0:
        return root_pkg[:at], "", root_pkg[at:]
    return root_pkg, "", ""


def normalize_version(version):
    """Keep only versions of the form ``@v<digit>...``; otherwise return ""."""
    if len(version) < 3 or version[1] != "v" or not "0" <= version[2] <= "9":
        return ""
    return version


def lookup(root_pkg):
    """Return the GoGetInfo for a root package name, or None."""
    return GOGET_INFOS.get(root_pkg)