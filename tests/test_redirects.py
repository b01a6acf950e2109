import pytest

from go101.redirects import REDIRECT_PAGES, redirect_target


def test_redirect_target_known():
    assert redirect_target("fundamentals", "go-sdk.html") == "/fundamentals/go-toolchain.html"
    assert redirect_target("fundamentals", "tools.html") == "/apps-and-libs/101.html"


@pytest.mark.parametrize("file", ["tool-gold.html", "tool-golds.html"])
def test_redirect_target_golds(file):
    assert redirect_target("fundamentals", file) == "/apps-and-libs/golds.html"


def test_redirect_target_unknown():
    assert redirect_target("fundamentals", "intro.html") is None
    assert redirect_target("blog", "go-sdk.html") is None


def test_every_target_is_a_path():
    for group, file in REDIRECT_PAGES:
        assert redirect_target(group, file).startswith("/")
        assert redirect_target(group, file).count("/") == 2