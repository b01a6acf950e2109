import jinja2
import pytest

from go101.templates import PageTemplate, TemplateStore


@pytest.fixture
def template_dir(tmp_path):
    (tmp_path / "article").write_text("<title>{{ Title }}</title>")
    (tmp_path / "go-get").write_text("repo={{ info.repo }}")
    (tmp_path / "redirect").write_text("to={{ RedirectPage }}")
    return tmp_path


def test_renders_each_template(template_dir):
    store = TemplateStore(template_dir)
    article = store.retrieve(PageTemplate.ARTICLE, True)
    assert article.render(Title="Intro") == "<title>Intro</title>"
    redirect = store.retrieve(PageTemplate.REDIRECT, True)
    assert redirect.render(RedirectPage="/a/b.html") == "to=/a/b.html"
    goget = store.retrieve(PageTemplate.GO_GET, True)
    assert goget.render(info={"repo": "r"}) == "repo=r"


def test_autoescapes_values(template_dir):
    store = TemplateStore(template_dir)
    out = store.retrieve(PageTemplate.ARTICLE, True).render(Title="<x>")
    assert "<x>" not in out
    assert "&lt;x&gt;" in out


def test_cached_template_is_reused(template_dir):
    store = TemplateStore(template_dir)
    first = store.retrieve(PageTemplate.ARTICLE, True)
    assert store.retrieve(PageTemplate.ARTICLE, True) is first
    assert store.retrieve(PageTemplate.ARTICLE, False) is first


def test_unload_reparses_changed_files(template_dir):
    store = TemplateStore(template_dir)
    old = store.retrieve(PageTemplate.REDIRECT, True)
    (template_dir / "redirect").write_text("moved {{ RedirectPage }}")
    assert store.retrieve(PageTemplate.REDIRECT, True) is old
    store.unload()
    fresh = store.retrieve(PageTemplate.REDIRECT, False)
    assert fresh.render(RedirectPage="/x") == "moved /x"


def test_uncached_retrieve_does_not_store(template_dir):
    store = TemplateStore(template_dir)
    store.unload()
    first = store.retrieve(PageTemplate.GO_GET, False)
    second = store.retrieve(PageTemplate.GO_GET, False)
    assert first is not second
    assert first.render(info={"repo": "q"}) == second.render(info={"repo": "q"})


@pytest.mark.parametrize("which", [PageTemplate.BLANK, 7, 100])
def test_out_of_range_gives_blank(template_dir, which):
    store = TemplateStore(template_dir)
    assert store.retrieve(which, False).render(Title="ignored") == ""


def test_missing_template_file_raises(tmp_path):
    (tmp_path / "article").write_text("a")
    with pytest.raises(jinja2.TemplateNotFound):
        TemplateStore(tmp_path)


def test_template_numbers_follow_declared_order(template_dir):
    store = TemplateStore(template_dir)
    assert store.retrieve(0, False).render(Title="T") == "<title>T</title>"
    assert store.retrieve(1, False).render(info={"repo": "r"}) == "repo=r"
    assert store.retrieve(2, False).render(RedirectPage="/p") == "to=/p"
    assert store.retrieve(3, False).render(Title="T") == ""