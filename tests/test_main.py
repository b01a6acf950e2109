import subprocess
import sys
from unittest import mock

import pytest

from go101.gen import GENERATED_FOLDER_NAME
from go101.main import main, parse_args, update_go101


def _ok(*args, **kwargs):
    return subprocess.CompletedProcess(args[0] if args else [], 0, stdout=b"", stderr=b"")


def test_parse_args_defaults():
    args = parse_args([])
    assert args.port == "55555"
    assert args.gen is False
    assert args.theme == ""
    assert args.nob is False


def test_parse_args_flags():
    args = parse_args(["-port", "8080", "-gen", "-theme", "dark", "-nob"])
    assert args.port == "8080"
    assert args.gen is True
    assert args.theme == "dark"
    assert args.nob is True


def test_parse_args_rejects_unknown_flag():
    with pytest.raises(SystemExit):
        parse_args(["-unknown"])


def test_main_rejects_bad_port(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert main(["-port", "notaport"]) == 1


def test_main_port_env_overrides_flag(monkeypatch):
    monkeypatch.setenv("PORT", "notaport")
    assert main(["-port", "0"]) == 1


def test_update_without_a_way_does_nothing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["something-else"])
    with mock.patch("subprocess.run") as run:
        assert update_go101(str(tmp_path), False) is False
    run.assert_not_called()


def test_update_reinstalls_when_run_as_go101(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "go101")])
    with mock.patch("subprocess.run", side_effect=_ok) as run:
        assert update_go101(str(tmp_path), False) is True
    assert run.call_args.args[0] == ["go", "install", "go101.org/go101@latest"]


def test_update_reports_failed_install(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(sys, "argv", ["go101"])
    err = subprocess.CalledProcessError(1, ["go"], output=b"failed")
    with mock.patch("subprocess.run", side_effect=err):
        assert update_go101(str(tmp_path), False) is False


def test_main_generates_site(tmp_path, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    (tmp_path / "go101.go").write_text("package main\n")
    templates = tmp_path / "web" / "templates"
    templates.mkdir(parents=True)
    (templates / "article").write_text("{{ Article.Content }}")
    (templates / "go-get").write_text("{{ RootPackage }}")
    (templates / "redirect").write_text("{{ RedirectPage }}")
    static = tmp_path / "web" / "static" / "go101"
    static.mkdir(parents=True)
    (static / "marker.txt").write_bytes(b"m")
    website = tmp_path / "pages" / "website"
    website.mkdir(parents=True)
    (website / "index.html").write_text("<h1>Home</h1><p>body</p>")
    monkeypatch.chdir(tmp_path)

    with mock.patch("subprocess.run", side_effect=_ok) as run:
        assert main(["-gen", "-port", "0"]) == 0

    assert run.call_args.args[0] == ["ebooktool", "-md2htmls"]
    out = tmp_path / GENERATED_FOLDER_NAME
    assert (out / "index.html").read_text() == "<p>body</p>"
    assert (out / "static" / "go101" / "marker.txt").read_bytes() == b"m"