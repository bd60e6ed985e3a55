"""Tests for urldispatch.cli — entrypoint, rule listing, and path matching."""

import textwrap
from pathlib import Path

import pytest

from urldispatch.cli import main
from urldispatch.cli._resolve import resolve_dispatcher
from urldispatch.errors import ConfigurationError
from urldispatch.routing.dispatcher import Dispatcher

URLS_MODULE = textwrap.dedent(
    """\
    from urldispatch import Dispatcher, DispatcherConfig, Resource


    def show_post(slug):
        raise AssertionError("the CLI must not invoke targets")


    def make():
        return Dispatcher({
            "post": {"pattern": r"^blog/(?P<slug>[\\w-]+)/$", "url": "blog/%s/", "target": show_post},
            "about": {"pattern": "^about/$", "target": Resource("about.html")},
        })


    dispatcher = make()
    not_a_dispatcher = 42
    broken = Dispatcher({"bad": {"pattern": "^bad/$"}})
    empty = Dispatcher()
    custom = Dispatcher(config=DispatcherConfig(receiver_file="front.py"))
    RULES = {
        "home": {"pattern": "^/$", "target": show_post},
    }
    """
)


@pytest.fixture
def urls_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, request: pytest.FixtureRequest) -> str:
    """Write a throwaway module defining dispatchers and return its name."""
    name = f"cli_urls_{request.node.name}".replace("[", "_").replace("]", "_")
    (tmp_path / f"{name}.py").write_text(URLS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    return name


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["routes", "match", "htaccess"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_routes_missing_dispatcher(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_match_missing_path(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", "myapp:dispatcher"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "urldispatch" in capsys.readouterr().out


class TestResolveDispatcher:
    def test_default_attribute(self, urls_module: str) -> None:
        assert isinstance(resolve_dispatcher(urls_module), Dispatcher)

    def test_factory(self, urls_module: str) -> None:
        assert isinstance(resolve_dispatcher(f"{urls_module}:make"), Dispatcher)

    def test_wrong_type(self, urls_module: str) -> None:
        with pytest.raises(TypeError, match="not a Dispatcher or rule table"):
            resolve_dispatcher(f"{urls_module}:not_a_dispatcher")

    def test_missing_attribute(self, urls_module: str) -> None:
        with pytest.raises(ConfigurationError, match="Cannot resolve"):
            resolve_dispatcher(f"{urls_module}:nope")

    def test_missing_module(self) -> None:
        with pytest.raises(ConfigurationError, match="Cannot resolve"):
            resolve_dispatcher("no_such_module_xyz")

    def test_rule_table(self, urls_module: str) -> None:
        dispatcher = resolve_dispatcher(f"{urls_module}:RULES")
        assert isinstance(dispatcher, Dispatcher)
        assert dispatcher.names == ["home"]


class TestRoutesCommand:
    def test_lists_rules_in_order(self, urls_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{urls_module}:dispatcher"])
        out = capsys.readouterr().out.splitlines()
        assert out[0].split() == ["NAME", "PATTERN", "URL", "TARGET"]
        assert out[2].startswith("post")
        assert "blog/%s/" in out[2]
        assert "show_post" in out[2]
        assert out[3].startswith("about")
        assert "file about.html" in out[3]

    def test_empty(self, urls_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", f"{urls_module}:empty"])
        assert "No rules registered." in capsys.readouterr().out

    def test_broken_rule(self, urls_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", f"{urls_module}:broken"])
        assert exc_info.value.code == 1
        assert "'target'" in capsys.readouterr().err

    def test_unknown_module(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "no_such_module_xyz:dispatcher"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestMatchCommand:
    def test_match(self, urls_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        main(["match", f"{urls_module}:dispatcher", "/blog/hello-world?page=2"])
        out = capsys.readouterr().out
        assert "rule:    post" in out
        assert "path:    blog/hello-world/" in out
        assert "param:   slug = hello-world" in out
        assert "query:   page=2" in out

    def test_miss(self, urls_module: str, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["match", f"{urls_module}:dispatcher", "/nowhere"])
        assert exc_info.value.code == 1
        assert "'nowhere/'" in capsys.readouterr().err


class TestHtaccessCommand:
    def test_prints_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["htaccess", "--base-dir", "/site/", "--receiver", "front.py"])
        out = capsys.readouterr().out
        assert "RewriteRule . /site/front.py [L]" in out
        assert out.startswith("<IfModule mod_rewrite.c>")

    def test_default_receiver(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["htaccess"])
        assert "RewriteRule . /index.py [L]" in capsys.readouterr().out

    def test_receiver_from_dispatcher_config(
        self, urls_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["htaccess", "--base-dir", "/site", "--dispatcher", f"{urls_module}:custom"])
        assert "RewriteRule . /site/front.py [L]" in capsys.readouterr().out

    def test_explicit_receiver_beats_dispatcher(
        self, urls_module: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["htaccess", "--dispatcher", f"{urls_module}:custom", "--receiver", "other.py"])
        assert "RewriteRule . /other.py [L]" in capsys.readouterr().out

    def test_unknown_dispatcher(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["htaccess", "--dispatcher", "no_such_module_xyz:dispatcher"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err
