"""Tests for urldispatch.routing.builder — spec validation and URL guessing."""

import warnings
from pathlib import Path

import pytest

import urldispatch
from urldispatch.errors import ConfigurationError
from urldispatch.routing.builder import build_rule, guess_url
from urldispatch.routing.rule import Resource


def _handler() -> str:
    return "ok"


class TestGuessUrl:
    def test_anchored(self) -> None:
        assert guess_url("^foo/bar/$") == "foo/bar/"

    def test_unanchored_loses_characters(self) -> None:
        assert guess_url("foo/bar/") == "oo/bar"

    def test_named_groups_kept(self) -> None:
        assert guess_url(r"^blog/(?P<slug>\w+)/$") == r"blog/(?P<slug>\w+)/"


class TestBuildRule:
    def test_minimal(self) -> None:
        rule = build_rule("bar", {"pattern": "^foo/bar/$", "target": _handler})
        assert rule.name == "bar"
        assert rule.pattern == "^foo/bar/$"
        assert rule.url == "foo/bar/"
        assert rule.target is _handler
        assert rule.extra == {}

    def test_explicit_url(self) -> None:
        rule = build_rule(
            "post",
            {"pattern": r"^blog/(?P<slug>\w+)/$", "url": "blog/%s/", "target": _handler},
        )
        assert rule.url == "blog/%s/"

    def test_regex_alias(self) -> None:
        rule = build_rule("bar", {"regex": "^foo/bar/$", "target": "bar.py"})
        assert rule.pattern == "^foo/bar/$"

    def test_missing_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="'pattern'"):
            build_rule("bar", {"target": _handler})

    def test_missing_target(self) -> None:
        with pytest.raises(ConfigurationError, match="'target'"):
            build_rule("bar", {"pattern": "^foo/$"})

    def test_spec_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            build_rule("bar", ["^foo/$", _handler])  # type: ignore[arg-type]

    def test_params_become_extra_data(self) -> None:
        rule = build_rule(
            "about",
            {"pattern": "^about/$", "target": Resource("about.html"), "params": {"action": "read"}},
        )
        assert rule.extra_data("action") == "read"

    def test_params_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'params' must be a mapping"):
            build_rule("bar", {"pattern": "^foo/$", "target": _handler, "params": ["read"]})

    def test_query_defaults_under_get(self) -> None:
        rule = build_rule("bar", {"pattern": "^foo/$", "target": _handler, "GET": {"page": "1"}})
        assert rule.extra_data("GET") == {"page": "1"}

    def test_query_alias(self) -> None:
        rule = build_rule("bar", {"pattern": "^foo/$", "target": _handler, "query": {"page": "1"}})
        assert rule.extra_data("GET") == {"page": "1"}

    def test_query_defaults_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'GET' must be a mapping"):
            build_rule("bar", {"pattern": "^foo/$", "target": _handler, "GET": "page=1"})

    def test_query_defaults_override_params_entry(self) -> None:
        rule = build_rule(
            "bar",
            {
                "pattern": "^foo/$",
                "target": _handler,
                "params": {"GET": {"old": "1"}},
                "GET": {"new": "2"},
            },
        )
        assert rule.extra_data("GET") == {"new": "2"}

    def test_top_level_options_folded_in(self) -> None:
        rule = build_rule(
            "bar",
            {"pattern": "^foo/$", "target": "foo.py", "action": "read", "args_in_get": False},
        )
        assert rule.extra_data("action") == "read"
        assert rule.extra_data("args_in_get", True) is False

    def test_spec_not_mutated(self) -> None:
        params = {"action": "read"}
        spec = {"pattern": "^foo/$", "target": "foo.py", "params": params, "GET": {"a": "1"}}
        build_rule("bar", spec)
        assert params == {"action": "read"}
        assert set(spec) == {"pattern", "target", "params", "GET"}


class TestSourceCompiles:
    @pytest.mark.parametrize(
        "module_path",
        sorted(Path(urldispatch.__file__).parent.rglob("*.py")),
        ids=lambda p: p.name,
    )
    def test_no_syntax_warnings(self, module_path: Path) -> None:
        """Docstrings containing regex escapes must be raw strings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            compile(module_path.read_text(encoding="utf-8"), str(module_path), "exec")
