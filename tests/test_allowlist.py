"""Tests for the allowlist policy file and glob matching."""

import json
import logging

from disable_scanner.allowlist import EMPTY_POLICY, AllowlistPolicy, load_allowlist
from disable_scanner.config import ALLOWLIST_FILENAME
from disable_scanner.globs import glob_match, matches_any


def _write_policy(root, content):
    (root / ALLOWLIST_FILENAME).write_text(content, encoding="utf-8")


def test_missing_file_gives_empty_policy(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        policy = load_allowlist(tmp_path)
    assert policy == EMPTY_POLICY
    assert policy.exempt_rules == frozenset()
    assert policy.exempt_path_patterns == ()
    assert caplog.text == ""


def test_valid_file_loads_rules_and_paths(tmp_path):
    _write_policy(tmp_path, json.dumps({"rules": ["no-console", "no-console"], "paths": ["scripts/**"]}))
    policy = load_allowlist(tmp_path)
    assert policy.exempt_rules == frozenset({"no-console"})
    assert policy.exempt_path_patterns == ("scripts/**",)


def test_fields_are_optional_and_unknown_fields_ignored(tmp_path):
    _write_policy(tmp_path, json.dumps({"rules": ["eqeqeq"], "owner": "platform-team"}))
    policy = load_allowlist(tmp_path)
    assert policy.exempt_rules == frozenset({"eqeqeq"})
    assert policy.exempt_path_patterns == ()


def test_null_fields_mean_empty(tmp_path):
    _write_policy(tmp_path, json.dumps({"rules": None, "paths": None}))
    assert load_allowlist(tmp_path) == EMPTY_POLICY


def test_malformed_json_warns_and_degrades(tmp_path, caplog):
    _write_policy(tmp_path, "{ rules: [no-console ")
    with caplog.at_level(logging.WARNING):
        policy = load_allowlist(tmp_path)
    assert policy == EMPTY_POLICY
    assert "Ignoring allowlist" in caplog.text


def test_non_object_json_warns_and_degrades(tmp_path, caplog):
    _write_policy(tmp_path, json.dumps(["no-console"]))
    with caplog.at_level(logging.WARNING):
        policy = load_allowlist(tmp_path)
    assert policy == EMPTY_POLICY
    assert "expected a JSON object" in caplog.text


def test_wrong_field_types_warn_and_degrade(tmp_path, caplog):
    _write_policy(tmp_path, json.dumps({"rules": "no-console", "paths": [1, 2]}))
    with caplog.at_level(logging.WARNING):
        policy = load_allowlist(tmp_path)
    assert policy == EMPTY_POLICY
    assert "invalid field" in caplog.text


def test_policy_lookups():
    policy = AllowlistPolicy(rules=["no-console"], paths=["legacy/**", "**/*.stories.tsx"])
    assert policy.is_rule_exempt("no-console")
    assert not policy.is_rule_exempt("no-debugger")
    assert policy.is_path_exempt("legacy/old/a.js")
    assert policy.is_path_exempt("Button.stories.tsx")
    assert policy.is_path_exempt("src/ui/Button.stories.tsx")
    assert not policy.is_path_exempt("src/app.ts")


class TestGlobMatch:
    def test_double_star_crosses_directories(self):
        assert glob_match("src/a/b/c.js", "src/**")
        assert glob_match("src/a/b/c.js", "src/**/*.js")

    def test_leading_double_star_matches_root_level(self):
        assert glob_match("a.test.ts", "**/*.test.ts")
        assert glob_match("pkg/a.test.ts", "**/*.test.ts")

    def test_dot_slash_prefix_is_ignored(self):
        assert glob_match("scripts/build.js", "./scripts/**")

    def test_case_sensitive(self):
        assert not glob_match("Scripts/build.js", "scripts/**")

    def test_blank_pattern_never_matches(self):
        assert not glob_match("a.js", "  ")

    def test_matches_any(self):
        assert matches_any("dist/x.js", ["build/**", "dist/**"])
        assert not matches_any("src/x.js", ["build/**", "dist/**"])
        assert not matches_any("src/x.js", [])

    def test_single_star_stays_in_one_directory(self):
        assert glob_match("src/b.js", "src/*.js")
        assert not glob_match("src/deep/nested/b.js", "src/*.js")
        assert not glob_match("lib/debug.log", "*.log")

    def test_double_star_in_the_middle(self):
        assert glob_match("src/a.js", "src/**/a.js")
        assert glob_match("src/x/y/a.js", "src/**/a.js")
        assert not glob_match("lib/x/a.js", "src/**/a.js")

    def test_trailing_slash_matches_directory_contents(self):
        assert glob_match("scripts/tools/run.js", "scripts/")


def test_single_star_path_pattern_does_not_exempt_nested_files():
    policy = AllowlistPolicy(paths=["src/*.js"])
    assert policy.is_path_exempt("src/b.js")
    assert not policy.is_path_exempt("src/deep/nested/b.js")
