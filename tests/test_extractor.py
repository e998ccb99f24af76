"""Tests for disable_scanner.extractor: directive shapes, rule lists, positions."""

from disable_scanner.extractor import extract_suppressions, parse_rule_list


def test_no_directives():
    """Plain code yields no candidates."""
    source = "const a = 1;\n// just a comment\n/* another */\n"
    assert extract_suppressions(source) == []


def test_next_line_with_justification():
    source = "// eslint-disable-next-line no-console -- logging required\nconsole.log(1);\n"
    candidates = extract_suppressions(source)
    assert len(candidates) == 1
    c = candidates[0]
    assert c.rule_name == "no-console"
    assert c.line == 1
    assert c.column == source.index("no-console") + 1
    assert c.justification == "logging required"
    assert c.justification_missing is False
    assert c.kind == "line"


def test_disable_line_multiple_rules():
    """Each rule in one directive becomes its own candidate."""
    source = "const x = 1;\nfoo(); // eslint-disable-line foo, bar\n"
    candidates = extract_suppressions(source)
    assert [c.rule_name for c in candidates] == ["foo", "bar"]
    assert all(c.line == 2 for c in candidates)
    assert all(c.justification_missing for c in candidates)
    line = source.split("\n")[1]
    assert candidates[0].column == line.index("foo,") + 1
    assert candidates[1].column == line.index("bar") + 1


def test_block_form_reports_line_one_column_one():
    source = "\n\n/* eslint-disable no-unused-vars */\nlet unused;\n"
    candidates = extract_suppressions(source)
    assert len(candidates) == 1
    c = candidates[0]
    assert (c.rule_name, c.line, c.column, c.kind) == ("no-unused-vars", 1, 1, "block")
    assert c.justification_missing is True


def test_block_form_spanning_lines():
    source = "/* eslint-disable\n  no-console,\n  no-debugger -- legacy module\n*/\n"
    candidates = extract_suppressions(source)
    assert [c.rule_name for c in candidates] == ["no-console", "no-debugger"]
    assert all(c.line == 1 and c.column == 1 for c in candidates)
    assert all(c.justification == "legacy module" for c in candidates)


def test_multiple_block_directives():
    source = "/* eslint-disable a */\ncode();\n/* eslint-disable b */\n"
    assert [c.rule_name for c in extract_suppressions(source)] == ["a", "b"]


def test_single_line_block_with_qualifier_is_line_form():
    source = "x();\ny(); /* eslint-disable-line no-undef -- global from CDN */\n"
    candidates = extract_suppressions(source)
    assert len(candidates) == 1
    c = candidates[0]
    assert c.kind == "line"
    assert c.line == 2
    assert c.rule_name == "no-undef"
    assert c.justification == "global from CDN"


def test_bare_line_comment_marker_accepted():
    """`// eslint-disable rule` is treated like the qualified forms."""
    candidates = extract_suppressions("// eslint-disable no-alert\n")
    assert [c.rule_name for c in candidates] == ["no-alert"]


def test_qualifier_does_not_change_result():
    a = extract_suppressions("// eslint-disable-line semi -- why")[0]
    b = extract_suppressions("// eslint-disable-next-line semi -- why")[0]
    assert (a.rule_name, a.justification) == (b.rule_name, b.justification)


def test_marker_is_case_sensitive():
    assert extract_suppressions("// ESLint-Disable-Line no-console\n") == []


def test_directive_without_rules_yields_nothing():
    assert extract_suppressions("/* eslint-disable */\n// eslint-disable-next-line\n") == []


def test_empty_justification_counts_as_missing():
    c = extract_suppressions("// eslint-disable-next-line eqeqeq --   \n")[0]
    assert c.rule_name == "eqeqeq"
    assert c.justification_missing is True


def test_column_uses_match_offset_not_first_occurrence():
    """The rule name appearing earlier in the line does not shift the column."""
    line = "const eqeqeq = a == b; // eslint-disable-line eqeqeq"
    c = extract_suppressions(line)[0]
    assert c.column == line.rindex("eqeqeq") + 1


def test_crlf_line_endings():
    source = "a();\r\n// eslint-disable-next-line no-empty -- stub\r\n{}\r\n"
    c = extract_suppressions(source)[0]
    assert c.line == 2
    assert c.rule_name == "no-empty"
    assert c.justification == "stub"


def test_scoped_plugin_rule_names_kept_verbatim():
    source = "// eslint-disable-next-line @typescript-eslint/no-explicit-any, react/no-danger\n"
    names = [c.rule_name for c in extract_suppressions(source)]
    assert names == ["@typescript-eslint/no-explicit-any", "react/no-danger"]


def test_parse_rule_list_drops_empty_entries():
    rules, justification = parse_rule_list("a,, b ,")
    assert [name for name, _ in rules] == ["a", "b"]
    assert justification is None


def test_parse_rule_list_separator_without_spaces():
    rules, justification = parse_rule_list("no-var--old browsers")
    assert [name for name, _ in rules] == ["no-var"]
    assert justification == "old browsers"


def test_qualified_block_spanning_lines():
    """A /* eslint-disable-next-line */ comment may wrap its rule list."""
    source = "/* eslint-disable-next-line no-console,\n   no-alert -- legacy */\nalert(1);\n"
    candidates = extract_suppressions(source)
    assert [c.rule_name for c in candidates] == ["no-console", "no-alert"]
    assert all(c.kind == "line" for c in candidates)
    assert all(c.justification == "legacy" for c in candidates)
    assert (candidates[0].line, candidates[0].column) == (1, source.index("no-console") + 1)
    second = source.split("\n")[1]
    assert (candidates[1].line, candidates[1].column) == (2, second.index("no-alert") + 1)


def test_unterminated_qualified_block_runs_to_end_of_line():
    source = "x(); /* eslint-disable-line no-undef\ny();\n"
    candidates = extract_suppressions(source)
    assert [(c.rule_name, c.line) for c in candidates] == [("no-undef", 1)]
    assert candidates[0].justification_missing is True


def test_block_and_line_comment_on_same_line():
    source = "/* eslint-disable a */ x(); // eslint-disable-line b\n"
    candidates = extract_suppressions(source)
    assert [(c.rule_name, c.kind) for c in candidates] == [("a", "block"), ("b", "line")]
    assert candidates[1].column == source.index(" b") + 2


def test_line_form_candidates_in_position_order():
    source = (
        "a(); // eslint-disable-line r1\n"
        "b(); /* eslint-disable-line r2 */ // eslint-disable-line r3\n"
    )
    candidates = extract_suppressions(source)
    assert [(c.rule_name, c.line) for c in candidates] == [("r1", 1), ("r2", 2), ("r3", 2)]
