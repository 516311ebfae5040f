"""
Tests for loading Sass rule documents.

The upstream parser hands us {"type": ..., "value": ...} documents;
these tests check they load into the same Rule objects we build by hand,
and that malformed documents are rejected.
"""

import json

import pytest
import yaml

from sasstokens.converter import UnsupportedRuleKind, convert_sass_variables
from sasstokens.examples import build_example_theme
from sasstokens.rules import (
    StringRule,
    NumberRule,
    ListRule,
    MapRule,
    ColorRule,
    BooleanRule,
)
from sasstokens.serialization import (
    RuleParseError,
    rule_from_dict,
    rule_to_dict,
    rules_to_dict,
    rules_from_dict,
    rules_from_json,
    rules_from_yaml,
    load_rules_file,
)


class TestRuleFromDict:
    """Single rule documents -> Rule objects."""

    def test_scalars(self):
        """Scalar documents load into scalar rules."""
        assert rule_from_dict({"type": "SassString", "value": "Inter"}) == StringRule("Inter")
        assert rule_from_dict({"type": "SassBoolean", "value": True}) == BooleanRule(True)
        assert rule_from_dict({"type": "SassNumber", "value": 10, "unit": "px"}) == NumberRule(10, unit="px")

    def test_number_empty_unit_is_none(self):
        """An empty unit string means no unit."""
        assert rule_from_dict({"type": "SassNumber", "value": 2, "unit": ""}) == NumberRule(2)

    def test_nested(self):
        """Lists and maps load their children recursively."""
        d = {
            "type": "SassMap",
            "value": {
                "fonts": {"type": "SassList", "value": [{"type": "SassString", "value": "Inter"}]},
                "brand": {"type": "SassColor", "value": {"r": 1, "g": 2, "b": 3}},
            },
        }
        assert rule_from_dict(d) == MapRule({
            "fonts": ListRule([StringRule("Inter")]),
            "brand": ColorRule({"r": 1, "g": 2, "b": 3}),
        })

    def test_unknown_type(self):
        """Unknown type tags raise UnsupportedRuleKind."""
        with pytest.raises(UnsupportedRuleKind) as exc_info:
            rule_from_dict({"type": "SassFunction", "value": "darken"})
        assert "SassFunction" in str(exc_info.value)

    @pytest.mark.parametrize("doc", [
        "SassString",
        ["SassString"],
        {"value": "x"},
        {"type": "SassString"},
        {"type": "SassList", "value": {"a": 1}},
        {"type": "SassMap", "value": [1, 2]},
        {"type": "SassColor", "value": "#fff"},
        {"type": "SassBoolean", "value": "false"},
        {"type": "SassBoolean", "value": 0},
        {"type": "SassNumber", "value": "abc"},
        {"type": "SassNumber", "value": True},
        {"type": "SassNumber", "value": None},
        {"type": "SassNumber", "value": 1, "unit": 5},
        {"type": "SassString", "value": ["a"]},
        {"type": "SassString", "value": 3},
        {"type": "SassList", "value": [{"type": "SassBoolean", "value": "yes"}]},
    ])
    def test_malformed(self, doc):
        """Structurally wrong documents raise RuleParseError."""
        with pytest.raises(RuleParseError):
            rule_from_dict(doc)

    def test_to_dict_roundtrip(self):
        """rules_to_dict output loads back to the same rules."""
        theme = build_example_theme()
        assert rules_from_dict(rules_to_dict(theme)) == theme

    def test_to_dict_omits_missing_unit(self):
        """No unit key is written for unitless numbers."""
        assert rule_to_dict(NumberRule(1.5)) == {"type": "SassNumber", "value": 1.5}


class TestSheetDocuments:
    """Whole-sheet JSON and YAML documents."""

    def test_json_sheet(self):
        """JSON sheets load in file order and convert."""
        text = json.dumps({
            "gap": {"type": "SassNumber", "value": 10, "unit": "px"},
            "dark": {"type": "SassBoolean", "value": False},
        })
        rules = rules_from_json(text)
        assert list(rules) == ["gap", "dark"]
        assert convert_sass_variables(rules) == {"gap": "10px", "dark": False}

    def test_yaml_sheet(self):
        """YAML sheets load to the same rules."""
        text = yaml.safe_dump(rules_to_dict(build_example_theme()), sort_keys=False)
        assert rules_from_yaml(text) == build_example_theme()

    def test_invalid_json(self):
        """Broken JSON raises RuleParseError."""
        with pytest.raises(RuleParseError):
            rules_from_json("{not json")

    def test_invalid_yaml(self):
        """Broken YAML raises RuleParseError."""
        with pytest.raises(RuleParseError):
            rules_from_yaml("a: [unclosed")

    def test_sheet_must_be_mapping(self):
        """A sheet must map names to rules."""
        with pytest.raises(RuleParseError):
            rules_from_json("[]")

    @pytest.mark.parametrize("sheet", [
        {"": {"type": "SassList", "value": [{"type": "SassString", "value": "ab"}]}},
        {1: {"type": "SassString", "value": "a"}},
    ])
    def test_sheet_names_must_be_non_empty_strings(self, sheet):
        """Empty or non-string variable names are refused."""
        with pytest.raises(RuleParseError):
            rules_from_dict(sheet)

    def test_wrongly_typed_boolean_never_converts(self):
        """A string 'false' is not silently turned into a token."""
        with pytest.raises(RuleParseError):
            convert_sass_variables(rules_from_dict({"dark": {"type": "SassBoolean", "value": "false"}}))


class TestLoadRulesFile:
    """Loading sheets from disk."""

    def test_load_json_file(self, tmp_path):
        """.json files load as JSON."""
        path = tmp_path / "theme.json"
        path.write_text(json.dumps(rules_to_dict(build_example_theme())), encoding="utf-8")
        assert load_rules_file(str(path)) == build_example_theme()

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_load_yaml_file(self, tmp_path, suffix):
        """.yaml and .yml files load as YAML."""
        path = tmp_path / f"theme{suffix}"
        path.write_text(yaml.safe_dump(rules_to_dict(build_example_theme())), encoding="utf-8")
        assert load_rules_file(str(path)) == build_example_theme()

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_rules_file(str(tmp_path / "missing.json"))

    def test_unknown_extension(self, tmp_path):
        """Unknown suffixes are refused."""
        path = tmp_path / "theme.scss"
        path.write_text("$gap: 10px;", encoding="utf-8")
        with pytest.raises(RuleParseError):
            load_rules_file(str(path))
