"""
Loading helpers for Sass rule documents.

The upstream parser emits rules as plain documents:

    {"type": "SassNumber", "value": 10, "unit": "px"}

with nested rules inside SassList (list) and SassMap (mapping) values.
This module turns such documents (dict, JSON or YAML) into Rule objects
and back. It reads rules only; token output is the caller's business.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

import yaml

from sasstokens.converter import UnsupportedRuleKind
from sasstokens.rules import (
    RuleKind,
    Rule,
    StringRule,
    NumberRule,
    ListRule,
    MapRule,
    ColorRule,
    BooleanRule,
)

logger = logging.getLogger(__name__)


class RuleParseError(ValueError):
    """Raised when a rule document is structurally malformed."""
    pass


def rule_to_dict(rule: Rule) -> Dict[str, Any]:
    if isinstance(rule, ListRule):
        return {"type": rule.kind.value, "value": [rule_to_dict(r) for r in rule.value]}
    if isinstance(rule, MapRule):
        return {"type": rule.kind.value, "value": {k: rule_to_dict(r) for k, r in rule.value.items()}}
    if isinstance(rule, NumberRule):
        d: Dict[str, Any] = {"type": rule.kind.value, "value": rule.value}
        if rule.unit:
            d["unit"] = rule.unit
        return d
    if isinstance(rule, ColorRule):
        return {"type": rule.kind.value, "value": dict(rule.value)}
    if isinstance(rule, (StringRule, BooleanRule)):
        return {"type": rule.kind.value, "value": rule.value}
    raise UnsupportedRuleKind(rule)


def rule_from_dict(d: Any) -> Rule:
    if not isinstance(d, dict):
        raise RuleParseError(f"Rule document must be a mapping, got {type(d).__name__}")
    if "type" not in d:
        raise RuleParseError(f"Rule document has no 'type': {d!r}")
    if "value" not in d:
        raise RuleParseError(f"Rule document has no 'value': {d!r}")

    try:
        kind = RuleKind(d["type"])
    except ValueError:
        raise UnsupportedRuleKind(d) from None

    value = d["value"]
    if kind == RuleKind.STRING:
        if not isinstance(value, str):
            raise RuleParseError(f"SassString value must be a string: {d!r}")
        return StringRule(value)
    if kind == RuleKind.NUMBER:
        # bool is an int subclass but never a Sass number
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RuleParseError(f"SassNumber value must be a number: {d!r}")
        unit = d.get("unit") or None
        if unit is not None and not isinstance(unit, str):
            raise RuleParseError(f"SassNumber unit must be a string: {d!r}")
        return NumberRule(value, unit=unit)
    if kind == RuleKind.BOOLEAN:
        if not isinstance(value, bool):
            raise RuleParseError(f"SassBoolean value must be a bool: {d!r}")
        return BooleanRule(value)
    if kind == RuleKind.COLOR:
        if not isinstance(value, dict):
            raise RuleParseError(f"SassColor value must be a mapping: {d!r}")
        return ColorRule(dict(value))
    if kind == RuleKind.LIST:
        if not isinstance(value, list):
            raise RuleParseError(f"SassList value must be a list: {d!r}")
        return ListRule([rule_from_dict(item) for item in value])
    # RuleKind.MAP
    if not isinstance(value, dict):
        raise RuleParseError(f"SassMap value must be a mapping: {d!r}")
    return MapRule({str(k): rule_from_dict(v) for k, v in value.items()})


def rules_to_dict(rules: Dict[str, Rule]) -> Dict[str, Any]:
    return {name: rule_to_dict(rule) for name, rule in rules.items()}


def rules_from_dict(d: Any) -> Dict[str, Rule]:
    """Parse a sheet document: variable name -> rule document."""
    if not isinstance(d, dict):
        raise RuleParseError(f"Sheet document must be a mapping, got {type(d).__name__}")
    rules: Dict[str, Rule] = {}
    for name, rule in d.items():
        if not isinstance(name, str) or not name:
            raise RuleParseError(f"Sass variable name must be a non-empty string, got {name!r}")
        rules[name] = rule_from_dict(rule)
    return rules


def rules_from_json(s: str) -> Dict[str, Rule]:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise RuleParseError(f"Invalid JSON rule document: {e}") from e
    return rules_from_dict(d)


def rules_from_yaml(s: str) -> Dict[str, Rule]:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise RuleParseError(f"Invalid YAML rule document: {e}") from e
    return rules_from_dict(d)


def load_rules_file(filepath: str) -> Dict[str, Rule]:
    """
    Load a sheet of rules from a JSON or YAML file.

    Args:
        filepath: Path ending in .json, .yaml or .yml

    Returns:
        Mapping of variable name -> Rule, in file order

    Raises:
        FileNotFoundError: If file doesn't exist
        RuleParseError: If the suffix is unknown or the document is malformed
        UnsupportedRuleKind: If a document carries an unknown type tag
    """
    ext = os.path.splitext(filepath)[1].lower()
    if ext == ".json":
        parse = rules_from_json
    elif ext in (".yaml", ".yml"):
        parse = rules_from_yaml
    else:
        raise RuleParseError(f"Unsupported rule file extension: {ext or filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Rule file not found: {filepath}")

    rules = parse(content)
    logger.debug("Loaded %d Sass variables from %s", len(rules), filepath)
    return rules


__all__ = [
    "RuleParseError",
    "rule_to_dict",
    "rule_from_dict",
    "rules_to_dict",
    "rules_from_dict",
    "rules_from_json",
    "rules_from_yaml",
    "load_rules_file",
]
