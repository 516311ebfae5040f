"""
Rule -> token conversion.

Turns a typed Sass rule into a plain token fragment:
    - a bare scalar when no name is given
    - {name: value} when a name is given
    - a flat children mapping for maps (the name is dropped, see convert_map)
    - an ordered list for lists

Conversion is pure. The only error is UnsupportedRuleKind, which is never
caught here: a rule we do not recognise aborts the whole conversion.
"""
from __future__ import annotations

import dataclasses
import json
import logging
import math
from decimal import Decimal
from typing import Any, Dict, Mapping, Tuple, Union

from sasstokens.rules import (
    RuleKind,
    Rule,
    StringRule,
    NumberRule,
    ListRule,
    MapRule,
    ColorRule,
    BooleanRule,
    TokenValue,
)

logger = logging.getLogger(__name__)


class UnsupportedRuleKind(TypeError):
    """Raised when a rule's kind is outside the known Sass types."""

    def __init__(self, rule: Any):
        self.rule = rule
        super().__init__(f"Unexpected Sass type encountered: {describe_rule(rule)}")


def _to_plain(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        d: Dict[str, Any] = {}
        # kind is a ClassVar on Rule subclasses, so fields() skips it
        if isinstance(obj, Rule):
            d["type"] = _to_plain(obj.kind)
        for f in dataclasses.fields(obj):
            d[f.name] = _to_plain(getattr(obj, f.name))
        return d
    if isinstance(obj, Mapping):
        return {str(k): _to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_plain(v) for v in obj]
    if isinstance(obj, RuleKind):
        return obj.value
    return obj


def describe_rule(rule: Any) -> str:
    """Full structural dump of a rule, for error messages."""
    return json.dumps(_to_plain(rule), default=repr)


def _shortest_digits(value: float) -> Tuple[str, int]:
    """Significant digits and exponent of the shortest round-trip form."""
    t = Decimal(repr(value)).as_tuple()
    raw = "".join(str(d) for d in t.digits)
    digits = raw.rstrip("0") or "0"
    return digits, t.exponent + (len(raw) - len(digits))


def format_number(value: Union[int, float]) -> str:
    """
    Render a number the way the token files expect.

    Follows JavaScript's Number-to-String rules so units concatenate the same
    way downstream tools see them:
        10.0    -> "10"
        0.00001 -> "0.00001"   (positional from 1e-6 up to 1e21)
        1e-7    -> "1e-7"      (exponent without zero padding)
        1e21    -> "1e+21"
    """
    if isinstance(value, int) and abs(value) < 10 ** 21:
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, exponent = _shortest_digits(abs(value))
    k = len(digits)
    n = k + exponent  # position of the decimal point

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits[0] + (f".{digits[1:]}" if k > 1 else "")
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body


def convert_string(name: str, rule: StringRule, is_sub_prop: bool = False) -> TokenValue:
    if not name:
        return rule.value
    return {name: rule.value}


def convert_number(name: str, rule: NumberRule, is_sub_prop: bool = False) -> TokenValue:
    value = f"{format_number(rule.value)}{rule.unit or ''}"
    if not name:
        return value
    return {name: value}


def convert_list(name: str, rule: ListRule, is_sub_prop: bool = False) -> TokenValue:
    value = [convert_sass_variable(item, "", True) for item in rule.value]
    if not name:
        return value
    return {name: value}


def convert_map(name: str, rule: MapRule, is_sub_prop: bool = False) -> TokenValue:
    """
    Convert a map into a flat mapping of its converted children.

    NOTE:
        `name` is ignored in both branches. A named map does NOT come back
        as {name: children}; its children are returned directly, so maps
        always flatten into whatever contains them. Downstream token files
        depend on this shape.
    """
    children: Dict[str, TokenValue] = {}
    for key, child in rule.value.items():
        children[key] = convert_sass_variable(child, "", True)
    if not name:
        return children
    return dict(children)


def convert_color(name: str, rule: ColorRule, is_sub_prop: bool = False) -> TokenValue:
    if not name:
        return dict(rule.value)
    return {name: dict(rule.value)}


def convert_bool(name: str, rule: BooleanRule, is_sub_prop: bool = False) -> TokenValue:
    if not name:
        return rule.value
    return {name: rule.value}


_HANDLERS = {
    RuleKind.STRING: convert_string,
    RuleKind.NUMBER: convert_number,
    RuleKind.LIST: convert_list,
    RuleKind.MAP: convert_map,
    RuleKind.COLOR: convert_color,
    RuleKind.BOOLEAN: convert_bool,
}


def convert_sass_variable(rule: Rule, name: str = "", is_sub_prop: bool = False) -> TokenValue:
    """
    Convert a Sass rule or sub-rule into a token fragment.

    Args:
        rule: Rule produced by the upstream parser
        name: Token name; empty for values nested in a list or map
        is_sub_prop: Whether the rule sits inside a list or map

    Returns:
        Scalar, list or mapping (see module docstring)

    Raises:
        UnsupportedRuleKind: If rule.kind is not a known Sass type
    """
    kind = getattr(rule, "kind", None)
    handler = _HANDLERS.get(kind) if isinstance(kind, RuleKind) else None
    if handler is None:
        raise UnsupportedRuleKind(rule)
    return handler(name, rule, is_sub_prop)


def convert_sass_variables(rules: Mapping[str, Rule]) -> Dict[str, TokenValue]:
    """
    Convert every top-level variable of a sheet and merge the fragments.

    Variables are converted with their own name, in declaration order.
    Map variables contribute their children at the top level. On key
    collisions the later variable wins.

    Raises:
        ValueError: If a variable name is empty or not a string
        UnsupportedRuleKind: If any rule has an unknown kind
    """
    tokens: Dict[str, TokenValue] = {}
    for name, rule in rules.items():
        # an empty name would yield a bare value that cannot be merged
        if not isinstance(name, str) or not name:
            raise ValueError(f"Sass variable name must be a non-empty string, got {name!r}")
        fragment = convert_sass_variable(rule, name)
        tokens.update(fragment)
    logger.debug("Converted %d Sass variables into %d tokens", len(rules), len(tokens))
    return tokens


__all__ = [
    "UnsupportedRuleKind",
    "convert_sass_variable",
    "convert_sass_variables",
    "convert_string",
    "convert_number",
    "convert_list",
    "convert_map",
    "convert_color",
    "convert_bool",
    "describe_rule",
    "format_number",
]
