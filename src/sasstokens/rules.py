"""
Rule Model for Sass Tokens

Every Sass variable handed to the converter is a typed Rule, produced
by the upstream Sass parser. Rules are a closed tagged union:

    - StringRule   (SassString)
    - NumberRule   (SassNumber, optional unit)
    - ListRule     (SassList, ordered children)
    - MapRule      (SassMap, keyed children)
    - ColorRule    (SassColor, opaque channel mapping)
    - BooleanRule  (SassBoolean)

ARCHITECTURAL RULE:
    The kind tag is fixed per class.
    The converter trusts it and never rewrites it.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union


class RuleKind(Enum):
    """
    Type tags emitted by the upstream parser.

    The values match the parser's `type` field verbatim so documents
    can be loaded without a translation table.
    """

    STRING = "SassString"
    NUMBER = "SassNumber"
    LIST = "SassList"
    MAP = "SassMap"
    COLOR = "SassColor"
    BOOLEAN = "SassBoolean"


class Rule(ABC):
    """
    Base class for all Sass rules.

    Structure only. Conversion belongs in `sasstokens.converter`,
    document loading in `sasstokens.serialization`.
    """

    kind: ClassVar[RuleKind]


@dataclass(frozen=True)
class StringRule(Rule):
    """
    A quoted or unquoted Sass string.

    Example:
        $font-family: "Inter";

    Becomes:
        StringRule("Inter")
    """

    kind: ClassVar[RuleKind] = RuleKind.STRING

    value: str


@dataclass(frozen=True)
class NumberRule(Rule):
    """
    A Sass number with an optional unit.

    Examples:
        $gap: 10px;   -> NumberRule(10, unit="px")
        $ratio: 1.5;  -> NumberRule(1.5)

    The unit is kept as the raw string the parser produced.
    """

    kind: ClassVar[RuleKind] = RuleKind.NUMBER

    value: Union[int, float]
    unit: Optional[str] = None


@dataclass(frozen=True)
class ListRule(Rule):
    """
    An ordered Sass list.

    Order is significant: lists are not sets.
    """

    kind: ClassVar[RuleKind] = RuleKind.LIST

    value: List[Rule] = field(default_factory=list)


@dataclass(frozen=True)
class MapRule(Rule):
    """
    A Sass map from string keys to nested rules.

    Example:
        $spacing: (sm: 4px, md: 8px);

    Becomes:
        MapRule({"sm": NumberRule(4, "px"), "md": NumberRule(8, "px")})

    IMPORTANT:
        Keys keep declaration order (plain dict insertion order),
        which is the order tokens are emitted in.
    """

    kind: ClassVar[RuleKind] = RuleKind.MAP

    value: Dict[str, Rule] = field(default_factory=dict)


@dataclass(frozen=True)
class ColorRule(Rule):
    """
    A Sass color.

    Properties:
        value: Channel mapping, e.g. {"red": 255, "green": 0, "blue": 0, "alpha": 1}

    The channel mapping is opaque here. It is copied into tokens,
    never interpreted or validated.
    """

    kind: ClassVar[RuleKind] = RuleKind.COLOR

    value: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BooleanRule(Rule):
    """A Sass `true` / `false`."""

    kind: ClassVar[RuleKind] = RuleKind.BOOLEAN

    value: bool


# Plain token tree handed to downstream writers.
TokenValue = Union[str, bool, List["TokenValue"], Dict[str, Any]]


__all__ = [
    "RuleKind",
    "Rule",
    "StringRule",
    "NumberRule",
    "ListRule",
    "MapRule",
    "ColorRule",
    "BooleanRule",
    "TokenValue",
]
