"""
Example theme builder.

Builds the rules an upstream parser would produce for a small theme sheet:

    $brand: rgba(255, 102, 0, 1);
    $gap: 10px;
    $line-height: 1.5;
    $font-stack: ("Inter", "Helvetica", sans-serif);
    $dark-mode: false;
    $spacing: (sm: 4px, md: 8px, lg: (base: 16px, steps: (1, 2)));
"""
from typing import Dict

from sasstokens.rules import (
    Rule,
    StringRule,
    NumberRule,
    ListRule,
    MapRule,
    ColorRule,
    BooleanRule,
)


def build_example_theme(gap: int = 10, unit: str = "px") -> Dict[str, Rule]:
    spacing = MapRule({
        "sm": NumberRule(4, unit=unit),
        "md": NumberRule(8, unit=unit),
        "lg": MapRule({
            "base": NumberRule(16, unit=unit),
            "steps": ListRule([NumberRule(1), NumberRule(2)]),
        }),
    })

    return {
        "brand": ColorRule({"red": 255, "green": 102, "blue": 0, "alpha": 1}),
        "gap": NumberRule(gap, unit=unit),
        "line-height": NumberRule(1.5),
        "font-stack": ListRule([
            StringRule("Inter"),
            StringRule("Helvetica"),
            StringRule("sans-serif"),
        ]),
        "dark-mode": BooleanRule(False),
        "spacing": spacing,
    }
