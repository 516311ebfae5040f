"""
Sass Tokens Package

Converts typed Sass variable rules into plain design-token trees.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Sass source syntax (parsing happens upstream)
    - Output file formats (CSS, JSON, YAML writers live downstream)
    - Variable reference resolution

This package defines the RULE -> TOKEN transform only.

The converter is pure: same rule in, structurally equal tokens out.
"""

__version__ = "0.1.0"
