"""Core type definitions."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum


class CssCategory(StrEnum):
    """SMACSS stylesheet categories, in cascade order."""

    BASE = "base"
    LAYOUT = "layout"
    COMPONENT = "component"
    STATE = "state"
    THEME = "theme"


# Opaque per-file options (e.g. {"weight": 1}, {"media": "print"})
AssetOptions = dict[str, object]


@dataclass(frozen=True)
class AssetDeclaration:
    """A library file relative to the library root, with its options."""

    filename: str
    options: AssetOptions = field(default_factory=dict)


CssAssetSet = Mapping[CssCategory, Sequence[AssetDeclaration]]
JsAssetSet = Sequence[AssetDeclaration]

# Output keys are the rewritten paths or URLs
ProcessedCssAssets = dict[CssCategory, dict[str, AssetOptions]]
ProcessedJsAssets = dict[str, AssetOptions]
