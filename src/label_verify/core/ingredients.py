"""
Ingredient Entries
==================

Expected ingredients arrive from product records as loosely typed JSON:
either bare strings or objects carrying a ``name``. They are coerced once
into ``IngredientEntry`` values so the comparator never inspects raw types.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Mapping, Optional

logger = logging.getLogger(__name__)


class IngredientKind(str, Enum):
    """Which shape the ingredient had in the product record."""
    NAMED = 'named'  # structured entry with a ``name`` field
    BARE = 'bare'    # plain string (or raw fallback)


@dataclass(frozen=True)
class IngredientEntry:
    """One expected ingredient, tagged by its source shape."""
    kind: IngredientKind
    name: str
    
    @classmethod
    def named(cls, name: str) -> 'IngredientEntry':
        return cls(IngredientKind.NAMED, name)
    
    @classmethod
    def bare(cls, name: str) -> 'IngredientEntry':
        return cls(IngredientKind.BARE, name)
    
    def to_dict(self) -> Any:
        """Back to the JSON shape it was read from."""
        if self.kind is IngredientKind.NAMED:
            return {'name': self.name}
        return self.name


def display_name(entry: IngredientEntry) -> str:
    """Name reported in matched/missing lists and discrepancy messages."""
    return entry.name


def _coerce_entry(raw: Any) -> IngredientEntry:
    if isinstance(raw, IngredientEntry):
        return raw
    if isinstance(raw, str):
        return IngredientEntry.bare(raw)
    if isinstance(raw, Mapping):
        name = raw.get('name')
        if name:
            return IngredientEntry.named(str(name))
        # No usable name: fall back to the raw entry itself
        logger.debug(f"Ingredient entry without name, using raw value: {raw!r}")
        return IngredientEntry.bare(str(raw))
    return IngredientEntry.bare(str(raw))


def coerce_ingredients(raw: Any) -> Optional[List[IngredientEntry]]:
    """
    Convert raw expected-ingredients data into entries.
    
    Args:
        raw: A list/tuple of strings, mappings with ``name``, or
            ``IngredientEntry`` values
        
    Returns:
        List of entries in source order, or None when there is no usable
        expectation (absent or not a list)
        
    Examples:
        >>> coerce_ingredients(["sugar", {"name": "salt"}])
        [IngredientEntry(kind=<IngredientKind.BARE: 'bare'>, name='sugar'), IngredientEntry(kind=<IngredientKind.NAMED: 'named'>, name='salt')]
        >>> coerce_ingredients("sugar, salt") is None
        True
    """
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)):
        logger.warning(f"Ignoring expected ingredients of type {type(raw).__name__}; treating as no constraint")
        return None
    return [_coerce_entry(item) for item in raw]
