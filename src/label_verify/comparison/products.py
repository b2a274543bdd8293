"""
Product records as seen by the matching engine.

The engine only needs ``expected_ingredients``; ``HasOptionalIngredients``
captures that so any catalog object (ORM row, API payload wrapper) can be
ranked without this package knowing about persistence. Plain mappings are
accepted too and read by key.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class HasOptionalIngredients(Protocol):
    """Anything exposing an optional expected-ingredients collection."""
    
    @property
    def expected_ingredients(self) -> Any: ...


# What the ranking and scan operations accept as a candidate product
ProductLike = Union[HasOptionalIngredients, Mapping[str, Any]]


def product_field(product: Any, name: str) -> Any:
    """Read ``name`` from a mapping by key or from any other object by attribute."""
    if isinstance(product, Mapping):
        return product.get(name)
    return getattr(product, name, None)


def product_summary(product: Any) -> Optional[Dict[str, Any]]:
    """Compact, JSON-safe identity of a product used in reports."""
    if product is None:
        return None
    return {
        'id': product_field(product, 'id'),
        'name': product_field(product, 'name'),
        'barcode': product_field(product, 'barcode'),
    }


@dataclass(frozen=True)
class ProductCandidate:
    """
    Read-only product record supplied by a catalog.
    
    ``expected_ingredients`` is None when the product carries no ingredient
    expectation; otherwise it holds the raw entries as stored (strings or
    mappings with ``name``).
    """
    id: Any
    name: str = ""
    barcode: Optional[str] = None
    expected_verbage: Optional[str] = None
    expected_ingredients: Any = None
    reference_image_url: Optional[str] = None
    
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProductCandidate':
        """Build from a catalog-style mapping; unknown keys are ignored."""
        barcode = data.get('barcode')
        raw_ingredients = data.get('expected_ingredients')
        if isinstance(raw_ingredients, list):
            raw_ingredients = tuple(raw_ingredients)
        return cls(
            id=data.get('id'),
            name=data.get('name') or "",
            barcode=str(barcode) if barcode is not None else None,
            expected_verbage=data.get('expected_verbage'),
            expected_ingredients=raw_ingredients,
            reference_image_url=data.get('reference_image_url'),
        )
    
    def summary(self) -> Dict[str, Any]:
        return product_summary(self)
