"""
Tests for ingredient entry coercion.
"""

import sys
from pathlib import Path

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from label_verify.core import IngredientEntry, IngredientKind, coerce_ingredients, display_name


class TestCoerceIngredients:
    """Tests for coerce_ingredients function."""
    
    def test_none_is_no_constraint(self):
        assert coerce_ingredients(None) is None
    
    def test_non_list_is_no_constraint(self):
        assert coerce_ingredients("sugar, salt") is None
        assert coerce_ingredients({"name": "sugar"}) is None
        assert coerce_ingredients(42) is None
    
    def test_empty_list(self):
        assert coerce_ingredients([]) == []
    
    def test_strings_are_bare(self):
        entries = coerce_ingredients(["Sugar", "salt"])
        assert entries == [IngredientEntry.bare("Sugar"), IngredientEntry.bare("salt")]
        assert all(e.kind is IngredientKind.BARE for e in entries)
    
    def test_mappings_are_named(self):
        entries = coerce_ingredients([{"name": "Sea Salt", "percent": 2}])
        assert entries == [IngredientEntry.named("Sea Salt")]
    
    def test_mixed_shapes_keep_order(self):
        entries = coerce_ingredients(["water", {"name": "flour"}, "yeast"])
        assert [display_name(e) for e in entries] == ["water", "flour", "yeast"]
        assert [e.kind for e in entries] == [IngredientKind.BARE, IngredientKind.NAMED, IngredientKind.BARE]
    
    def test_tuple_accepted(self):
        assert coerce_ingredients(("sugar",)) == [IngredientEntry.bare("sugar")]
    
    def test_mapping_without_name_falls_back_to_raw(self):
        entries = coerce_ingredients([{"qty": 2}])
        assert entries == [IngredientEntry.bare("{'qty': 2}")]
    
    def test_empty_name_falls_back_to_raw(self):
        entries = coerce_ingredients([{"name": ""}])
        assert display_name(entries[0]) == "{'name': ''}"
    
    def test_entries_pass_through(self):
        entry = IngredientEntry.named("cocoa")
        assert coerce_ingredients([entry]) == [entry]


class TestIngredientEntry:
    """Tests for IngredientEntry values."""
    
    def test_display_name(self):
        assert display_name(IngredientEntry.named("Cane Sugar")) == "Cane Sugar"
        assert display_name(IngredientEntry.bare("salt")) == "salt"
    
    def test_to_dict_restores_shape(self):
        assert IngredientEntry.named("salt").to_dict() == {"name": "salt"}
        assert IngredientEntry.bare("salt").to_dict() == "salt"
    
    def test_kind_is_string_enum(self):
        assert IngredientKind.NAMED == "named"
