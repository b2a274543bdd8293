"""
Tests for the label-verify command line interface.

Run with: pytest tests/test_cli.py -v
"""

import json
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from label_verify.cli import load_products, main
from label_verify.errors import CatalogLoadError


OCR_PANTRY = "sugar salt water flour yeast honey butter milk eggs oats"

PRODUCTS = [
    {"id": 1, "name": "Peanut Butter", "barcode": "012345678905",
     "expected_verbage": "Organic Peanut Butter"},
    {"id": 2, "name": "Honey Oat Bread",
     "expected_ingredients": ["sugar", "salt", "water", "flour", "yeast",
                              "honey", "butter", "milk", "eggs", "cocoa"]},
    {"id": 3, "name": "Vanilla Syrup", "expected_ingredients": ["sugar", {"name": "vanilla"}]},
    {"id": 4, "name": "Cinnamon Roll", "expected_ingredients": ["flour", "yeast", "honey", "cinnamon"]},
]


@pytest.fixture
def products_file(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(PRODUCTS))
    return str(path)


class TestLoadProducts:
    """Tests for load_products."""
    
    def test_json_list(self, products_file):
        products = load_products(products_file)
        assert [p.id for p in products] == [1, 2, 3, 4]
        assert products[2].expected_ingredients == ("sugar", {"name": "vanilla"})
    
    def test_yaml_with_products_key(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "products:\n"
            "  - id: 9\n"
            "    name: Salt\n"
            "    barcode: 4006381333931\n"
            "    expected_ingredients: [salt]\n"
        )
        products = load_products(str(path))
        assert products[0].barcode == "4006381333931"
        assert products[0].expected_ingredients == ("salt",)
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogLoadError) as exc_info:
            load_products(str(tmp_path / "absent.json"))
        assert exc_info.value.reason == "file not found"
    
    def test_wrong_shape(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"id": 1}))
        with pytest.raises(CatalogLoadError):
            load_products(str(path))
    
    def test_malformed(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("[{")
        with pytest.raises(CatalogLoadError):
            load_products(str(path))


class TestVerbageCommand:
    """label-verify verbage"""
    
    def test_match(self, capsys):
        assert main(["verbage", "organic peanut buter", "Organic Peanut Butter"]) == 0
        out = capsys.readouterr().out
        assert "Verbage: MATCH" in out
    
    def test_mismatch(self, capsys):
        assert main(["verbage", "peanut", "Organic Peanut Butter"]) == 1
        out = capsys.readouterr().out
        assert "MISMATCH" in out
        assert 'Missing expected word: "organic"' in out
    
    def test_json_output(self, capsys):
        assert main(["--json", "verbage", "peanut butter", "crunchy peanut butter"]) == 1
        data = json.loads(capsys.readouterr().out)
        assert data['missing_text'] == ["crunchy"]
        assert data['confidence'] == pytest.approx(2 / 3)


class TestIngredientsCommand:
    """label-verify ingredients"""
    
    def test_partial(self, capsys):
        code = main(["ingredients", "sugar salt water", "--ingredients", '["sugar", "salt", "pepper"]'])
        assert code == 1
        assert "Missing: pepper" in capsys.readouterr().out
    
    def test_no_expectation(self, capsys):
        assert main(["ingredients", "sugar"]) == 0
    
    def test_invalid_json(self, capsys):
        assert main(["ingredients", "sugar", "-i", "[sugar"]) == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestRankCommand:
    """label-verify rank"""
    
    def test_ranked_output(self, capsys, products_file):
        assert main(["rank", OCR_PANTRY, "--products", products_file]) == 0
        out = capsys.readouterr().out
        assert out.index("Honey Oat Bread") < out.index("Cinnamon Roll")
        assert "Vanilla Syrup" not in out
    
    def test_top(self, capsys, products_file):
        main(["--json", "rank", OCR_PANTRY, "-p", products_file, "--top", "1"])
        data = json.loads(capsys.readouterr().out)
        assert [m['product']['id'] for m in data] == [2]
        assert data[0]['match_score'] == pytest.approx(0.9)
    
    def test_no_matches(self, capsys, products_file):
        assert main(["rank", "nothing useful", "-p", products_file]) == 1
        assert "No products match" in capsys.readouterr().out
    
    def test_missing_products_file(self, capsys, tmp_path):
        assert main(["rank", OCR_PANTRY, "-p", str(tmp_path / "absent.json")]) == 1
        assert "Error: Failed to load products" in capsys.readouterr().out


class TestScanCommands:
    """label-verify scan-verbage / scan-ingredients"""
    
    def test_scan_verbage(self, capsys, products_file):
        code = main(["scan-verbage", "organic peanut butter", "-p", products_file, "-b", "012345678905"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Status: matched" in out
        assert "Peanut Butter" in out
    
    def test_scan_verbage_low_confidence(self, capsys, products_file):
        code = main([
            "--json", "scan-verbage", "organic peanut butter",
            "-p", products_file, "-b", "012345678905", "--ocr-confidence", "0.4",
        ])
        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert [n['type'] for n in data['discrepancy_notes']] == ["ocr_quality"]
    
    def test_scan_without_barcode(self, capsys, products_file):
        assert main(["scan-verbage", "organic peanut butter", "-p", products_file]) == 1
        assert "[barcode] No barcode detected" in capsys.readouterr().out
    
    def test_scan_ingredients(self, capsys, products_file):
        assert main(["--json", "scan-ingredients", OCR_PANTRY, "-p", products_file]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['product']['id'] == 2
        assert [m['product']['id'] for m in data['alternative_matches']] == [4]


class TestGlobalOptions:
    """Options shared by all commands."""
    
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage:" in capsys.readouterr().out
    
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "label-verify 1.0.0" in capsys.readouterr().out
    
    def test_config_file(self, capsys, tmp_path):
        config_path = tmp_path / "verifier.yaml"
        config_path.write_text("matching:\n  verbage_match_threshold: 0.6\n")
        code = main(["--config", str(config_path), "verbage", "peanut butter", "crunchy peanut butter"])
        assert code == 0
    
    def test_bad_config_file(self, capsys, tmp_path):
        config_path = tmp_path / "verifier.yaml"
        config_path.write_text("matching:\n  verbage_match_threshold: 2\n")
        assert main(["-c", str(config_path), "verbage", "a", "b"]) == 1
        assert "Error: Configuration error" in capsys.readouterr().out
    
    @pytest.mark.parametrize("config_text", [
        "matching: 0.6\n",
        "logging:\n  level: 10\n",
    ])
    def test_malformed_config_sections(self, capsys, tmp_path, config_text):
        config_path = tmp_path / "verifier.yaml"
        config_path.write_text(config_text)
        assert main(["-c", str(config_path), "verbage", "a", "b"]) == 1
        assert capsys.readouterr().out.startswith("Error: Configuration error")
