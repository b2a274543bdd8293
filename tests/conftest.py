"""
Pytest configuration and shared fixtures for label_verify tests.
"""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from label_verify.config import reset_config  # noqa: E402

LABEL_ENV_VARS = (
    'LABEL_MIN_TOKEN_LENGTH',
    'LABEL_VERBAGE_WORD_SIM',
    'LABEL_VERBAGE_MATCH',
    'LABEL_INGREDIENT_SIM',
    'LABEL_INGREDIENT_MATCH',
    'LABEL_RANKING_MIN_SCORE',
    'LABEL_LOW_OCR_CONFIDENCE',
    'LABEL_MAX_ALTERNATIVES',
    'LABEL_LOG_LEVEL',
    'LABEL_LOG_FILE',
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Every test starts from default thresholds and a fresh global config."""
    for name in LABEL_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
