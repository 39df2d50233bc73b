from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml

from shared_modules.config import Config


@pytest.fixture(autouse=True)
def reset_config():
    """Config ist ein Singleton; jeder Test startet ohne Instanz."""
    Config.reset()
    yield
    Config.reset()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Dict[str, Any]], Path]:
    """Schreibt ein Config-Dictionary als YAML und gibt den Pfad zurück."""

    def _write(content: Dict[str, Any], name: str = "sepa_qr_config.yaml") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(content, f, allow_unicode=True)
        return path

    return _write


@pytest.fixture
def beneficiary_config() -> Dict[str, Any]:
    return {
        "logging": {"log_level": "DEBUG"},
        "payment_defaults": {"version": 2, "character_set": 1, "currency": "EUR"},
        "beneficiary": {
            "name": "Max Mustermann",
            "iban": "DE02 1203 0000 0000 2020 51",
            "bic": "BYLADEM1001",
        },
    }
