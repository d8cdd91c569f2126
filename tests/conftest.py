import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_DIR = PROJECT_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

KEYS_DIR = Path(__file__).resolve().parent / "keys"

# PBKDF2 output for password "secret-password" and salt "password-salt".
EXAMPLE_KEY = "12d424724067e66bbfc80f0df651695792a42307e9507b2725600016c8dbc337"


@pytest.fixture
def encryption_key() -> str:
    return EXAMPLE_KEY


@pytest.fixture
def example_public_key_path() -> Path:
    return KEYS_DIR / "example_public.pem"


@pytest.fixture
def example_private_key_path() -> Path:
    return KEYS_DIR / "example_private.pem"


@pytest.fixture
def example_public_key(example_public_key_path: Path) -> str:
    return example_public_key_path.read_text(encoding="ascii")


@pytest.fixture
def example_private_key(example_private_key_path: Path) -> str:
    return example_private_key_path.read_text(encoding="ascii")
