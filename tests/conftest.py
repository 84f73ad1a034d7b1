"""Shared test fixtures and configuration."""

import sys
from pathlib import Path

# Add pr_gate/ to Python path so `from prgate.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "pr_gate"))

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def login_spec_patch(fixtures_dir: Path) -> str:
    return (fixtures_dir / "login.spec.ts.patch").read_text(encoding="utf-8")


@pytest.fixture
def wallet_view_patch(fixtures_dir: Path) -> str:
    return (fixtures_dir / "WalletView.ts.patch").read_text(encoding="utf-8")
