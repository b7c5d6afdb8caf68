from __future__ import annotations

from pathlib import Path

import pytest

from docsplit.config import DocSplitConfig
from tests._fixtures.fake_converter import FakeConverter


@pytest.fixture
def fake_converter() -> FakeConverter:
    """Provide a converter that serves canned documents by file name."""
    return FakeConverter()


@pytest.fixture
def split_config(tmp_path: Path) -> DocSplitConfig:
    """Default configuration writing under a throwaway output directory."""
    return DocSplitConfig(root=tmp_path, output_dir=tmp_path / "out")
