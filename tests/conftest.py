from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.source_builder import SourceBuilder


@pytest.fixture
def source_builder(tmp_path: Path) -> Iterator[SourceBuilder]:
    """Provide a source tree builder rooted at the pytest tmp_path."""
    builder = SourceBuilder(tmp_path)
    yield builder
    builder.cleanup()
