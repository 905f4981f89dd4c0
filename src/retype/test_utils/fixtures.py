from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from .bus import SpyBus
    from .workspace import WorkspaceFactory


@pytest.fixture
def workspace_factory(tmp_path: Path) -> "WorkspaceFactory":
    """Provides a factory to create isolated test workspaces."""
    from .workspace import WorkspaceFactory

    return WorkspaceFactory(tmp_path)


@pytest.fixture
def spy_bus() -> "SpyBus":
    """Provides a SpyBus instance to intercept and inspect bus messages."""
    from .bus import SpyBus

    return SpyBus()
