"""Shared pytest configuration and fixtures for the ProCam test suite."""

import sys
from pathlib import Path
from typing import Callable

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from procam.modules.VirtualCamera.core import Action, AppState, CaptureResult  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a physical camera"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a physical camera",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def initial_state() -> AppState:
    return AppState()


@pytest.fixture
def image_state() -> AppState:
    return AppState(selected_image=b"image", is_active=True)


@pytest.fixture
def action_collector() -> tuple[list[Action], Callable]:
    actions: list[Action] = []

    async def dispatch(action: Action) -> None:
        actions.append(action)
    return actions, dispatch


@pytest.fixture
def white_png() -> bytes:
    from tests.infrastructure.helpers import make_image_bytes
    return make_image_bytes((40, 20), (255, 255, 255))


class MemoryOutputSink:
    def __init__(self):
        self.delivered: list[CaptureResult] = []

    async def deliver(self, result: CaptureResult):
        self.delivered.append(result)
        return None


@pytest.fixture
def memory_sink() -> MemoryOutputSink:
    return MemoryOutputSink()


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_stream():
    """Create a live stream double that already holds a frame."""
    from tests.infrastructure.mocks import MockStream
    return MockStream()


@pytest.fixture
def mock_capability():
    """Factory for scripted camera capabilities."""
    from tests.infrastructure.mocks import MockCameraCapability
    return MockCameraCapability
