"""Integration fixtures: a full VirtualCameraApp wired to scripted devices."""

from __future__ import annotations

from typing import Callable

import pytest
import pytest_asyncio

from procam.modules.VirtualCamera import VirtualCameraApp, VirtualCameraConfig
from tests.infrastructure.mocks import MockCameraCapability


@pytest.fixture
def fast_config(tmp_path) -> VirtualCameraConfig:
    """Small viewport and short feedback timers so flows settle quickly."""
    return VirtualCameraConfig(
        output_dir=tmp_path / "captures",
        viewport_width=30,
        viewport_height=40,
        device_pixel_ratio=2.0,
        flash_duration=0.01,
        toast_duration=0.05,
    )


@pytest_asyncio.fixture
async def app_factory(fast_config, memory_sink) -> Callable[..., VirtualCameraApp]:
    created: list[VirtualCameraApp] = []

    def factory(capability=None, **kwargs) -> VirtualCameraApp:
        kwargs.setdefault("output_sink", memory_sink)
        app = VirtualCameraApp(
            kwargs.pop("config", fast_config),
            capability=capability if capability is not None else MockCameraCapability(),
            **kwargs,
        )
        created.append(app)
        return app

    yield factory

    for app in created:
        await app.shutdown()
