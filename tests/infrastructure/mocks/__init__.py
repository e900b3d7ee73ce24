from tests.infrastructure.mocks.camera_mocks import MockCameraCapability, MockStream

__all__ = ["MockCameraCapability", "MockStream"]
