"""ProCam modules."""
