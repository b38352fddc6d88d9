"""Camera module for view state and primary ray generation.

Components:
    pinhole: Pinhole camera config/state, keyboard input and ray generation

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import (
    KEY_BINDINGS,
    LEGACY_ROW_ANCHOR,
    MOVE_STEP,
    Camera,
    CameraConfig,
    CameraSnapshot,
    apply_input,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "CameraConfig",
    "CameraSnapshot",
    "setup_camera",
    "apply_input",
    "get_ray",
    "get_camera_info",
    "KEY_BINDINGS",
    "LEGACY_ROW_ANCHOR",
    "MOVE_STEP",
]
