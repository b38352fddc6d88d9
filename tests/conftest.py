"""Pytest configuration for renderer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. fast_math is off so
    frame bytes are reproducible across kernels.
    """
    ti.init(arch=ti.cpu, fast_math=False)
    yield


@pytest.fixture
def small_camera():
    """A 64x36 camera with the default 16:9 viewport."""
    from src.pixeltrace.camera.pinhole import CameraConfig, setup_camera

    return setup_camera(CameraConfig(image_width=64))
