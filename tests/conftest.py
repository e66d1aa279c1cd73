"""Pytest configuration and shared fixtures for card scanner tests."""

from typing import List, Optional, Union

import cv2
import numpy as np
import pytest

from efscan.core.types import LanguageHint


def encode_png(image: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


class FakeEngine:
    """Scripted stand-in for RecognitionEngine.

    Each ``recognize`` call pops the next scripted response; an exception
    instance in the script is raised instead of returned.
    """

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None):
        self.responses = list(responses or [])
        self.calls = []
        self.opened = 0
        self.closed = 0

    async def __aenter__(self):
        self.opened += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed += 1

    async def recognize(self, image_bytes: bytes, language_hint: LanguageHint, psm=None) -> str:
        self.calls.append({"image_bytes": image_bytes, "language": language_hint, "psm": psm})
        response = self.responses.pop(0) if self.responses else ""
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture(scope="function")
def blank_image_bytes():
    """A dark 160x90 screenshot as PNG bytes."""
    image = np.full((90, 160, 3), 20, dtype=np.uint8)
    return encode_png(image)


@pytest.fixture(scope="function")
def fake_engine_factory():
    """Build a FakeEngine and a factory returning it."""
    def build(responses=None):
        engine = FakeEngine(responses)
        return engine, (lambda: engine)
    return build


# Configure pytest options
def pytest_configure(config):
    """Configure pytest with custom options."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "integration" in item.name.lower() or "Integration" in str(item.cls):
            item.add_marker(pytest.mark.integration)

        if not item.get_closest_marker('integration') and not item.get_closest_marker('slow'):
            item.add_marker(pytest.mark.unit)
