import pytest

from _images import gradient


@pytest.fixture
def gradient_rgb():
    return gradient()
