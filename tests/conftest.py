import logging

import pytest

from unfireorm.testing import MemoryClient


@pytest.fixture(scope='function')
def client() -> MemoryClient:
    """ An empty in-memory store """
    client = MemoryClient()
    yield client
    client.clear()


@pytest.fixture(autouse=True)
def debug_logging(caplog: pytest.LogCaptureFixture):
    """ Capture the library's DEBUG logs """
    caplog.set_level(logging.DEBUG, logger='unfireorm')
