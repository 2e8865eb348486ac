# SPDX-License-Identifier: MIT
# Copyright (c) 2026 ADNT Sarl <info@adnt.io>

"""Pytest configuration and shared fixtures."""

import pytest

from postcard_lite import init_slice


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--device",
        action="store",
        default=None,
        help="Serial port of a device echoing postcard frames (e.g., /dev/ttyACM0)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless a device is given."""
    if config.getoption("--device"):
        return
    skip = pytest.mark.skip(reason="needs --device")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(scope="session")
def device_port(request):
    """Serial port given on the command line, if any."""
    return request.config.getoption("--device")


@pytest.fixture
def buffer():
    """A zeroed 64-byte buffer."""
    return bytearray(64)


@pytest.fixture
def cursor(buffer):
    """An encode cursor over the buffer fixture."""
    return init_slice(buffer)
