"""
Shared fixtures for the unit tests. Nothing here talks to a real cluster.
"""
import copy
import logging

import pytest

from rbacbootstrap.config import DEFAULT_CONFIG, Configuration
from tests.helpers import InMemoryManagementStore


@pytest.fixture
def store() -> InMemoryManagementStore:
    return InMemoryManagementStore()


@pytest.fixture
def settings() -> Configuration:
    """Default settings with the cheapest bcrypt cost to keep tests fast."""
    data = copy.deepcopy(DEFAULT_CONFIG)
    data["admin"]["bcrypt_rounds"] = 4
    return Configuration(data)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("rbacbootstrap.tests")
