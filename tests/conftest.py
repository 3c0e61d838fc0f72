"""Shared fixtures and markers for smol_symbol tests."""
import string

import pytest

from smol_symbol import custom_alphabet


def pytest_configure(config):
    config.addinivalue_line("markers", "db: requires PostgreSQL connection")


@pytest.fixture
def hexish():
    """16-character alphabet: 0-9 a-f."""
    return custom_alphabet("hexish", "0123456789abcdef")


@pytest.fixture
def naive_hello_world():
    """The 11 characters of 'hello_world', duplicates kept."""
    return custom_alphabet("hello_world", "hello_world", strict=False)


@pytest.fixture
def wide():
    """68-character alphabet."""
    return custom_alphabet("wide", string.ascii_letters + string.digits + "_-.:/+")
