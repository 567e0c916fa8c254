"""Root conftest: shared test configuration and collaborator fakes."""

import os

import pytest

# Ensure tests don't accidentally use real credentials
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test-fake-key")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ.setdefault("LOG_FORMAT", "text")

from chatbot.core.language_strings import get_strings  # noqa: E402
from chatbot.core.domain_types import Locale  # noqa: E402
from chatbot.core.session_store import SessionStore  # noqa: E402

from tests.fakes import FakeBackend, FakeGenerator  # noqa: E402


@pytest.fixture
def strings():
    return get_strings(Locale.JA)


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def backend():
    return FakeBackend()
