"""
Shared pytest fixtures for the hubline test suite.

Provides sessions built by HublineTestFactory: real settings store and
command table, mocked ClientServices, no network.

Usage in tests:
    def test_something(hubline_factory):
        hubline_factory.run("/set slots 4")
        assert hubline_factory.last == "global.slots = 4"

    def test_on_hub(hub_env):
        # hub_env has '#example' open, logged in, with alice and bob online
        hub_env.run("/msg alice hi")
"""

import pytest

from tests.factories import HublineTestFactory


@pytest.fixture
def hubline_factory(tmp_path):
    """
    Create an empty HublineTestFactory.

    The main tab is selected and no hubs are open.
    """
    return HublineTestFactory(tmp_path)


@pytest.fixture
def hub_env(tmp_path):
    """
    Create a HublineTestFactory with one logged-in hub.

    Pre-populated with:
    - hub '#example' at dchub://example.org:411/, tab selected
    - online users: alice, bob, Bobby
    """
    factory = HublineTestFactory(tmp_path)
    factory.add_hub(
        "example", address="dchub://example.org:411/",
        logged_in=True, users=["alice", "bob", "Bobby"],
    )
    return factory


@pytest.fixture
def store():
    """A VariableStore over an empty in-memory backend."""
    from hubline.settings import MemoryBackend, VariableStore
    return VariableStore(MemoryBackend())
