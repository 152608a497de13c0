"""
Tests for argument-less commands — /clear, /connections, /queue, /gc,
/listen, /version and /quit
"""

import pytest

from hubline.commands.base import NO_ARGUMENTS
from hubline.session import TabKind
from hubline.version import __version__


class TestClear:

    def test_clears_log(self, hubline_factory):
        hubline_factory.log.write("old")
        hubline_factory.run("/clear")
        assert hubline_factory.output == []

    def test_arguments(self, hubline_factory):
        hubline_factory.log.write("old")
        hubline_factory.run("/clear all")
        assert hubline_factory.output == ["old", NO_ARGUMENTS]


class TestViews:

    def test_connections(self, hubline_factory):
        hubline_factory.run("/connections")
        hubline_factory.services.open_view.assert_called_once_with(TabKind.CONNECTIONS)

    def test_queue(self, hubline_factory):
        hubline_factory.run("/queue")
        hubline_factory.services.open_view.assert_called_once_with(TabKind.QUEUE)


class TestGc:

    def test_done(self, hubline_factory):
        assert hubline_factory.run("/gc") == ["Collecting garbage...", "Garbage-collection done."]

    def test_hash_data_skipped(self, hubline_factory):
        hubline_factory.services.collect_garbage.return_value = False
        lines = hubline_factory.run("/gc")
        assert len(lines) == 3
        assert lines[1].startswith("Not checking for unused hash data")


class TestListen:

    def test_inactive(self, hubline_factory):
        assert hubline_factory.run("/listen") == [
            "Not active on any hub - no listening sockets enabled."
        ]

    def test_ports(self, hubline_factory):
        hubline_factory.services.listening_ports.return_value = ["TCP 1511", "UDP 1511"]
        assert hubline_factory.run("/listen") == [
            "", "Currently opened ports:", " TCP 1511", " UDP 1511", "",
        ]


class TestVersion:

    def test_output(self, hubline_factory):
        lines = hubline_factory.run("/version")
        assert lines[1] == f"hubline {__version__}"
        assert lines[2].startswith("Python ")


class TestQuit:

    def test_quit(self, hubline_factory):
        hubline_factory.run("/quit")
        hubline_factory.services.quit.assert_called_once_with()


@pytest.mark.parametrize("command", ["connections", "queue", "gc", "listen", "version"])
def test_rejects_arguments(hubline_factory, command):
    assert hubline_factory.run(f"/{command} now") == [NO_ARGUMENTS]
