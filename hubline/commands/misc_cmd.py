"""
Miscellaneous commands — /clear, /connections, /queue, /gc, /listen,
/version and /quit

All of these take no arguments.
"""

import platform

from ..session import TabKind
from ..version import __version__
from .base import BaseCommand


class ClearCommand(BaseCommand):
    name = "clear"

    def run(self, args: str) -> None:
        if not self.reject_args(args):
            self.log.clear()


class ConnectionsCommand(BaseCommand):
    name = "connections"

    def run(self, args: str) -> None:
        if not self.reject_args(args):
            self.services.open_view(TabKind.CONNECTIONS)


class QueueCommand(BaseCommand):
    name = "queue"

    def run(self, args: str) -> None:
        if not self.reject_args(args):
            self.services.open_view(TabKind.QUEUE)


class GcCommand(BaseCommand):
    name = "gc"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        self.write("Collecting garbage...")
        if not self.services.collect_garbage():
            self.write("Not checking for unused hash data: File list refresh"
                       " in progress or not performed yet.")
        self.write("Garbage-collection done.")


class ListenCommand(BaseCommand):
    name = "listen"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        ports = self.services.listening_ports()
        if not ports:
            self.write("Not active on any hub - no listening sockets enabled.")
            return
        self.write()
        self.write("Currently opened ports:")
        for port in ports:
            self.write(f" {port}")
        self.write()


class VersionCommand(BaseCommand):
    name = "version"

    def run(self, args: str) -> None:
        if not self.reject_args(args):
            self.write_block([
                f"hubline {__version__}",
                f"Python {platform.python_version()} ({platform.system() or 'unknown'})",
            ])


class QuitCommand(BaseCommand):
    name = "quit"

    def run(self, args: str) -> None:
        self.services.quit()


COMMANDS = [
    ClearCommand, ConnectionsCommand, GcCommand, ListenCommand,
    QueueCommand, QuitCommand, VersionCommand,
]
