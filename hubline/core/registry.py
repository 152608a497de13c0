"""
Command Registry — Immutable, name-sorted table of commands

Each entry pairs a command object (anything with `name`, `run(args)` and
an optional `suggest(args)`) with its documentation. Documentation is
resolved once, here; a command without an entry in the doc table gets a
placeholder instead of failing.

Lookup is exact and case-sensitive: `open` is registered, `Open` is not.
"""

from dataclasses import dataclass
from typing import Iterator, List, Mapping, Optional, Sequence, TYPE_CHECKING

from ..content.help_text import COMMAND_DOCS, CommandDoc, NO_DOCUMENTATION

if TYPE_CHECKING:
    from ..commands.base import BaseCommand


def resolve_doc(name: str, docs: Mapping[str, CommandDoc]) -> CommandDoc:
    """Documentation for a command name, or the placeholder."""
    doc = docs.get(name)
    if doc is None:
        return CommandDoc(name, None, NO_DOCUMENTATION)
    return doc


@dataclass(frozen=True)
class CommandEntry:
    """A registered command and its documentation."""
    name: str
    command: 'BaseCommand'
    doc: CommandDoc

    @property
    def has_suggester(self) -> bool:
        return getattr(self.command, 'suggest', None) is not None

    def run(self, args: str) -> None:
        self.command.run(args)

    def suggest(self, args: str) -> List[str]:
        if not self.has_suggester:
            return []
        return list(self.command.suggest(args))


class Registry:
    """
    Ordered command table.

    Args:
        commands: Command objects; names must be unique
        docs: Documentation table keyed by command name

    Raises:
        ValueError: Two commands share a name
    """

    def __init__(self, commands: Sequence['BaseCommand'], docs: Mapping[str, CommandDoc] = COMMAND_DOCS):
        seen = set()
        entries = []
        for command in commands:
            if command.name in seen:
                raise ValueError(f"Duplicate command name: {command.name}")
            seen.add(command.name)
            entries.append(CommandEntry(command.name, command, resolve_doc(command.name, docs)))
        self._entries = tuple(sorted(entries, key=lambda e: e.name))

    def get(self, name: str) -> Optional[CommandEntry]:
        """Exact, case-sensitive lookup."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def names(self) -> List[str]:
        return [e.name for e in self._entries]

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None
