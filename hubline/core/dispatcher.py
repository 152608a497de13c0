"""
Dispatcher — Routes one input line to exactly one command

    "hello there"      -> say("hello there")      (no marker: implicit /say)
    "/set   nick  x "  -> set("nick  x")          (arguments stripped)
    "/say   hi  "      -> say("  hi  ")           (chat keeps its whitespace)
    "   "              -> nothing

Unknown names produce a single "Unknown command" message, with a
"did you mean" hint when a registered name is close.
"""

import logging
from typing import Optional, Tuple, TYPE_CHECKING

from rapidfuzz import fuzz, process

from .registry import Registry

if TYPE_CHECKING:
    from ..session import MessageLog


logger = logging.getLogger("hubline.dispatch")

COMMAND_MARKER = "/"
DEFAULT_COMMAND = "say"
BLANK = " \t"


def split_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Split an input line into (command name, argument string).

    Returns None for a blank line. Arguments are stripped for every
    command except the default one.
    """
    if not line or not line.strip(BLANK):
        return None
    if not line.startswith(COMMAND_MARKER):
        return DEFAULT_COMMAND, line
    name, sep, args = line[len(COMMAND_MARKER):].partition(" ")
    if name != DEFAULT_COMMAND:
        args = args.strip()
    return name, args


class Dispatcher:
    """
    Executes input lines against a Registry.

    Args:
        registry: Command table
        log: Where user-facing messages go
        hint_cutoff: Minimum similarity (0-100) for a "did you mean" hint
    """

    def __init__(self, registry: Registry, log: 'MessageLog', hint_cutoff: float = 80):
        self.registry = registry
        self.log = log
        self.hint_cutoff = hint_cutoff

    def dispatch(self, line: str) -> None:
        parsed = split_line(line)
        if parsed is None:
            return
        name, args = parsed

        entry = self.registry.get(name)
        if entry is None:
            logger.debug("unknown command %r", name)
            self.log.write(self._unknown_message(name))
            return

        logger.debug("dispatch /%s %r", name, args)
        try:
            entry.run(args)
        except Exception as e:
            logger.exception("command /%s failed", name)
            self.log.write(f"Error executing /{name}: {e}")

    def _unknown_message(self, name: str) -> str:
        message = f"Unknown command '{name}'."
        hint = self.closest(name)
        if hint:
            message += f" Did you mean /{hint}?"
        return message

    def closest(self, name: str) -> Optional[str]:
        """Best fuzzy match among registered names, if close enough."""
        if not name:
            return None
        match = process.extractOne(
            name, self.registry.names(),
            scorer=fuzz.ratio, score_cutoff=self.hint_cutoff,
        )
        return match[0] if match else None
