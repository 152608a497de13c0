"""
Suggestion Engine — Tab completion for the input line

Given the text typed so far, returns full-line candidates:
- "/se"            -> ["/search ", "/set "]
- "/set col"       -> ["/set color_list_default", ...]
- "hel"            -> delegated to /say's suggester (nick completion)

Candidates are capped at MAX_SUGGESTIONS, de-duplicated, and never the
same length as what was typed (an already-complete word is not offered
again). Suggesters are read-only and do no I/O.
"""

from typing import Iterable, List, TYPE_CHECKING

from .dispatcher import COMMAND_MARKER, DEFAULT_COMMAND
from .registry import Registry

if TYPE_CHECKING:
    from ..session import Session


MAX_SUGGESTIONS = 20

NICK_SEPARATORS = " ,:"


def finalize(candidates: Iterable[str], typed: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Dedupe (first wins), drop same-length candidates, cap."""
    result = []
    seen = set()
    for candidate in candidates:
        if candidate in seen or len(candidate) == len(typed):
            continue
        seen.add(candidate)
        result.append(candidate)
        if len(result) >= limit:
            break
    return result


def prefix_matches(options: Iterable[str], partial: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """Options extending `partial`, in input order, excluding an exact match."""
    return finalize((o for o in options if o.startswith(partial)), partial, limit)


def prefixed(prefix: str, candidates: Iterable[str]) -> List[str]:
    return [prefix + c for c in candidates]


class SuggestionEngine:
    """Computes completions against a Registry."""

    def __init__(self, registry: Registry):
        self.registry = registry

    def suggest(self, text: str) -> List[str]:
        if text.startswith(COMMAND_MARKER) and " " not in text:
            partial = text[len(COMMAND_MARKER):]
            candidates = (
                f"{COMMAND_MARKER}{name} "
                for name in self.registry.names()
                if name.startswith(partial)
            )
            return finalize(candidates, text)

        if not text.startswith(COMMAND_MARKER):
            entry = self.registry.get(DEFAULT_COMMAND)
            if entry is None:
                return []
            return finalize(entry.suggest(text), text)

        head, _, partial = text.partition(" ")
        entry = self.registry.get(head[len(COMMAND_MARKER):])
        if entry is None or not entry.has_suggester:
            return []
        return finalize(prefixed(f"{head} ", entry.suggest(partial)), text)


def nick_fragment_start(args: str) -> int:
    """Index where the nick being typed begins (after the last space, comma or colon)."""
    pos = len(args)
    while pos > 0 and args[pos - 1] not in NICK_SEPARATORS:
        pos -= 1
    return pos


def nick_suggest(session: 'Session', args: str, append: bool) -> List[str]:
    """
    Complete the nick at the end of `args` against the current hub's users.

    With `append`, a nick completed at the very start of the line gets the
    chat-addressing suffix ": ".
    """
    hub = session.current_hub
    if hub is None:
        return []
    start = nick_fragment_start(args)
    before, fragment = args[:start], args[start:]
    nicks = hub.suggest_users(fragment, MAX_SUGGESTIONS)
    if append and start == 0:
        nicks = [f"{n}: " for n in nicks]
    return prefixed(before, nicks)
