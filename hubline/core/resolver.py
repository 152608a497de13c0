"""
Grant Resolver — Find a granted slot from what the user typed

/ungrant accepts either a nick or a (prefix of a) user id:
- Exact nick, case-insensitive, among granted users that are online
- Hex id prefix, case-insensitive, among all grants

Exact nicks win over id prefixes, so a user named "abc" is found even when
other grants have ids starting with "abc". Two or more hits at the same
step are reported as ambiguous rather than guessed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..session import Session


class ResolveStatus(Enum):
    """Resolution outcome."""
    FOUND = "found"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass
class ResolveResult:
    """Result of grant resolution."""
    status: ResolveStatus
    uid: Optional[int] = None
    candidates: List[int] = field(default_factory=list)
    query: str = ""


class GrantResolver:
    """
    Resolves /ungrant arguments against the session's granted slots.

    Resolution strategies (in order):
    1. Exact nick match (online users only)
    2. Hex id prefix match
    """

    def __init__(self, session: 'Session'):
        self.session = session

    def resolve(self, query: str) -> ResolveResult:
        query = query.strip()
        granted = self.session.grant_list()

        # Strategy 1: Exact nick
        wanted = query.lower()
        by_nick = []
        for uid in granted:
            user = self.session.user_by_uid(uid)
            if user and user.nick.lower() == wanted:
                by_nick.append(uid)
        result = self._pick(by_nick, query)
        if result:
            return result

        # Strategy 2: Id prefix
        by_id = [uid for uid in granted if f"{uid:x}".startswith(wanted)] if wanted else []
        result = self._pick(by_id, query)
        if result:
            return result

        return ResolveResult(status=ResolveStatus.NOT_FOUND, query=query)

    @staticmethod
    def _pick(matches: List[int], query: str) -> Optional[ResolveResult]:
        if len(matches) == 1:
            return ResolveResult(status=ResolveStatus.FOUND, uid=matches[0], query=query)
        if len(matches) > 1:
            return ResolveResult(status=ResolveStatus.AMBIGUOUS, candidates=matches, query=query)
        return None
