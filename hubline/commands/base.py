"""
BaseCommand — Shared foundation for all shell commands

Provides access to session resources via composition.
Commands receive the Session and access its resources through properties.

A command is an object with:
- name: what the user types after '/'
- run(args): the handler
- suggest(args): completion, or None when the command has none
"""

from typing import List, Optional, TYPE_CHECKING

from ..session import TabKind

if TYPE_CHECKING:
    from ..session import Hub, Session, Tab


NO_ARGUMENTS = "This command does not accept any arguments."
HUB_TAB_ONLY = "This command can only be used on hub tabs."
HUB_OR_MSG_TAB_ONLY = "This command can only be used on hub and message tabs."
NOT_LOGGED_IN = "Not connected or logged in yet."
NO_SUCH_USER = "No user found with that name."


class BaseCommand:
    """
    Base class for commands with access to shared resources.

    Design principle: Composition over inheritance.
    Commands don't own state; they act on the Session they were built with.
    """

    name: str = ""
    suggest = None

    def __init__(self, session: 'Session'):
        """
        Initialize command with the session.

        Args:
            session: The Session holding tabs, hubs, settings and services
        """
        self._session = session

    def run(self, args: str) -> None:
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Core resources (convenience properties)
    # -------------------------------------------------------------------------

    @property
    def session(self):
        return self._session

    @property
    def store(self):
        """Settings store (VariableStore)."""
        return self._session.store

    @property
    def services(self):
        """Network and file collaborator (ClientServices)."""
        return self._session.services

    @property
    def log(self):
        """User-facing message log."""
        return self._session.log

    @property
    def registry(self):
        """Command table; set once all commands are built."""
        return self._session.registry

    @property
    def tab(self) -> 'Tab':
        """The selected tab."""
        return self._session.current

    @property
    def hub(self) -> Optional['Hub']:
        """Hub of the selected hub or message tab."""
        return self._session.current_hub

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def write(self, text: str = "") -> None:
        self._session.log.write(text)

    def write_block(self, lines: List[str]) -> None:
        """Lines framed by blank lines, the way listings are shown."""
        self.write()
        for line in lines:
            self.write(line)
        self.write()

    def on_tab(self, *kinds: TabKind) -> bool:
        return self.tab.kind in kinds

    def reject_args(self, args: str) -> bool:
        """Report and return True when a no-argument command got some."""
        if args:
            self.write(NO_ARGUMENTS)
            return True
        return False
