"""
Client services — The boundary to everything outside the command layer

Commands validate input, update settings and session state, then ask a
ClientServices implementation to do the real work: talk to hubs, hash
and list shared files, open views. Every method only *starts* an action
and returns; results come back asynchronously through the session.

OfflineServices is the stand-in used when no protocol engine is
attached: it reports what would have happened and leaves hubs idle.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .core.query import SearchQuery
    from .session import Hub, HubUser, MessageLog, TabKind
    from .settings.definitions import ChangeEffect


logger = logging.getLogger("hubline.services")


class ClientServices(ABC):
    """Operations the command layer delegates to the rest of the client."""

    # -------------------------------------------------------------------------
    # Hubs
    # -------------------------------------------------------------------------

    @abstractmethod
    def connect(self, hub: 'Hub', address: str) -> None:
        """Start connecting a hub to its stored address."""
        pass

    @abstractmethod
    def disconnect(self, hub: 'Hub') -> None:
        pass

    @abstractmethod
    def send_password(self, hub: 'Hub', password: Optional[str]) -> None:
        """Send a login password; None means the stored `password` setting."""
        pass

    @abstractmethod
    def say(self, hub: 'Hub', message: str, me: bool = False) -> None:
        pass

    @abstractmethod
    def private_message(self, hub: 'Hub', user: 'HubUser', message: str, me: bool = False) -> None:
        pass

    @abstractmethod
    def kick(self, hub: 'Hub', user: 'HubUser') -> None:
        pass

    @abstractmethod
    def search(self, hubs: List['Hub'], query: 'SearchQuery') -> None:
        """Send a search to the given hubs and open a results view."""
        pass

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    @abstractmethod
    def browse(self, user: Optional['HubUser'], force: bool = False) -> None:
        """Open a file list: a user's (downloaded if needed) or our own."""
        pass

    @property
    @abstractmethod
    def has_own_list(self) -> bool:
        """Whether our own file list has been generated."""
        pass

    @abstractmethod
    def share_added(self, name: str, path: str) -> None:
        """Start hashing a newly shared directory."""
        pass

    @abstractmethod
    def share_removed(self, name: Optional[str]) -> None:
        """Drop one shared directory from the file list, or all with None."""
        pass

    @abstractmethod
    def shared_size(self, name: str) -> Optional[int]:
        """Bytes shared under a name, or None when not yet hashed."""
        pass

    @property
    @abstractmethod
    def refreshing(self) -> bool:
        pass

    @abstractmethod
    def refresh(self, path: Optional[str]) -> bool:
        """Refresh the whole share (None) or one directory; False if not shared."""
        pass

    @abstractmethod
    def collect_garbage(self) -> bool:
        """Clean up stored data; False if unused hash data could not be checked."""
        pass

    # -------------------------------------------------------------------------
    # Views and process
    # -------------------------------------------------------------------------

    @abstractmethod
    def open_view(self, kind: 'TabKind', hub: Optional['Hub'] = None,
                  user: Optional['HubUser'] = None) -> None:
        """Open a list view (connections, queue, user list)."""
        pass

    @abstractmethod
    def listening_ports(self) -> List[str]:
        """Human-readable descriptions of open listening sockets."""
        pass

    @abstractmethod
    def setting_effect(self, effect: 'ChangeEffect', scope_id: int) -> None:
        """React to a committed setting change."""
        pass

    @abstractmethod
    def quit(self) -> None:
        pass


class OfflineServices(ClientServices):
    """
    ClientServices without a protocol engine.

    Nothing ever connects, so hub-bound commands stop at their "not
    connected" checks. Actions that would reach the network are reported
    to the user instead.
    """

    def __init__(self, log: 'MessageLog'):
        self.log = log
        self.quit_requested = False

    def connect(self, hub, address):
        logger.info("connect %s -> %s (offline)", hub.name, address)
        self.log.write(f"Cannot connect to {address}: no protocol engine is attached.")

    def disconnect(self, hub):
        logger.info("disconnect %s (offline)", hub.name)

    def send_password(self, hub, password):
        self.log.write("Cannot send password: no protocol engine is attached.")

    def say(self, hub, message, me=False):
        self.log.write("Cannot send chat: no protocol engine is attached.")

    def private_message(self, hub, user, message, me=False):
        self.log.write("Cannot send message: no protocol engine is attached.")

    def kick(self, hub, user):
        self.log.write("Cannot kick: no protocol engine is attached.")

    def search(self, hubs, query):
        logger.info("search %r on %d hub(s) (offline)", query.terms, len(hubs))

    def browse(self, user, force=False):
        self.log.write("File browsing is not available offline.")

    @property
    def has_own_list(self) -> bool:
        return False

    def share_added(self, name, path):
        logger.info("share %s -> %s (offline, not hashed)", name, path)

    def share_removed(self, name):
        logger.info("unshare %s (offline)", name or "<all>")

    def shared_size(self, name):
        return None

    @property
    def refreshing(self) -> bool:
        return False

    def refresh(self, path):
        return path is None

    def collect_garbage(self):
        return False

    def open_view(self, kind, hub=None, user=None):
        self.log.write(f"The {kind.value} view is not available offline.")

    def listening_ports(self):
        return []

    def setting_effect(self, effect, scope_id):
        logger.debug("setting effect %s on scope %d", effect.value, scope_id)

    def quit(self):
        self.quit_requested = True
