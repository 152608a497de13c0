"""
Session — Everything the commands act on, in one explicit object

Holds the tabs, the open hubs and their online users, granted slots,
the share table, the settings store and the message log. The top-level
application owns one Session and hands it to every command; nothing
here is process-global.

Hub state (connecting, logged in, user joins) is driven by whatever
ClientServices implementation is attached; commands only read it.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

import xxhash

from .core.units import connection_to_speed
from .services import ClientServices
from .settings.definitions import GLOBAL, ChangeEffect, VariableDefinition
from .settings.kinds import raw_bool
from .settings.store import VariableStore
from .presentation.symbols import sanitize_control_chars

if TYPE_CHECKING:
    from .core.registry import Registry


logger = logging.getLogger("hubline.session")


class TabKind(Enum):
    MAIN = "main"
    HUB = "hub"
    MSG = "message"
    SEARCH = "search"
    USERLIST = "user list"
    CONNECTIONS = "connections"
    QUEUE = "download queue"
    BROWSE = "file list"


class HubState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    CONNECTED = "connected"      # transport up, not logged in yet
    LOGGED_IN = "logged_in"


def user_uid(hub_id: int, nick: str) -> int:
    """Stable 64-bit id of a user on a hub."""
    return xxhash.xxh64(f"{hub_id}:{nick}".encode('utf-8')).intdigest()


@dataclass
class HubUser:
    nick: str
    uid: int
    hub: 'Hub' = field(repr=False, compare=False)
    is_op: bool = False

    @property
    def hex_id(self) -> str:
        return f"{self.uid:x}"


class Hub:
    """An open hub: connection state and online users."""

    def __init__(self, scope_id: int, name: str, adc: bool = False):
        self.id = scope_id
        self.name = name
        self.adc = adc
        self.state = HubState.IDLE
        self.reconnect_pending = False
        # keyprint offered by the hub that did not match the pinned one
        self.pending_keyprint: Optional[bytes] = None
        self.users: Dict[int, HubUser] = {}

    @property
    def nick_valid(self) -> bool:
        return self.state is HubState.LOGGED_IN

    @property
    def connected(self) -> bool:
        return self.state in (HubState.CONNECTED, HubState.LOGGED_IN)

    @property
    def idle(self) -> bool:
        return self.state is HubState.IDLE and not self.reconnect_pending

    def add_user(self, nick: str, is_op: bool = False) -> HubUser:
        nick = sanitize_control_chars(nick)
        user = HubUser(nick, user_uid(self.id, nick), self, is_op)
        self.users[user.uid] = user
        return user

    def remove_user(self, nick: str) -> None:
        self.users.pop(user_uid(self.id, nick), None)

    def user_by_nick(self, nick: str) -> Optional[HubUser]:
        """Exact, case-sensitive lookup."""
        return self.users.get(user_uid(self.id, nick))

    def suggest_users(self, prefix: str, limit: int = 20) -> List[str]:
        """Nicks starting with prefix (case-insensitive), sorted."""
        prefix = prefix.lower()
        found = sorted(u.nick for u in self.users.values() if u.nick.lower().startswith(prefix))
        return found[:limit]

    def __repr__(self) -> str:
        return f"Hub({self.name!r}, id={self.id}, state={self.state.value})"


@dataclass
class Tab:
    kind: TabKind
    name: str
    hub: Optional[Hub] = None
    peer_uid: Optional[int] = None


class MessageLog:
    """
    User-facing output of the command layer.

    Messages are kept (for /clear and for tests) and forwarded to a sink,
    typically the terminal printer.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.lines: List[str] = []
        self.sink = sink

    def write(self, text: str = "") -> None:
        self.lines.append(text)
        if self.sink:
            self.sink(text)

    def clear(self) -> None:
        self.lines.clear()

    @property
    def last(self) -> Optional[str]:
        return self.lines[-1] if self.lines else None

    def __contains__(self, text: str) -> bool:
        return text in self.lines


class Session:
    """
    Client state shared by all commands.

    Args:
        store: Settings store (global and per-hub)
        services: Collaborator performing network and file work
        log: Where messages to the user go
        base_log_level: Logger level to restore when `log_debug` is off
    """

    def __init__(self, store: VariableStore, services: ClientServices,
                 log: Optional[MessageLog] = None, base_log_level: int = logging.WARNING):
        self.store = store
        self.services = services
        self.log = log if log is not None else MessageLog()
        self.base_log_level = base_log_level
        self.main_tab = Tab(TabKind.MAIN, "main")
        self.tabs: List[Tab] = [self.main_tab]
        self.current: Tab = self.main_tab
        self.hubs: Dict[int, Hub] = {}
        self.granted: Dict[int, None] = {}
        self.shares: Dict[str, str] = {}
        # set once the command table is built; /help lists it
        self.registry: Optional["Registry"] = None
        store.add_listener(self._on_setting_changed)

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    @property
    def current_hub(self) -> Optional[Hub]:
        """Hub of the current hub or PM tab."""
        if self.current.kind in (TabKind.HUB, TabKind.MSG):
            return self.current.hub
        return None

    def scope(self) -> int:
        """Settings scope of the current tab."""
        hub = self.current_hub
        return hub.id if hub else GLOBAL

    def select(self, tab: Tab) -> None:
        self.current = tab

    def open_tab(self, tab: Tab, select: bool = True) -> Tab:
        self.tabs.append(tab)
        if select:
            self.current = tab
        return tab

    def hub_tab(self, name: str) -> Optional[Tab]:
        """Open hub tab by name, with or without '#'."""
        if not name.startswith("#"):
            name = f"#{name}"
        for tab in self.tabs:
            if tab.kind is TabKind.HUB and tab.name == name:
                return tab
        return None

    def close_tab(self, tab: Tab) -> bool:
        """
        Close a tab; closing a hub tab disconnects it and closes its PMs.

        Returns:
            False for the main tab, which cannot be closed
        """
        if tab is self.main_tab:
            return False
        doomed = [tab]
        if tab.kind is TabKind.HUB:
            doomed += [t for t in self.tabs if t is not tab and t.hub is tab.hub]
            if not tab.hub.idle:
                self.disconnect(tab.hub)
            self.hubs.pop(tab.hub.id, None)
        index = self.tabs.index(tab)
        self.tabs = [t for t in self.tabs if t not in doomed]
        if self.current in doomed:
            self.current = self.tabs[min(index, len(self.tabs)) - 1]
        return True

    # -------------------------------------------------------------------------
    # Hubs
    # -------------------------------------------------------------------------

    def _new_scope_id(self, name: str) -> int:
        taken = set(self.store.backend.scopes()) | set(self.hubs)
        scope_id = xxhash.xxh64(name.encode('utf-8')).intdigest()
        while scope_id == GLOBAL or scope_id in taken:
            scope_id = xxhash.xxh64(str(scope_id).encode('ascii')).intdigest()
        return scope_id

    def open_hub(self, name: str, select: bool = True) -> Tab:
        """
        Open a tab for a hub, creating its settings scope when it is new.

        Args:
            name: Hub name without '#'
        """
        scope_id = self.store.scope_for_hubname(name)
        if scope_id is None:
            scope_id = self._new_scope_id(name)
            self.store.set_raw(scope_id, "hubname", f"#{name}")
        hub = Hub(scope_id, f"#{name}")
        address = self.store.raw(scope_id, "hubaddr") or ""
        hub.adc = address.startswith("adc")
        self.hubs[scope_id] = hub
        logger.info("opened hub %s (scope %d)", hub.name, scope_id)
        return self.open_tab(Tab(TabKind.HUB, hub.name, hub), select)

    def disconnect(self, hub: Hub) -> None:
        """Drop a hub connection and cancel any pending reconnect."""
        self.services.disconnect(hub)
        hub.state = HubState.IDLE
        hub.reconnect_pending = False
        logger.info("disconnected %s", hub.name)

    def user_by_uid(self, uid: int) -> Optional[HubUser]:
        for hub in self.hubs.values():
            user = hub.users.get(uid)
            if user:
                return user
        return None

    def open_private(self, user: HubUser, select: bool = True) -> Tab:
        for tab in self.tabs:
            if tab.kind is TabKind.MSG and tab.peer_uid == user.uid:
                if select:
                    self.current = tab
                return tab
        return self.open_tab(Tab(TabKind.MSG, f"~{user.nick}", user.hub, user.uid), select)

    # -------------------------------------------------------------------------
    # Granted slots
    # -------------------------------------------------------------------------

    def grant(self, user: HubUser) -> None:
        self.granted[user.uid] = None

    def revoke(self, uid: int) -> bool:
        if uid not in self.granted:
            return False
        del self.granted[uid]
        return True

    def grant_list(self) -> List[int]:
        return sorted(self.granted)

    # -------------------------------------------------------------------------
    # Settings side effects
    # -------------------------------------------------------------------------

    def ensure_identity(self) -> None:
        """Give a fresh installation a nick."""
        if self.store.backend.get(GLOBAL, "nick") is None:
            nick = f"hubline_{random.randint(1, 9999)}"
            self.store.set_raw(GLOBAL, "nick", nick)
            logger.info("generated nick %s", nick)

    def _on_setting_changed(self, scope_id: int, definition: VariableDefinition,
                            raw: Optional[str]) -> None:
        for effect in definition.effects:
            if effect is ChangeEffect.HUB_NAME:
                self._rename_hub(scope_id, raw)
            elif effect is ChangeEffect.LOG_LEVEL:
                level = logging.DEBUG if raw_bool(raw) else self.base_log_level
                logging.getLogger("hubline").setLevel(level)
            elif effect is ChangeEffect.UPLOAD_SPEED:
                if raw and not connection_to_speed(raw):
                    self.log.write(f"Couldn't convert `{raw}' to bytes/second, won't broadcast upload"
                                   " speed on ADC. See `/help set connection' for more information.")
            elif effect is ChangeEffect.PASSWORD:
                hub = self.hubs.get(scope_id)
                if raw and hub and hub.connected and not hub.nick_valid:
                    self.services.send_password(hub, None)
            else:
                self.services.setting_effect(effect, scope_id)

    def _rename_hub(self, scope_id: int, name: Optional[str]) -> None:
        hub = self.hubs.get(scope_id)
        if hub is None or not name:
            return
        hub.name = name
        for tab in self.tabs:
            if tab.kind is TabKind.HUB and tab.hub is hub:
                tab.name = name
