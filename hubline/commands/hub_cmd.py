"""
Hub commands — Opening, connecting and forgetting hubs

    /open                          list configured hubs
    /open [-n] <name> [<address>]  open or select a hub tab
    /connect [<address>]           connect the current hub tab
    /disconnect, /reconnect        on a hub tab, or on the main tab for all hubs
    /accept                        trust a changed TLS keyprint
    /password <password>           log in without storing the password
    /close, /delhub <name>

Addresses are parsed by core.address and stored as the hub's `hubaddr`;
the protocol work itself is left to ClientServices.
"""

from typing import List, Optional

from ..core.address import AddressError, parse_address, store_hub_address
from ..core.units import base32_encode
from ..session import Hub, TabKind
from ..settings.kinds import is_valid_hubname
from .base import BaseCommand, HUB_TAB_ONLY


MAIN_OR_HUB_TAB_ONLY = "This command can only be used on the main tab or on hub tabs."


class HubCommand(BaseCommand):
    """Connection helpers shared by the hub commands."""

    def set_address(self, hub: Hub, text: str) -> bool:
        """Parse and store an address; reports and returns False when invalid."""
        try:
            address = parse_address(text)
        except AddressError as e:
            self.write(str(e))
            return False
        store_hub_address(self.store, hub.id, address)
        hub.adc = address.protocol.is_adc
        return True

    def connect(self, hub: Hub, address: str = "") -> None:
        if not hub.idle:
            self.write("Already connected (or connecting). You may want to /disconnect first.")
            return
        if address and not self.set_address(hub, address):
            return
        stored = self.store.raw(hub.id, "hubaddr")
        if not stored:
            self.write("No hub address configured. Use '/connect <address>' to do so.")
            return
        self.services.connect(hub, stored)

    def reconnect(self, hub: Hub) -> None:
        if not hub.idle:
            self.session.disconnect(hub)
        self.connect(hub)


class ConnectCommand(HubCommand):
    name = "connect"

    def run(self, args: str) -> None:
        if not self.on_tab(TabKind.HUB):
            self.write(HUB_TAB_ONLY)
            return
        self.connect(self.hub, args)

    def suggest(self, args: str) -> List[str]:
        if not self.on_tab(TabKind.HUB):
            return []
        found = []
        stored = self.store.raw(self.hub.id, "hubaddr")
        if stored and stored.startswith(args):
            found.append(stored)
        elif stored and f"dchub://{stored}/".startswith(args):
            found.append(f"dchub://{stored}/")
        if "dchub://".startswith(args):
            found.append("dchub://")
        return found


class DisconnectCommand(HubCommand):
    name = "disconnect"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        if self.on_tab(TabKind.HUB):
            if self.hub.idle:
                self.write("Not connected.")
            else:
                self.session.disconnect(self.hub)
        elif self.on_tab(TabKind.MAIN):
            self.write("Disconnecting all hubs.")
            for hub in list(self.session.hubs.values()):
                if not hub.idle:
                    self.session.disconnect(hub)
        else:
            self.write(MAIN_OR_HUB_TAB_ONLY)


class ReconnectCommand(HubCommand):
    name = "reconnect"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        if self.on_tab(TabKind.HUB):
            self.reconnect(self.hub)
        elif self.on_tab(TabKind.MAIN):
            self.write("Reconnecting all hubs.")
            for tab in list(self.session.tabs):
                if tab.kind is TabKind.HUB:
                    self.reconnect(tab.hub)
        else:
            self.write(MAIN_OR_HUB_TAB_ONLY)


class AcceptCommand(HubCommand):
    name = "accept"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        if not self.on_tab(TabKind.HUB):
            self.write(HUB_TAB_ONLY)
            return
        hub = self.hub
        if hub.pending_keyprint is None:
            self.write("Nothing to accept.")
            return
        self.store.set_raw(hub.id, "hubkp", base32_encode(hub.pending_keyprint))
        hub.pending_keyprint = None
        self.services.connect(hub, self.store.raw(hub.id, "hubaddr"))


def _hub_names(store, partial: str) -> List[str]:
    """Known hub names ('#name') matching with or without the '#'."""
    return [
        name for name in store.hub_scopes()
        if (name.startswith(partial) or name[1:].startswith(partial)) and len(name) != len(partial)
    ]


class OpenCommand(HubCommand):
    name = "open"

    def run(self, args: str) -> None:
        if not args:
            self._list()
            return

        connect = True
        if args.startswith("-n "):
            connect = False
            args = args[3:].strip()
        name, _, address = args.partition(" ")
        address = address.strip() or None
        if name.startswith("#"):
            name = name[1:]
        if not name:
            self.write("No hub name given.")
            return
        if not is_valid_hubname(name):
            self.write("Sorry, hub name may only consist of alphanumeric characters,"
                       " and must not exceed 25 characters.")
            return

        tab = self.session.hub_tab(name)
        if tab is None:
            tab = self.session.open_hub(name)
            if connect and not address and self.store.raw(tab.hub.id, "hubaddr"):
                self.connect(tab.hub)
        elif tab is not self.tab:
            self.session.select(tab)
        else:
            self.write("Tab already selected, saving new address instead." if address
                       else "Tab already selected.")

        if address and self.set_address(tab.hub, address) and connect:
            self.reconnect(tab.hub)

    def _list(self) -> None:
        hubs = self.store.hub_scopes()
        if not hubs:
            self.write("No hubs found in the configuration data.")
            return
        self.write_block([
            f"{name:>20}  {self.store.raw(scope_id, 'hubaddr') or ''}"
            for name, scope_id in hubs.items()
        ])

    def suggest(self, args: str) -> List[str]:
        return _hub_names(self.store, args)


class CloseCommand(BaseCommand):
    name = "close"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        if not self.session.close_tab(self.tab):
            self.write("The main tab cannot be closed.")


class DelhubCommand(BaseCommand):
    name = "delhub"

    def run(self, args: str) -> None:
        name = args[1:] if args.startswith("#") else args
        if not name:
            self.write("No hub name given.")
            return
        scope_id: Optional[int] = self.store.scope_for_hubname(name)
        if scope_id is None:
            self.write("No hub found by that name.")
        elif scope_id in self.session.hubs:
            self.write("Hub tab still open. Please close the hub tab before"
                       " removing it from the configuration.")
        else:
            self.store.remove_scope(scope_id)
            self.write(f"Hub #{name} deleted from the configuration.")

    def suggest(self, args: str) -> List[str]:
        return _hub_names(self.store, args)


class PasswordCommand(BaseCommand):
    name = "password"

    def run(self, args: str) -> None:
        if not self.on_tab(TabKind.HUB):
            self.write(HUB_TAB_ONLY)
        elif not self.hub.connected:
            self.write("Not connected to a hub. Did you want to use '/hset password' instead?")
        elif self.hub.nick_valid:
            self.write("Already logged in. Did you want to use '/hset password' instead?")
        else:
            self.services.send_password(self.hub, args)


COMMANDS = [
    AcceptCommand, CloseCommand, ConnectCommand, DelhubCommand,
    DisconnectCommand, OpenCommand, PasswordCommand, ReconnectCommand,
]
