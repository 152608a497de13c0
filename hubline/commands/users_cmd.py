"""
User commands — Acting on other users of a hub

    /grant [-list|<user>]   give a user a slot
    /ungrant [<user>]       take it back (nick or hex id prefix)
    /whois <user>           select a user in the user list
    /browse [[-f] <user>]   open a file list
    /userlist               open the user list
    /kick <user>            NMDC only

Nicks are matched exactly (they are case-sensitive on the hub); /ungrant
is the exception, see core.resolver.
"""

from typing import List

from ..core.resolver import GrantResolver, ResolveStatus
from ..core.suggest import nick_suggest
from ..session import TabKind
from .base import (
    BaseCommand, HUB_OR_MSG_TAB_ONLY, HUB_TAB_ONLY, NOT_LOGGED_IN, NO_SUCH_USER,
)


class NickArgument(BaseCommand):
    """Commands taking a nick on the current hub."""

    def suggest(self, args: str) -> List[str]:
        return nick_suggest(self.session, args, append=False)


class GrantListing(BaseCommand):

    def list_grants(self) -> None:
        granted = self.session.grant_list()
        if not granted:
            self.write("No slots granted to anyone.")
            return
        self.write()
        self.write("Granted slots to:")
        for uid in granted:
            user = self.session.user_by_uid(uid)
            if user:
                self.write(f"  {uid:x} ({user.nick} on {user.hub.name})")
            else:
                self.write(f"  {uid:x} (user offline)")
        self.write()


class GrantCommand(GrantListing, NickArgument):
    name = "grant"

    def run(self, args: str) -> None:
        if (not args and not self.on_tab(TabKind.MSG)) or args == "-list":
            self.list_grants()
            return
        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            self.write(HUB_OR_MSG_TAB_ONLY)
            return

        if args:
            user = self.hub.user_by_nick(args)
            if user is None:
                self.write(NO_SUCH_USER)
                return
        else:
            user = self.session.user_by_uid(self.tab.peer_uid)
            if user is None:
                self.write("User not online.")
                return
        self.session.grant(user)
        self.write("Slot granted.")


class UngrantCommand(GrantListing):
    name = "ungrant"

    def run(self, args: str) -> None:
        if not args and not self.on_tab(TabKind.MSG):
            self.list_grants()
            return

        if not args:
            uid = self.tab.peer_uid
            shown = self.tab.name[1:]
        else:
            result = GrantResolver(self.session).resolve(args)
            if result.status is ResolveStatus.AMBIGUOUS:
                self.write(f"Ambiguous user `{args}'.")
                return
            uid = result.uid
            shown = args

        if uid is not None and self.session.revoke(uid):
            self.write(f"Slot for `{uid:x}' revoked.")
        else:
            self.write(f"No slot granted to `{shown}'.")

    def suggest(self, args: str) -> List[str]:
        partial = args.lower()
        found = []
        for uid in self.session.grant_list():
            user = self.session.user_by_uid(uid)
            if user and user.nick.lower().startswith(partial):
                found.append(user.nick)
            if f"{uid:x}".startswith(partial):
                found.append(f"{uid:x}")
        return found


class WhoisCommand(NickArgument):
    name = "whois"

    def run(self, args: str) -> None:
        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            self.write(HUB_OR_MSG_TAB_ONLY)
            return
        if not args and not self.on_tab(TabKind.MSG):
            self.write("No user specified. See `/help whois' for more information.")
            return

        hub = self.hub
        if args:
            user = hub.user_by_nick(args)
        else:
            user = self.session.user_by_uid(self.tab.peer_uid)
        if user is None:
            self.write(NO_SUCH_USER)
            return
        self.services.open_view(TabKind.USERLIST, hub, user)


class BrowseCommand(NickArgument):
    name = "browse"

    def run(self, args: str) -> None:
        if not args:
            if not self.services.has_own_list:
                self.write("Nothing shared.")
            else:
                self.services.browse(None)
            return

        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            self.write(HUB_OR_MSG_TAB_ONLY)
            return
        nick, _, rest = args.partition(" ")
        rest = rest.strip()
        force = False
        if nick == "-f" and rest:
            nick, force = rest, True
        elif rest == "-f":
            force = True

        user = self.hub.user_by_nick(nick)
        if user is None:
            self.write(NO_SUCH_USER)
            return
        self.services.browse(user, force)


class UserlistCommand(BaseCommand):
    name = "userlist"

    def run(self, args: str) -> None:
        if self.reject_args(args):
            return
        if not self.on_tab(TabKind.HUB):
            self.write(HUB_TAB_ONLY)
            return
        self.services.open_view(TabKind.USERLIST, self.hub)


class KickCommand(NickArgument):
    name = "kick"

    def run(self, args: str) -> None:
        if not self.on_tab(TabKind.HUB):
            self.write(HUB_TAB_ONLY)
            return
        hub = self.hub
        if not hub.nick_valid:
            self.write(NOT_LOGGED_IN)
        elif not args:
            self.write("No user specified.")
        elif hub.adc:
            self.write("This command only works on NMDC hubs.")
        else:
            user = hub.user_by_nick(args)
            if user is None:
                self.write(NO_SUCH_USER)
            else:
                self.services.kick(hub, user)


COMMANDS = [
    BrowseCommand, GrantCommand, KickCommand, UngrantCommand,
    UserlistCommand, WhoisCommand,
]
