"""
Chat commands — /say, /me, /msg and /pm

/say is also what a line without a leading '/' turns into, so its
argument arrives unstripped and completion appends ": " to a nick typed
at the start of the line.
"""

from typing import List

from ..core.suggest import nick_suggest
from ..session import TabKind
from .base import BaseCommand, HUB_OR_MSG_TAB_ONLY, NOT_LOGGED_IN


class SayCommand(BaseCommand):
    """Chat to the current hub or private message partner."""

    name = "say"
    third_person = False

    def run(self, args: str) -> None:
        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            self.write(HUB_OR_MSG_TAB_ONLY)
            return
        hub = self.hub
        if not hub.nick_valid:
            self.write(NOT_LOGGED_IN)
        elif not args:
            self.write("Message empty.")
        elif self.tab.kind is TabKind.HUB:
            self.services.say(hub, args, self.third_person)
        else:
            user = self.session.user_by_uid(self.tab.peer_uid)
            if user is None:
                self.write("User is not online.")
            else:
                self.services.private_message(hub, user, args, self.third_person)

    def suggest(self, args: str) -> List[str]:
        return nick_suggest(self.session, args, append=True)


class MeCommand(SayCommand):
    name = "me"
    third_person = True


class MsgCommand(BaseCommand):
    """Open a private message tab, optionally sending a first message."""

    name = "msg"

    def run(self, args: str) -> None:
        nick, _, message = args.partition(" ")
        message = message.lstrip(" ")
        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            self.write(HUB_OR_MSG_TAB_ONLY)
            return
        hub = self.hub
        if not hub.nick_valid:
            self.write(NOT_LOGGED_IN)
        elif not nick:
            self.write("No user specified. See `/help msg' for more information.")
        else:
            user = hub.user_by_nick(nick)
            if user is None:
                self.write("No user found with that name. Note that usernames are case-sensitive.")
                return
            self.session.open_private(user)
            if message:
                self.services.private_message(hub, user, message)

    def suggest(self, args: str) -> List[str]:
        return nick_suggest(self.session, args, append=False)


class PmCommand(MsgCommand):
    name = "pm"


COMMANDS = [SayCommand, MeCommand, MsgCommand, PmCommand]
