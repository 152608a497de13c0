"""
SearchCommand — /search [options] <query>

Options and operands are parsed by core.query; this command decides which
hubs receive the query:

- default (-hub): the hub of the current hub or message tab
- -all: every logged-in hub without `chat_only' set
"""

from ..core.query import QueryError, parse_query, split_args
from ..session import TabKind
from .base import BaseCommand


class SearchCommand(BaseCommand):
    name = "search"

    def run(self, args: str) -> None:
        try:
            query = parse_query(split_args(args))
        except QueryError as e:
            self.write(str(e))
            return

        if query.all_hubs:
            hubs = [
                hub for hub in self.session.hubs.values()
                if hub.nick_valid and not self.store.get_bool(hub.id, "chat_only")
            ]
            if not hubs:
                self.write("Not connected to any non-chat hubs.")
                return
        else:
            if not self.on_tab(TabKind.HUB, TabKind.MSG):
                self.write("This command can only be used on hub tabs."
                           " Use the `-all' option to search on all connected hubs.")
                return
            hub = self.hub
            if not hub.nick_valid:
                self.write("Not connected")
                return
            if self.store.get_bool(hub.id, "chat_only"):
                self.write("Warning: Searching on a hub with the `chat_only' setting enabled.")
            hubs = [hub]

        self.services.search(hubs, query)


COMMANDS = [SearchCommand]
