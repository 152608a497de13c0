"""
Share commands — /share, /unshare and /refresh

Shared directories are published under a virtual name:

    /share "Fun Stuff" ~/media/fun    ->  /Fun Stuff -> /home/me/media/fun
    /unshare Fun Stuff
    /unshare /                        (everything)

The name may be shell-quoted; the path is taken literally. Hashing and
file list generation are started through ClientServices.
"""

import os
from typing import List

from ..core.query import split_first_arg
from ..core.units import format_size
from ..settings.kinds import suggest_path
from .base import BaseCommand


def _overlaps(shared: str, path: str) -> bool:
    """True if either directory contains (or is) the other."""
    return shared == path or shared.startswith(path + os.sep) or path.startswith(shared + os.sep)


class ShareListing(BaseCommand):

    def list_shares(self) -> None:
        shares = self.session.shares
        if not shares:
            self.write("Nothing shared.")
            return
        lines = []
        for name in sorted(shares):
            size = self.services.shared_size(name)
            shown = format_size(size).strip() if size is not None else "-"
            lines.append(f" /{name} -> {shares[name]} ({shown})")
        self.write_block(lines)


class ShareCommand(ShareListing):
    name = "share"

    def run(self, args: str) -> None:
        if not args:
            self.list_shares()
            return

        name, target = split_first_arg(args)
        if not name or not target:
            self.write("Error parsing arguments. See \"/help share\" for details.")
            return
        if name in self.session.shares:
            self.write("You have already shared a directory with that name.")
            return
        if "/" in name or "\\" in name:
            self.write("Invalid character in share name.")
            return

        path = os.path.realpath(os.path.expanduser(target))
        if not os.path.isdir(path):
            self.write("Not a directory.")
            return
        for other, shared in sorted(self.session.shares.items()):
            if _overlaps(shared, path):
                self.write(f"Directory already (partly) shared in /{other}")
                return

        self.session.shares[name] = path
        self.services.share_added(name, path)
        self.write(f"Added to share: /{name} -> {path}")

    def suggest(self, args: str) -> List[str]:
        name, target = split_first_arg(args)
        if name is None or target is None:
            return []
        typed_name = args[:len(args) - len(target)]
        return [typed_name + path for path in suggest_path(None, target)]


class UnshareCommand(ShareListing):
    name = "unshare"

    def run(self, args: str) -> None:
        if not args:
            self.list_shares()
            return
        if self.services.refreshing:
            self.write("Sorry, can't remove directories from the share while refreshing.")
            return

        name = args.lstrip("/")
        if not name:
            self.session.shares.clear()
            self.services.share_removed(None)
            self.write("Removed all directories from share.")
            return

        path = self.session.shares.pop(name, None)
        if path is None:
            self.write("No shared directory with that name.")
            return
        self.services.share_removed(name)
        self.write(f"Directory /{name} ({path}) removed from share.")

    def suggest(self, args: str) -> List[str]:
        partial = args[1:] if args.startswith("/") else args
        return [
            name for name in sorted(self.session.shares)
            if name.startswith(partial) and len(name) != len(partial)
        ]


class RefreshCommand(BaseCommand):
    name = "refresh"

    def run(self, args: str) -> None:
        if not self.services.refresh(args or None):
            self.write(f"Directory `{args}' not found.")

    def suggest(self, args: str) -> List[str]:
        # virtual paths only; the filesystem is not listed
        return [
            f"/{name}" for name in sorted(self.session.shares)
            if f"/{name}".startswith(args)
        ]


COMMANDS = [ShareCommand, UnshareCommand, RefreshCommand]
