"""
Settings commands — /set, /hset, /unset, /hunset and /nick

    /set                    list all global settings
    /set col                list settings matching "col*"
    /set slots              show one setting
    /set slots 5            change it
    /hset nick bob          same, for the hub of the current tab
    /hunset nick            drop the hub's own value

Keys may carry the scope prefix shown in listings ("global.slots",
"#hub.nick"). Parsing, scope rules and storage live in VariableStore;
these commands only print.
"""

from typing import List, Optional, Tuple

from ..session import TabKind
from ..settings.definitions import GLOBAL
from ..settings.kinds import SettingError
from .base import BaseCommand, HUB_TAB_ONLY


class SettingsCommand(BaseCommand):
    """Common scope handling for the four settings commands."""

    per_hub = False
    unset = False

    def scope(self, quiet: bool = False) -> Optional[Tuple[int, str]]:
        """(scope id, display name), or None when a hub command is off a hub tab."""
        if not self.per_hub:
            return GLOBAL, "global"
        if not self.on_tab(TabKind.HUB, TabKind.MSG):
            if not quiet:
                self.write(HUB_TAB_ONLY)
            return None
        return self.hub.id, self.hub.name

    def list_matching(self, scope_id: int, scope_name: str, pattern: str) -> bool:
        """Print every setting matching a pattern; False when none match."""
        found = self.store.matching(scope_id, pattern)
        if not found:
            return False
        self.write_block([self.store.describe(scope_id, scope_name, d.name) for d in found])
        return True

    def suggest(self, args: str) -> List[str]:
        scope = self.scope(quiet=True)
        if scope is None:
            return []
        scope_id, _ = scope

        name, sep, partial = args.partition(" ")
        if self.unset or not sep:
            return [
                d.name for d in self.store.matching(scope_id, None)
                if d.name.startswith(args) and len(d.name) != len(args)
            ]

        definition = self.store.definition(name)
        if definition is None or definition.internal or definition.suggest is None:
            return []
        current = self.store.raw(scope_id, name)
        return [f"{name} {value}" for value in definition.suggest(current, partial.strip())]


class SetCommand(SettingsCommand):
    name = "set"

    def run(self, args: str) -> None:
        scope = self.scope()
        if scope is None:
            return
        scope_id, scope_name = scope

        key, _, value = args.partition(" ")
        value = value.strip() or None
        if key.startswith(f"{scope_name}."):
            key = key[len(scope_name) + 1:]

        if value is None and self.store.definition(key) is None:
            if self.list_matching(scope_id, scope_name, key):
                return
        try:
            definition = self.store.check(scope_id, key)
        except SettingError as e:
            self.write(str(e))
            return

        if value is not None:
            try:
                self.store.assign(scope_id, definition.name, value)
            except SettingError as e:
                self.write(f"Error setting `{definition.name}': {e}")
                return
        self.write(self.store.describe(scope_id, scope_name, definition.name))


class HsetCommand(SetCommand):
    name = "hset"
    per_hub = True


class UnsetCommand(SettingsCommand):
    name = "unset"
    unset = True

    def run(self, args: str) -> None:
        scope = self.scope()
        if scope is None:
            return
        scope_id, scope_name = scope

        if self.store.definition(args) is None:
            if self.list_matching(scope_id, scope_name, args):
                return
        try:
            definition = self.store.check(scope_id, args, unset=True)
        except SettingError as e:
            self.write(str(e))
            return

        try:
            self.store.clear(scope_id, definition.name)
        except SettingError as e:
            self.write(f"Error resetting `{definition.name}': {e}")
            return
        self.write(f"{scope_name}.{definition.name} reset.")
        self.write(self.store.describe(scope_id, scope_name, definition.name))


class HunsetCommand(UnsetCommand):
    name = "hunset"
    per_hub = True


class NickCommand(BaseCommand):
    """/hset nick on hub and message tabs, /set nick elsewhere."""

    name = "nick"

    def run(self, args: str) -> None:
        try:
            self.store.assign(self.session.scope(), "nick", args)
        except SettingError as e:
            self.write(f"Error changing nick: {e}")
            return
        self.write("Nick changed.")


COMMANDS = [SetCommand, HsetCommand, UnsetCommand, HunsetCommand, NickCommand]
