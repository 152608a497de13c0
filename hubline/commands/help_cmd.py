"""
HelpCommand — /help for commands, settings and key bindings

    /help                 all commands with their summary
    /help <command>       usage and description ("/help /open" works too)
    /help set <key>       type and description of a setting
    /help keys [<sect>]   key binding sections
"""

from typing import List

from ..content.help_text import KEY_DOCS, setting_doc
from .base import BaseCommand


KEYS_SECTION = "keys"


class HelpCommand(BaseCommand):
    name = "help"

    def run(self, args: str) -> None:
        topic, sep, section = args.partition(" ")

        if not args:
            self._list_commands()
        elif topic in ("set", "hset") and sep:
            self._setting(section)
        elif topic == KEYS_SECTION and not sep:
            self._key_sections()
        elif topic == KEYS_SECTION:
            self._keys(section)
        elif not sep:
            self._command(topic[1:] if topic.startswith("/") else topic)
        else:
            self.write(f"Unknown help section `{topic}'.")

    def _list_commands(self) -> None:
        self.write()
        self.write("Available commands:")
        for entry in self.registry:
            self.write(f" /{entry.name} - {entry.doc.summary}")
        self.write_block(["For help on key bindings, use `/help keys'."])

    def _command(self, name: str) -> None:
        entry = self.registry.get(name)
        if entry is None:
            self.write(f"Unknown command '{name}'.")
            return
        doc = entry.doc
        self.write()
        self.write(f"Usage: /{entry.name} {doc.args or ''}".rstrip())
        self.write(f"  {doc.summary}")
        self.write()
        if doc.description:
            self.write(doc.description)
            self.write()

    def _setting(self, name: str) -> None:
        doc = setting_doc(name)
        if doc is None:
            self.write(f"Unknown setting '{name}'.")
            return
        scope = "#hub" if doc.hub else "global"
        self.write()
        self.write(f"Setting: {scope}.{doc.name} {doc.type}")
        self.write_block([doc.description])

    def _key_sections(self) -> None:
        self.write()
        self.write("Available sections:")
        for doc in KEY_DOCS.values():
            self.write(f" {doc.section} - {doc.title}")
        self.write_block(["Use `/help keys <name>' to get help on the key bindings for the selected section."])

    def _keys(self, section: str) -> None:
        doc = KEY_DOCS.get(section)
        if doc is None:
            self.write(f"Unknown keys section '{section}'.")
            return
        self.write()
        self.write(f"Key bindings for: {doc.section} - {doc.title}.")
        self.write_block([doc.bindings])

    def suggest(self, args: str) -> List[str]:
        topic, sep, partial = args.partition(" ")
        if sep and topic in ("set", "hset"):
            return [
                f"{topic} {d.name}" for d in self.store.definitions
                if not d.internal and d.name.startswith(partial) and len(d.name) != len(partial)
            ]
        if sep and topic == KEYS_SECTION:
            return [
                f"{KEYS_SECTION} {section}" for section in KEY_DOCS
                if section.startswith(partial) and len(section) != len(partial)
            ]
        if sep:
            return []
        topics = sorted(self.registry.names() + [KEYS_SECTION])
        return [t for t in topics if t.startswith(args) and len(t) != len(args)]


COMMANDS = [HelpCommand]
