"""
VariableStore — Two-tier resolution of configuration variables

Every setting can be stored globally (scope 0) and, where allowed,
overridden per hub (scope = hub id). Reading a hub-scoped value falls
through:

    hub override -> global value -> fallback variable -> default

Writes are parse-then-commit: a value that fails to parse never reaches
the backend, and listeners only hear about committed changes.

Usage:
    store = VariableStore(MemoryBackend())
    store.assign(GLOBAL, "slots", "5")        # -> "5"
    store.assign(hub_id, "nick", "bob")       # hub override
    store.describe(hub_id, "#hub", "slots")   # "#hub.slots = 5 (global)"
"""

import fnmatch
import logging
from typing import Callable, Dict, List, Optional, Sequence

from .backends import MemoryBackend, SettingsBackend
from .definitions import (
    GLOBAL, VARIABLES, VariableDefinition,
    counterpart_command, tier_of,
)
from .kinds import SettingError, raw_bool


logger = logging.getLogger("hubline.settings")

Listener = Callable[[int, VariableDefinition, Optional[str]], None]


class UnknownSettingError(SettingError):
    """Name is not a user-visible setting."""

    def __init__(self, name: str):
        super().__init__(f"No setting with the name '{name}'.")
        self.name = name


class ScopeError(SettingError):
    """Setting exists but not in the tier it was addressed from."""

    def __init__(self, definition: VariableDefinition, scope_id: int, unset: bool):
        command = counterpart_command(scope_id, unset)
        if scope_id != GLOBAL:
            message = f"`{definition.name}' is a global setting, did you mean to use /{command} instead?"
        else:
            message = f"'{definition.name}' is a hub setting, did you mean to use /{command} instead?"
        super().__init__(message)
        self.definition = definition
        self.command = command


class VariableStore:
    """
    Resolves, validates and stores settings on top of a backend.

    Args:
        backend: Raw value storage (defaults to an in-memory dict)
        definitions: Variable table, in listing order
        defaults: Per-installation defaults overriding the table's
                  (e.g. download_dir under the data directory)
    """

    def __init__(
        self,
        backend: Optional[SettingsBackend] = None,
        definitions: Sequence[VariableDefinition] = VARIABLES,
        defaults: Optional[Dict[str, str]] = None,
    ):
        self.backend = backend if backend is not None else MemoryBackend()
        self._definitions = tuple(definitions)
        self._by_name = {d.name: d for d in self._definitions}
        self._defaults = dict(defaults or {})
        self._listeners: List[Listener] = []

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def definition(self, name: str) -> Optional[VariableDefinition]:
        return self._by_name.get(name)

    @property
    def definitions(self):
        return self._definitions

    def add_listener(self, listener: Listener) -> None:
        """Call listener(scope_id, definition, raw) after every committed change."""
        self._listeners.append(listener)

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    def raw(self, scope_id: int, name: str) -> Optional[str]:
        """Effective raw value at a scope, or None when nothing applies."""
        definition = self._by_name.get(name)
        if definition is None:
            return None
        if scope_id != GLOBAL:
            value = self.backend.get(scope_id, name)
            if value is not None:
                return value
        value = self.backend.get(GLOBAL, name)
        if value is not None:
            return value
        if definition.fallback:
            value = self.raw(scope_id, definition.fallback)
            if value is not None:
                return value
        return self._defaults.get(name, definition.default)

    def has_override(self, scope_id: int, name: str) -> bool:
        """True if a value is stored at exactly this scope."""
        return self.backend.get(scope_id, name) is not None

    def resolve(self, scope_id: int, name: str) -> Optional[str]:
        """Effective value formatted for display, or None when unset."""
        raw = self.raw(scope_id, name)
        if raw is None:
            return None
        return self._by_name[name].format(raw)

    def get_bool(self, scope_id: int, name: str) -> bool:
        return raw_bool(self.raw(scope_id, name))

    def describe(self, scope_id: int, scope_name: str, name: str) -> str:
        """
        One display line for a variable.

        At hub scope, a value inherited from the global tier is marked
        " (global)".
        """
        definition = self._by_name[name]
        value = self.resolve(scope_id, name)
        if value is None:
            return f"{scope_name}.{name} is not set."
        inherited = (
            scope_id != GLOBAL
            and definition.global_ok
            and not self.has_override(scope_id, name)
        )
        return f"{scope_name}.{name} = {value}{' (global)' if inherited else ''}"

    def matching(self, scope_id: int, pattern: Optional[str]) -> List[VariableDefinition]:
        """
        Variables usable at this scope whose name matches a glob.

        An empty pattern matches everything; a pattern not already ending
        in a wildcard is treated as a prefix.
        """
        if pattern and not pattern.endswith(("*", "?")):
            pattern += "*"
        return [
            d for d in self._definitions
            if d.usable_at(scope_id)
            and (not pattern or fnmatch.fnmatchcase(d.name, pattern))
        ]

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def check(self, scope_id: int, name: str, unset: bool = False) -> VariableDefinition:
        """
        Resolve a user-typed name to a definition usable at this scope.

        Raises:
            UnknownSettingError: No such variable, or an internal one
            ScopeError: Variable belongs to the other tier
        """
        definition = self._by_name.get(name)
        if definition is None or definition.internal:
            raise UnknownSettingError(name)
        if not definition.usable_at(scope_id):
            raise ScopeError(definition, scope_id, unset)
        return definition

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def assign(self, scope_id: int, name: str, text: str) -> Optional[str]:
        """
        Parse and store a user value; returns the formatted effective value.

        Raises:
            SettingError: Name, scope or value rejected; nothing is stored
        """
        definition = self.check(scope_id, name)
        raw = definition.parse(text)
        if definition.name == "hubname":
            owner = self.scope_for_hubname(raw)
            if owner is not None and owner != scope_id:
                raise SettingError("Name already used.")
        self._commit(scope_id, definition, raw)
        return self.resolve(scope_id, name)

    def clear(self, scope_id: int, name: str) -> Optional[str]:
        """
        Remove the value stored at this scope; returns what now applies.

        Raises:
            SettingError: Name or scope rejected, or the variable must
                          always hold a value at this tier
        """
        definition = self.check(scope_id, name, unset=True)
        if tier_of(scope_id) in definition.required_at:
            raise SettingError("May not be unset.")
        self._commit(scope_id, definition, None)
        return self.resolve(scope_id, name)

    def set_raw(self, scope_id: int, name: str, raw: Optional[str]) -> None:
        """Write without user-facing checks; for the client's own bookkeeping."""
        definition = self._by_name.get(name)
        if definition is None:
            raise KeyError(name)
        self._commit(scope_id, definition, raw)

    def _commit(self, scope_id: int, definition: VariableDefinition, raw: Optional[str]) -> None:
        try:
            self.backend.set(scope_id, definition.name, raw)
        except OSError as e:
            logger.error("could not save %s[%d]: %s", definition.name, scope_id, e)
            raise SettingError(f"Unable to save settings: {e.strerror or e}")
        logger.debug("set %s[%d] = %r", definition.name, scope_id, raw)
        for listener in self._listeners:
            listener(scope_id, definition, raw)

    # -------------------------------------------------------------------------
    # Hub scopes
    # -------------------------------------------------------------------------

    def hub_scopes(self) -> Dict[str, int]:
        """Known hubs: '#name' -> scope id, sorted by name."""
        found = {}
        for scope_id in self.backend.scopes():
            name = self.backend.get(scope_id, "hubname")
            if name:
                found[name] = scope_id
        return dict(sorted(found.items()))

    def scope_for_hubname(self, name: str) -> Optional[int]:
        """Scope id of a hub, by name with or without '#'."""
        if not name.startswith("#"):
            name = f"#{name}"
        return self.hub_scopes().get(name)

    def remove_scope(self, scope_id: int) -> None:
        """Drop every value stored for a hub."""
        if scope_id == GLOBAL:
            raise ValueError("The global scope cannot be removed")
        self.backend.remove_scope(scope_id)
        logger.debug("removed hub scope %d", scope_id)
