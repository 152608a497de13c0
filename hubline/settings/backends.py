"""
Settings backends — Where raw setting values live

The VariableStore decides *what* a setting resolves to; a backend only
remembers raw text keyed by (scope_id, name). scope_id 0 is the global
tier, anything else is a hub.

Backends:
- MemoryBackend: plain dict (tests, or no data directory)
- YamlBackend: one YAML file, rewritten on every change
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

import yaml


logger = logging.getLogger("hubline.settings")


class SettingsBackend(ABC):
    """Key-value storage for raw setting values."""

    @abstractmethod
    def get(self, scope_id: int, name: str) -> Optional[str]:
        """Raw value stored at exactly this scope, or None."""
        pass

    @abstractmethod
    def set(self, scope_id: int, name: str, raw: Optional[str]) -> None:
        """Store a raw value; None removes it."""
        pass

    @abstractmethod
    def scopes(self) -> List[int]:
        """Hub scope ids that hold at least one value, ascending."""
        pass

    @abstractmethod
    def remove_scope(self, scope_id: int) -> None:
        """Forget every value stored for a hub."""
        pass


class MemoryBackend(SettingsBackend):
    """In-process storage; nothing survives a restart."""

    def __init__(self, data: Optional[Dict[int, Dict[str, str]]] = None):
        self._data: Dict[int, Dict[str, str]] = {}
        for scope_id, values in (data or {}).items():
            self._data[scope_id] = dict(values)

    def get(self, scope_id: int, name: str) -> Optional[str]:
        return self._data.get(scope_id, {}).get(name)

    def set(self, scope_id: int, name: str, raw: Optional[str]) -> None:
        if raw is None:
            values = self._data.get(scope_id)
            if values is not None:
                values.pop(name, None)
                if not values:
                    del self._data[scope_id]
        else:
            self._data.setdefault(scope_id, {})[name] = raw

    def scopes(self) -> List[int]:
        return sorted(s for s in self._data if s != 0)

    def remove_scope(self, scope_id: int) -> None:
        self._data.pop(scope_id, None)

    def snapshot(self) -> Dict[int, Dict[str, str]]:
        return {s: dict(v) for s, v in self._data.items()}


def _as_text(values: Dict) -> Dict[str, str]:
    """Raw text for hand-edited YAML scalars; booleans in canonical form, empty values dropped."""
    result = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        result[str(key)] = str(value)
    return result


class YamlBackend(MemoryBackend):
    """
    Settings persisted to a YAML file.

    Layout:
        global:
          nick: alice
        hubs:
          8134623049567823:
            hubname: '#example'
            hubaddr: dchub://example.org:411/

    The file is rewritten after every change, so a crash loses nothing
    that was acknowledged to the user.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[int, Dict[str, str]]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                doc = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        if not isinstance(doc, dict):
            logger.warning("Ignoring settings file %s: not a mapping", self.path)
            return {}

        data: Dict[int, Dict[str, str]] = {}
        if isinstance(doc.get("global"), dict):
            data[0] = _as_text(doc["global"])
        hubs = doc.get("hubs") or {}
        if not isinstance(hubs, dict):
            logger.warning("Ignoring hubs in settings file %s: not a mapping", self.path)
            hubs = {}
        for key, values in hubs.items():
            try:
                scope_id = int(key)
            except (TypeError, ValueError):
                scope_id = None
            if not scope_id or scope_id < 0 or not isinstance(values, dict):
                logger.warning("Ignoring hub %r in settings file %s", key, self.path)
                continue
            data[scope_id] = _as_text(values)
        return data

    def _save(self) -> None:
        data = self.snapshot()
        doc = {
            "global": data.pop(0, {}),
            "hubs": data,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            yaml.dump(doc, f, default_flow_style=False)

    def set(self, scope_id: int, name: str, raw: Optional[str]) -> None:
        previous = self.get(scope_id, name)
        super().set(scope_id, name, raw)
        try:
            self._save()
        except OSError:
            super().set(scope_id, name, previous)
            raise

    def remove_scope(self, scope_id: int) -> None:
        previous = self._data.get(scope_id)
        super().remove_scope(scope_id)
        try:
            self._save()
        except OSError:
            if previous is not None:
                self._data[scope_id] = previous
            raise
