"""
Settings — Two-tier (global / per-hub) configuration variables

- definitions: the fixed variable table
- kinds: parse/format/suggest functions per value kind
- store: resolution, validation and scoping rules
- backends: raw value storage (memory, YAML)
"""

from .backends import SettingsBackend, MemoryBackend, YamlBackend
from .definitions import (
    GLOBAL, VARIABLES, ChangeEffect, Tier, VariableDefinition,
    by_name, counterpart_command,
)
from .kinds import SettingError, ValueKind
from .store import VariableStore, UnknownSettingError, ScopeError

__all__ = [
    'GLOBAL', 'VARIABLES', 'ChangeEffect', 'Tier', 'VariableDefinition',
    'by_name', 'counterpart_command',
    'SettingError', 'UnknownSettingError', 'ScopeError', 'ValueKind',
    'VariableStore', 'SettingsBackend', 'MemoryBackend', 'YamlBackend',
]
