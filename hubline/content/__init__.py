"""
Content — Static help text for the shell

Text is data, not code embedded in commands.
"""

from .help_text import (
    COMMAND_DOCS, CommandDoc, KEY_DOCS, KeyDoc, NO_DOCUMENTATION,
    SETTING_DOCS, SettingDoc, setting_doc,
)

__all__ = [
    'COMMAND_DOCS', 'CommandDoc', 'KEY_DOCS', 'KeyDoc', 'NO_DOCUMENTATION',
    'SETTING_DOCS', 'SettingDoc', 'setting_doc',
]
