"""
Commands — Shell command implementations with self-registration

Each command module:
1. Defines one BaseCommand subclass per command (name, run, suggest)
2. Exports COMMANDS, the classes to instantiate

Registry pattern enables:
- Locality: Completion lives next to the handler it completes for
- Open/Closed: Add command = add class to a module's COMMANDS
- Single Responsibility: Each module owns one area of the shell
"""

import importlib
import logging
from typing import List, TYPE_CHECKING

from ..core.registry import Registry
from .base import BaseCommand

if TYPE_CHECKING:
    from ..session import Session


logger = logging.getLogger("hubline.commands")

# Command modules that participate in registration.
# Display order comes from the registry (sorted by name), not from here.
COMMAND_MODULES = [
    'chat_cmd',
    'hub_cmd',
    'settings_cmd',
    'search_cmd',
    'share_cmd',
    'users_cmd',
    'misc_cmd',
    'help_cmd',
]


def build_commands(session: 'Session') -> List[BaseCommand]:
    """Instantiate every command of every module in COMMAND_MODULES."""
    commands = []
    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)
        for command_class in module.COMMANDS:
            commands.append(command_class(session))
    logger.debug("built %d commands", len(commands))
    return commands


def build_registry(session: 'Session') -> Registry:
    """
    Build the command table for a session and attach it.

    Raises:
        ValueError: Two commands share a name
    """
    registry = Registry(build_commands(session))
    session.registry = registry
    return registry


__all__ = ['BaseCommand', 'COMMAND_MODULES', 'build_commands', 'build_registry']
