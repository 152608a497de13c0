"""
hubline -- Command interpretation for a text-mode Direct Connect client

Input lines become commands, commands act on a Session, and anything
that touches the network is delegated to a ClientServices object.

    from hubline import Session, VariableStore, OfflineServices, MessageLog
    from hubline.commands import build_registry
    from hubline.core import Dispatcher

    log = MessageLog()
    session = Session(VariableStore(), OfflineServices(log), log)
    Dispatcher(build_registry(session), log).dispatch("/set slots 4")
"""

from .version import __version__
from .services import ClientServices, OfflineServices
from .session import Hub, HubState, HubUser, MessageLog, Session, Tab, TabKind
from .settings import VariableStore

__all__ = [
    '__version__',
    'ClientServices', 'OfflineServices',
    'Hub', 'HubState', 'HubUser', 'MessageLog', 'Session', 'Tab', 'TabKind',
    'VariableStore',
]
