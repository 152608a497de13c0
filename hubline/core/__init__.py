"""
Core — Command interpretation for hubline

- Dispatcher: routes an input line to one command
- Registry: immutable, name-sorted command table
- Suggest: tab completion
- Query: /search flag grammar
- Address: hub URL grammar
- Resolver: /ungrant user resolution
- Units: sizes, intervals and base32
"""

from .address import AddressError, HubAddress, HubProtocol, parse_address, store_hub_address
from .dispatcher import Dispatcher, split_line
from .query import FileType, QueryError, SearchQuery, SizeBound, SizeDirection, parse_query, split_args
from .registry import CommandEntry, Registry
from .resolver import GrantResolver, ResolveResult, ResolveStatus
from .suggest import MAX_SUGGESTIONS, SuggestionEngine, nick_suggest

__all__ = [
    "AddressError", "HubAddress", "HubProtocol", "parse_address", "store_hub_address",
    "Dispatcher", "split_line",
    "FileType", "QueryError", "SearchQuery", "SizeBound", "SizeDirection", "parse_query", "split_args",
    "CommandEntry", "Registry",
    "GrantResolver", "ResolveResult", "ResolveStatus",
    "MAX_SUGGESTIONS", "SuggestionEngine", "nick_suggest",
]
