"""
Setting definitions — The fixed table of configuration variables

Each VariableDefinition says where a setting may be used (global tier,
hub tier, both, or neither for internal bookkeeping), how its text is
parsed and displayed, and what happens elsewhere when it changes.

The table is built once at import and never mutated. Order matters:
listings (/set, /hset) follow it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple

from . import kinds
from .kinds import ValueKind


GLOBAL = 0


class Tier(Enum):
    """The two configuration tiers."""
    GLOBAL = "global"
    HUB = "hub"


def tier_of(scope_id: int) -> Tier:
    return Tier.GLOBAL if scope_id == GLOBAL else Tier.HUB


class ChangeEffect(Enum):
    """Side effect a change must trigger outside the store."""
    HUB_INFO = "hub_info"        # re-announce our user info to hubs
    LISTEN = "listen"            # rebind listening sockets
    COLORS = "colors"            # reload the color palette
    LOG_LEVEL = "log_level"      # switch debug logging
    HUB_NAME = "hub_name"        # retitle the hub tab
    PASSWORD = "password"        # resend a pending login password
    DOWNLOADS = "downloads"      # start queued downloads on more slots
    UPLOAD_SPEED = "upload_speed"  # check `connection' converts to bytes/s


@dataclass(frozen=True)
class VariableDefinition:
    """
    One configuration variable.

    A definition usable in neither tier is internal: users can never read
    or write it, only the client itself through VariableStore.set_raw().
    """
    name: str
    kind: ValueKind
    global_ok: bool
    hub_ok: bool
    parse: Callable[[str], str] = kinds.parse_text
    format: Callable[[str], str] = kinds.format_text
    suggest: Optional[Callable[[Optional[str], str], List[str]]] = None
    default: Optional[str] = None
    fallback: Optional[str] = None
    required_at: FrozenSet[Tier] = field(default_factory=frozenset)
    effects: Tuple[ChangeEffect, ...] = ()

    @property
    def internal(self) -> bool:
        return not (self.global_ok or self.hub_ok)

    def usable_at(self, scope_id: int) -> bool:
        """Whether users may read/write this variable in the given tier."""
        return self.hub_ok if scope_id != GLOBAL else self.global_ok


def _bool(name, global_ok, hub_ok, default, effects=()):
    return VariableDefinition(
        name, ValueKind.BOOL, global_ok, hub_ok,
        parse=kinds.parse_bool, suggest=kinds.suggest_bool,
        default=default, effects=effects,
    )


def _flags(name, global_ok, hub_ok, flagset, default, effects=()):
    return VariableDefinition(
        name, ValueKind.FLAGS, global_ok, hub_ok,
        parse=flagset.parse, suggest=flagset.suggest,
        default=default, effects=effects,
    )


def _internal(name, default=None):
    return VariableDefinition(name, ValueKind.STRING, False, False, default=default)


def _color(name, default):
    return VariableDefinition(
        f"color_{name}", ValueKind.COLOR, True, False,
        parse=kinds.parse_color, suggest=kinds.suggest_color,
        default=default, effects=(ChangeEffect.COLORS,),
    )


_LISTEN = (ChangeEffect.LISTEN, ChangeEffect.HUB_INFO)
_HUB_INFO = (ChangeEffect.HUB_INFO,)

COLORS = (
    _color("list_default", "default"),
    _color("list_header", "default,bold"),
    _color("list_select", "default,bold"),
    _color("log_default", "default"),
    _color("log_highlight", "yellow,bold"),
    _color("log_join", "cyan,bold"),
    _color("log_nick", "default"),
    _color("log_ownnick", "default,bold"),
    _color("log_quit", "cyan"),
    _color("log_time", "black,bold"),
    _color("separator", "default,reverse"),
    _color("tab_active", "default,bold"),
    _color("tabprio_high", "magenta,bold"),
    _color("tabprio_low", "black,bold"),
    _color("tabprio_med", "cyan,bold"),
    _color("title", "default,reverse"),
)

VARIABLES: Tuple[VariableDefinition, ...] = (
    _bool("active", True, True, "false", _LISTEN),
    VariableDefinition("active_ip", ValueKind.STRING, True, True,
                       parse=kinds.parse_active_ip, suggest=kinds.suggest_old, effects=_LISTEN),
    VariableDefinition("active_port", ValueKind.INT, True, True,
                       parse=kinds.parse_port, effects=_LISTEN),
    VariableDefinition("active_udp_port", ValueKind.INT, True, True,
                       parse=kinds.parse_port, fallback="active_port", effects=_LISTEN),
    _bool("adc_blom", True, True, "false"),
    _bool("autoconnect", False, True, "false"),
    VariableDefinition("autorefresh", ValueKind.INTERVAL, True, False,
                       parse=kinds.parse_autorefresh, format=kinds.format_autorefresh,
                       default="3600"),
    VariableDefinition("backlog", ValueKind.INT, True, True,
                       parse=kinds.parse_backlog, format=kinds.format_backlog, default="0"),
    _bool("chat_only", True, True, "false"),
    _internal("cid"),
    *COLORS,
    VariableDefinition("connection", ValueKind.STRING, True, True, suggest=kinds.suggest_old,
                       effects=(ChangeEffect.UPLOAD_SPEED, ChangeEffect.HUB_INFO)),
    VariableDefinition("description", ValueKind.STRING, True, True,
                       suggest=kinds.suggest_old, effects=_HUB_INFO),
    _bool("disconnect_offline", True, True, "false"),
    VariableDefinition("download_dir", ValueKind.PATH, True, False,
                       suggest=kinds.suggest_path),
    VariableDefinition("download_exclude", ValueKind.REGEX, True, False,
                       parse=kinds.parse_regex, suggest=kinds.suggest_old),
    VariableDefinition("download_rate", ValueKind.SPEED, True, False,
                       parse=kinds.parse_speed, format=kinds.format_speed),
    VariableDefinition("download_segment", ValueKind.SIZE, True, False,
                       parse=kinds.parse_download_segment, format=kinds.format_download_segment,
                       default=str(kinds.DOWNLOAD_CHUNK_SIZE)),
    _bool("download_shared", True, False, "true"),
    VariableDefinition("download_slots", ValueKind.INT, True, False,
                       parse=kinds.parse_int, default="3", effects=(ChangeEffect.DOWNLOADS,)),
    VariableDefinition("email", ValueKind.STRING, True, True,
                       suggest=kinds.suggest_old, effects=_HUB_INFO),
    VariableDefinition("encoding", ValueKind.STRING, True, True,
                       parse=kinds.parse_encoding, suggest=kinds.suggest_encoding, default="UTF-8"),
    VariableDefinition("filelist_maxage", ValueKind.INTERVAL, True, False,
                       parse=kinds.parse_interval_value, format=kinds.format_interval_value,
                       suggest=kinds.suggest_old, default="604800"),
    _internal("fl_done", "false"),
    _flags("flush_file_cache", True, False, kinds.FLUSH_CACHE_FLAGS, "none"),
    VariableDefinition("geoip_cc", ValueKind.PATH, True, False, suggest=kinds.suggest_path),
    VariableDefinition("hash_rate", ValueKind.SPEED, True, False,
                       parse=kinds.parse_speed, format=kinds.format_speed),
    _internal("hubaddr"),
    _internal("hubkp"),
    VariableDefinition("hubname", ValueKind.STRING, False, True,
                       parse=kinds.parse_hubname, suggest=kinds.suggest_old,
                       required_at=frozenset({Tier.HUB}), effects=(ChangeEffect.HUB_NAME,)),
    VariableDefinition("incoming_dir", ValueKind.PATH, True, False, suggest=kinds.suggest_path),
    VariableDefinition("local_address", ValueKind.STRING, True, True,
                       parse=kinds.parse_ip, suggest=kinds.suggest_old, effects=_LISTEN),
    _bool("log_debug", True, False, "false", (ChangeEffect.LOG_LEVEL,)),
    _bool("log_downloads", True, False, "true"),
    _bool("log_hubchat", True, True, "true"),
    _bool("log_uploads", True, False, "true"),
    VariableDefinition("max_ul_per_user", ValueKind.INT, True, True,
                       parse=kinds.parse_int_ge1, default="1"),
    VariableDefinition("minislots", ValueKind.INT, True, False,
                       parse=kinds.parse_int_ge1, default="3"),
    VariableDefinition("minislot_size", ValueKind.INT, True, False,
                       parse=kinds.parse_minislot_size, format=kinds.format_minislot_size,
                       default="65536"),
    VariableDefinition("nick", ValueKind.STRING, True, True,
                       parse=kinds.parse_nick, suggest=kinds.suggest_old,
                       required_at=frozenset({Tier.GLOBAL})),
    _flags("notify_bell", True, False, kinds.NOTIFY_BELL_FLAGS, "disabled"),
    VariableDefinition("password", ValueKind.STRING, False, True,
                       format=kinds.format_password, effects=(ChangeEffect.PASSWORD,)),
    _internal("pid"),
    VariableDefinition("reconnect_timeout", ValueKind.INTERVAL, True, True,
                       parse=kinds.parse_interval_value, format=kinds.format_interval_value,
                       suggest=kinds.suggest_old, default="30"),
    _bool("sendfile", True, False, "true"),
    _bool("share_emptydirs", True, False, "false"),
    VariableDefinition("share_exclude", ValueKind.REGEX, True, False,
                       parse=kinds.parse_regex, suggest=kinds.suggest_old),
    _bool("share_hidden", True, False, "false"),
    _bool("share_symlinks", True, False, "false"),
    _bool("show_free_slots", True, True, "false", _HUB_INFO),
    _bool("show_joinquit", True, True, "false"),
    VariableDefinition("slots", ValueKind.INT, True, False,
                       parse=kinds.parse_int_ge1, default="10", effects=_HUB_INFO),
    _flags("sudp_policy", True, False, kinds.POLICY_FLAGS, "prefer", _HUB_INFO),
    _flags("tls_policy", True, True, kinds.POLICY_FLAGS, "prefer", _LISTEN),
    VariableDefinition("tls_priority", ValueKind.STRING, True, False,
                       suggest=kinds.suggest_old, default="NORMAL:-ARCFOUR-128"),
    VariableDefinition("ui_time_format", ValueKind.STRING, True, False,
                       suggest=kinds.suggest_old, default="[%H:%M:%S]"),
    VariableDefinition("upload_rate", ValueKind.SPEED, True, False,
                       parse=kinds.parse_speed, format=kinds.format_speed),
)


def _index(definitions) -> Dict[str, VariableDefinition]:
    index = {}
    for definition in definitions:
        if definition.name in index:
            raise ValueError(f"Duplicate setting: {definition.name}")
        index[definition.name] = definition
    return index


BY_NAME: Dict[str, VariableDefinition] = _index(VARIABLES)


def by_name(name: str) -> Optional[VariableDefinition]:
    """Look up a definition, internal ones included."""
    return BY_NAME.get(name)


def counterpart_command(scope_id: int, unset: bool) -> str:
    """
    The command that addresses the other tier.

    Used when a variable is addressed from the wrong tier: from a hub,
    point at /set (/unset); from the global tier, at /hset (/hunset).
    """
    if scope_id != GLOBAL:
        return "unset" if unset else "set"
    return "hunset" if unset else "hset"
