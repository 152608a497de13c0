"""
Hub addresses — Parsing and storing `[proto://]host[:port][/?kp=SHA256/...]`

Accepted forms:
    example.org
    example.org:4111
    adcs://example.org:5000/
    adcs://example.org/?kp=SHA256/<52 base32 chars>

Defaults: protocol dchub, port 411. A keyprint pins the TLS certificate
and only makes sense for the encrypted protocols (nmdcs, adcs).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TYPE_CHECKING

from .units import base32_decode, base32_encode

if TYPE_CHECKING:
    from ..settings.store import VariableStore


DEFAULT_PORT = 411

_ADDRESS_RE = re.compile(
    r'^(?:(dchub|nmdcs?|adcs?)://)?'
    r'([^ :/<>()]+)'
    r'(?::([0-9]+))?'
    r'(?:/|/\?kp=SHA256/([a-zA-Z2-7]{52}))?\Z'
)


class AddressError(ValueError):
    """Address text rejected; str(exc) is shown to the user."""


class HubProtocol(Enum):
    DCHUB = "dchub"
    NMDC = "nmdc"
    NMDCS = "nmdcs"
    ADC = "adc"
    ADCS = "adcs"

    @property
    def encrypted(self) -> bool:
        return self in (HubProtocol.NMDCS, HubProtocol.ADCS)

    @property
    def is_adc(self) -> bool:
        return self in (HubProtocol.ADC, HubProtocol.ADCS)


@dataclass(frozen=True)
class HubAddress:
    """A parsed hub address."""
    host: str
    protocol: HubProtocol = HubProtocol.DCHUB
    port: int = DEFAULT_PORT
    keyprint: Optional[bytes] = None

    def __post_init__(self):
        if not self.host:
            raise AddressError("Invalid URL format.")
        if self.keyprint is not None and not self.protocol.encrypted:
            raise AddressError("Keyprint is only valid for adcs:// or nmdcs:// URLs.")

    @property
    def canonical(self) -> str:
        return f"{self.protocol.value}://{self.host}:{self.port}/"

    @property
    def keyprint_base32(self) -> Optional[str]:
        if self.keyprint is None:
            return None
        return base32_encode(self.keyprint)

    def __str__(self) -> str:
        return self.canonical


def parse_address(text: str) -> HubAddress:
    """
    Parse user-typed hub address text.

    Raises:
        AddressError: Text does not match the grammar, or carries a
                      keyprint on an unencrypted protocol
    """
    match = _ADDRESS_RE.match(text)
    if not match:
        raise AddressError("Invalid URL format.")
    proto, host, port, keyprint = match.groups()
    return HubAddress(
        host=host,
        protocol=HubProtocol(proto) if proto else HubProtocol.DCHUB,
        port=int(port) if port else DEFAULT_PORT,
        keyprint=base32_decode(keyprint) if keyprint else None,
    )


def store_hub_address(store: 'VariableStore', scope_id: int, address: HubAddress) -> None:
    """
    Remember a hub's address.

    A pinned keyprint belongs to a specific server: it is replaced when
    the new address carries one and dropped when the address changes
    without one.
    """
    old = store.raw(scope_id, "hubaddr")
    new = address.canonical
    store.set_raw(scope_id, "hubaddr", new)
    if address.keyprint is not None:
        store.set_raw(scope_id, "hubkp", address.keyprint_base32)
    elif old and old != new:
        store.set_raw(scope_id, "hubkp", None)
