"""
Search queries — Tokenizing and parsing `/search` arguments

Grammar (tokens after shell-style splitting):
    -hub | -all          search the current hub (default) or all hubs
    -le <size>           file must be at most <size>
    -ge <size>           file must be at least <size>
    -t <type>            1-8 or any|audio|archive|doc|exe|img|video|dir
    -tth <root>          exact 39-char base32 TTH root (forces type TTH)
    --                   everything after is a search term
    anything else        a search term

Non-accumulating options overwrite earlier ones; terms accumulate.
Parsing stops at the first error, naming the offending option.
"""

import shlex
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .units import base32_decode, is_tth, parse_size


class QueryError(ValueError):
    """Search arguments rejected; str(exc) is shown to the user."""


class FileType(Enum):
    """Search type filter; values are the protocol's numeric codes."""
    ANY = 1
    AUDIO = 2
    ARCHIVE = 3
    DOCUMENT = 4
    EXECUTABLE = 5
    IMAGE = 6
    VIDEO = 7
    DIRECTORY = 8
    TTH = 9

    @classmethod
    def from_argument(cls, text: str) -> Optional['FileType']:
        """Resolve a -t operand: numeric code 1-8 or keyword."""
        if len(text) == 1 and '1' <= text <= '8':
            return cls(int(text))
        for file_type, keyword in _KEYWORDS.items():
            if keyword == text:
                return file_type
        return None


_KEYWORDS = {
    FileType.ANY: "any",
    FileType.AUDIO: "audio",
    FileType.ARCHIVE: "archive",
    FileType.DOCUMENT: "doc",
    FileType.EXECUTABLE: "exe",
    FileType.IMAGE: "img",
    FileType.VIDEO: "video",
    FileType.DIRECTORY: "dir",
}


class SizeDirection(Enum):
    AT_LEAST = "ge"
    AT_MOST = "le"


@dataclass(frozen=True)
class SizeBound:
    direction: SizeDirection
    value: int


@dataclass(frozen=True)
class SearchQuery:
    """
    A validated search request.

    Invariant: at least one term, or a TTH root.
    """
    terms: Tuple[str, ...] = ()
    size: Optional[SizeBound] = None
    file_type: FileType = FileType.ANY
    tth: Optional[bytes] = None
    all_hubs: bool = False

    def __post_init__(self):
        if not self.terms and self.tth is None:
            raise QueryError("No search query given.")


# =============================================================================
# Tokenizing
# =============================================================================

def split_args(text: str) -> List[str]:
    """Split with shell quoting rules."""
    try:
        return shlex.split(text)
    except ValueError as e:
        raise QueryError(f"Error parsing arguments: {e}")


def split_first_arg(text: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Split off one shell-quoted leading argument, leaving the rest verbatim.

    Used where only the first argument may be quoted and the remainder is
    taken literally (e.g. a filesystem path after a share name).

    Returns:
        (first, rest): first is the unquoted argument, rest the text after
        it with leading spaces removed; either may be None.
    """
    text = text.lstrip(' ')
    pos = 0
    while True:
        pos = text.find(' ', pos + 1)
        head = text if pos < 0 else text[:pos]
        if pos >= 0 and text[pos - 1] == '\\':
            continue
        try:
            tokens = shlex.split(head)
        except ValueError:
            if pos < 0:
                return None, None
            continue
        first = tokens[0] if len(tokens) == 1 else (head or None)
        if pos < 0:
            return first, None
        return first, text[pos + 1:].lstrip(' ')


# =============================================================================
# Parsing
# =============================================================================

def _operand(tokens: Sequence[str], i: int) -> str:
    if i + 1 >= len(tokens):
        raise QueryError(f"Option `{tokens[i]}' expects an argument.")
    return tokens[i + 1]


def parse_query(tokens: Sequence[str]) -> SearchQuery:
    """
    Build a SearchQuery from tokens.

    Raises:
        QueryError: First invalid option or operand, or no terms and no TTH
    """
    terms: List[str] = []
    size: Optional[SizeBound] = None
    file_type = FileType.ANY
    tth: Optional[bytes] = None
    all_hubs = False
    literal = False

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if literal or not token.startswith("-"):
            terms.append(token)
        elif token == "--":
            literal = True
        elif token == "-hub":
            all_hubs = False
        elif token == "-all":
            all_hubs = True
        elif token in ("-le", "-ge"):
            value = parse_size(_operand(tokens, i))
            if value is None:
                raise QueryError(f"Invalid size argument for option `{token}'.")
            direction = SizeDirection.AT_LEAST if token == "-ge" else SizeDirection.AT_MOST
            size = SizeBound(direction, value)
            i += 1
        elif token == "-t":
            chosen = FileType.from_argument(_operand(tokens, i))
            if chosen is None:
                raise QueryError(f"Unknown argument for option `{token}'.")
            file_type = chosen
            i += 1
        elif token == "-tth":
            root = _operand(tokens, i)
            if not is_tth(root):
                raise QueryError(f"Invalid TTH root for option `{token}'.")
            tth = base32_decode(root)
            file_type = FileType.TTH
            i += 1
        else:
            raise QueryError(f"Unknown option: {token}")
        i += 1

    return SearchQuery(
        terms=tuple(terms),
        size=size,
        file_type=file_type,
        tth=tth,
        all_hubs=all_hubs,
    )
