# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of everything that flows between the
# IPFS node and the tool layer.  They carry almost no behavior — they're
# structured bags of data decoded from the node's JSON envelopes.
#
# THREE KINDS OF NOUNS LIVE HERE:
#   1. ResponseKind / EmptyBodyPolicy — small enums that steer decoding
#   2. Operation + OPERATIONS — the static description of each node call
#   3. AddResult, PinResult, IpfsLink, IpfsObject, ListResult — decoded
#      responses, one per structured endpoint
#
# FIELD NAMES:
#   The node speaks PascalCase JSON ("Hash", "ModTime").  We decode into
#   snake_case attributes once, in the from_json() constructors, and never
#   touch the raw keys again.
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional


# -----------------------------------------------------------------------------
# ResponseKind — how a response body is decoded
# -----------------------------------------------------------------------------
# The node's API is not uniform: `cat` streams raw bytes, while `add`, `pin`
# and `ls` answer with a JSON envelope.  Callers always say which one they
# expect; the path never decides.
# -----------------------------------------------------------------------------
class ResponseKind(str, Enum):
    STRUCTURED = "structured"
    RAW_TEXT = "raw-text"


class EmptyBodyPolicy(str, Enum):
    """What a fetch does with a present-but-blank body.

    MISSING treats an empty or whitespace-only body as "no file".
    CONTENT hands the blank body back as a normal result.
    """

    MISSING = "missing"
    CONTENT = "content"


# -----------------------------------------------------------------------------
# Operation — one row of the node API table
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Operation:
    """Static description of one storage-node call."""

    name: str                          # "upload", "fetch", ...
    method: str                        # HTTP verb; the node RPC API is POST-only
    path: str                          # "add", "cat", "pin/add", ...
    response_kind: ResponseKind
    multipart: bool = False            # True only for upload


OPERATIONS = MappingProxyType({
    "upload": Operation("upload", "POST", "add", ResponseKind.STRUCTURED, multipart=True),
    "fetch": Operation("fetch", "POST", "cat", ResponseKind.RAW_TEXT),
    "pin": Operation("pin", "POST", "pin/add", ResponseKind.STRUCTURED),
    "list": Operation("list", "POST", "ls", ResponseKind.STRUCTURED),
    "remove": Operation("remove", "POST", "files/rm", ResponseKind.RAW_TEXT),
})


# -----------------------------------------------------------------------------
# AddResult — what the node reports after an upload
# -----------------------------------------------------------------------------
@dataclass
class AddResult:
    """The CID and size of freshly added content."""

    hash: str                          # The CID, e.g. "QmXoyp..."
    size: str                          # Kubo reports Size as a string
    name: str = ""                     # Filename as the node recorded it

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "AddResult":
        return cls(
            hash=data["Hash"],
            size=str(data["Size"]),
            name=data.get("Name", ""),
        )


# -----------------------------------------------------------------------------
# PinResult — the pin set after pin/add
# -----------------------------------------------------------------------------
@dataclass
class PinResult:
    """Pins confirmed by the node."""

    pins: list[str] = field(default_factory=list)
    progress: Optional[int] = None     # Only sent when progress reporting is on

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "PinResult":
        pins = data["Pins"]
        if not isinstance(pins, list):
            raise TypeError(f"Pins must be a list, got {type(pins).__name__}")
        progress = data.get("Progress")
        return cls(
            pins=[str(pin) for pin in pins],
            progress=int(progress) if progress is not None else None,
        )


# -----------------------------------------------------------------------------
# IpfsLink / IpfsObject / ListResult — the `ls` response tree
# -----------------------------------------------------------------------------
# `ls` answers with one object per requested CID, each holding the links
# (directory entries) below it.  It's a tree exactly one level deep.
# -----------------------------------------------------------------------------
@dataclass
class IpfsLink:
    """One directory entry."""

    hash: str
    name: str
    mod_time: str = ""
    mode: int = 0
    size: int = 0
    target: str = ""                   # Symlink target, empty otherwise
    type: int = 0                      # 1 = directory, 2 = file (unixfs)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "IpfsLink":
        return cls(
            hash=data["Hash"],
            name=data["Name"],
            mod_time=data.get("ModTime") or "",
            mode=int(data.get("Mode") or 0),
            size=int(data.get("Size") or 0),
            target=data.get("Target") or "",
            type=int(data.get("Type") or 0),
        )


@dataclass
class IpfsObject:
    """A listed CID and its links."""

    hash: str
    links: list[IpfsLink] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "IpfsObject":
        return cls(
            hash=data["Hash"],
            links=[IpfsLink.from_json(link) for link in data.get("Links") or []],
        )


@dataclass
class ListResult:
    """Decoded `ls` response."""

    objects: list[IpfsObject] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "ListResult":
        return cls(objects=[IpfsObject.from_json(obj) for obj in data["Objects"]])

    def links(self) -> list[IpfsLink]:
        """All links, object by object, in the order the node sent them."""
        return [link for obj in self.objects for link in obj.links]
