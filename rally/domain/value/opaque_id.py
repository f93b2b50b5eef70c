"""Opaque identifiers exposed to clients.

An opaque id is the base64url encoding of ``"{Kind}:{id}"``, e.g.
``encode(EntityKind.USER, 42) == "VXNlcjo0Mg=="``. Clients must treat it as
an opaque value; it is used both as a node id and as a pagination cursor.
"""

import base64
import binascii
import re

from rally.domain.error import IdKindMismatchError, MalformedIdError, NotANumberIdError
from rally.domain.value.types import EntityKind

SEPARATOR = ":"

_INTEGER = re.compile(r"[+-]?[0-9]+")

# Ids are signed 64-bit integers, the width of the BIGINT keys
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def encode(kind: EntityKind | str, entity_id: int) -> str:
    """Encode an entity id as an opaque token."""
    name = kind.value if isinstance(kind, EntityKind) else kind
    raw = f"{name}{SEPARATOR}{entity_id}".encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def split(token: str) -> tuple[str, int]:
    """Decode a token into its kind prefix and numeric id.

    Raises:
        MalformedIdError: Token is not base64url or lacks a separator
        NotANumberIdError: The id part is not a signed 64-bit integer
    """
    try:
        raw = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
        payload = raw.decode("utf-8")
    except (binascii.Error, UnicodeError):
        raise MalformedIdError(token)

    kind, separator, value = payload.partition(SEPARATOR)
    if not separator:
        raise MalformedIdError(token)

    if not _INTEGER.fullmatch(value):
        raise NotANumberIdError(token, value)

    entity_id = int(value)
    if not INT64_MIN <= entity_id <= INT64_MAX:
        raise NotANumberIdError(token, value)
    return kind, entity_id


def decode(token: str) -> int:
    """Decode a token into its numeric id without checking the kind."""
    _, entity_id = split(token)
    return entity_id


def decode_kind(token: str, expected: EntityKind) -> int:
    """Decode a token, requiring it to have been issued for `expected`.

    Raises:
        IdKindMismatchError: Token carries a different kind prefix
    """
    kind, entity_id = split(token)
    if kind != expected.value:
        raise IdKindMismatchError(expected.value, kind)
    return entity_id
