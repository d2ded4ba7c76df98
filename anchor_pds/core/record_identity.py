"""Record Identity - record keys, AT URIs and content identifiers.

Invariants:
    - create_at_uri() is pure: same (did, collection, rkey) -> byte-identical URI
    - parse_at_uri() inverts create_at_uri() for well-formed URIs
    - generate_cid() is opaque and random, NOT a content hash

Design Decisions:
    - secrets over random for CIDs: 128 bits of entropy, no collisions under load
      (ADR: original CID scheme was ~60 bits of Math.random)
"""

import secrets
import uuid

from anchor_pds.core.domain_types import AT_URI_SCHEME, AtUri, Cid, Did, RecordKey

_CID_PREFIX = "baf"


def generate_rkey() -> RecordKey:
    """Random 128-bit record key, globally unique in practice."""
    return RecordKey(str(uuid.uuid4()))


def create_at_uri(did: str, collection: str, rkey: str) -> AtUri:
    return AtUri(f"{AT_URI_SCHEME}://{did}/{collection}/{rkey}")


def parse_at_uri(uri: str) -> tuple[Did, str, RecordKey] | None:
    """Split at://did/collection/rkey into its parts. None if malformed."""
    prefix = f"{AT_URI_SCHEME}://"
    if not uri.startswith(prefix):
        return None
    parts = uri[len(prefix):].split("/")
    if len(parts) != 3 or not all(parts):
        return None
    did, collection, rkey = parts
    return Did(did), collection, RecordKey(rkey)


def generate_cid() -> Cid:
    return Cid(_CID_PREFIX + secrets.token_hex(16))
