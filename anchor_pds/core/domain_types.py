"""Domain Types - rich types and protocol constants shared across the codebase.

Invariants:
    - Did, RecordKey, AtUri, Cid wrap str - never pass bare strings across layer seams
    - GLOBAL_FEED_MAX_LIMIT is a constant, not a setting (abuse-prevention cap)
    - All closed sets (location kinds, rejection reasons) encoded as str Enums

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Did = NewType("Did", str)
RecordKey = NewType("RecordKey", str)
AtUri = NewType("AtUri", str)
Cid = NewType("Cid", str)


# ─── Protocol Constants ──────────────────────────────────────────

AT_URI_SCHEME = "at"
CHECKIN_COLLECTION = "app.dropanchor.checkin"
SESSION_LOOKUP_METHOD = "com.atproto.server.getSession"

# ─── Limits ──────────────────────────────────────────────────────

TEXT_MAX_LENGTH = 300
CATEGORY_MAX_LENGTH = 50
CATEGORY_GROUP_MAX_LENGTH = 50
CATEGORY_ICON_MAX_LENGTH = 10
LATITUDE_BOUND = 90
LONGITUDE_BOUND = 180

DEFAULT_PAGE_LIMIT = 50
GLOBAL_FEED_MAX_LIMIT = 100
OWNER_FEED_MAX_LIMIT = 100


# ─── Enums ───────────────────────────────────────────────────────

class LocationType(str, Enum):
    """Discriminator tags for the location sum type."""
    GEO = "community.lexicon.location.geo"
    ADDRESS = "community.lexicon.location.address"


class RejectionReason(str, Enum):
    """Why the validator refused a check-in record. One per rule."""
    NOT_AN_OBJECT = "NotAnObject"
    MISSING_TEXT = "MissingText"
    TEXT_TOO_LONG = "TextTooLong"
    MISSING_CREATED_AT = "MissingCreatedAt"
    INVALID_TIMESTAMP = "InvalidTimestamp"
    LOCATIONS_NOT_ARRAY = "LocationsNotArray"
    MISSING_LOCATION_TYPE = "MissingLocationType"
    UNSUPPORTED_LOCATION_TYPE = "UnsupportedLocationType"
    MISSING_LATITUDE = "MissingLatitude"
    MISSING_LONGITUDE = "MissingLongitude"
    LATITUDE_OUT_OF_RANGE = "LatitudeOutOfRange"
    LONGITUDE_OUT_OF_RANGE = "LongitudeOutOfRange"
    INVALID_ADDRESS_FIELD = "InvalidAddressField"
    INVALID_CATEGORY = "InvalidCategory"
    CATEGORY_TOO_LONG = "CategoryTooLong"
    MALFORMED_UNICODE = "MalformedUnicode"
