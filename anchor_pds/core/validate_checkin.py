"""Check-in Validation - turns an untyped JSON value into a CheckinRecord or rejects it.

Invariants:
    - PURE: no IO, no async, no DB, no side effects
    - Rules run in a fixed order and the FIRST violation wins (never aggregated)
    - Output carries only recognized fields; unknown input keys and "$type" are dropped
    - A key that is present with a null value counts as present (and is rejected)
    - Any unsupported location tag rejects the whole record (no partial acceptance)
    - Every accepted string is well-formed Unicode (no unpaired surrogates), so it
      can be stored and echoed back as UTF-8
    - validate_checkin_record(record.to_dict()) == record (idempotent)

Design Decisions:
    - Raise CheckinValidationError over returning error dicts: the request boundary
      maps it to InvalidRequest with the failing rule's message (ADR: single handler)
    - Lengths counted in UTF-16 code units: matches what lexicon clients measure, so
      an emoji icon that fits on the client also fits here
    - Coordinates parsed with Decimal, never float: range check only, the original
      string is what gets stored
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation

from pydantic import TypeAdapter, ValidationError

from anchor_pds.core.checkin_record import (
    ADDRESS_FIELDS, AddressLocation, CheckinRecord, GeoLocation, LocationItem,
)
from anchor_pds.core.domain_types import (
    CATEGORY_GROUP_MAX_LENGTH,
    CATEGORY_ICON_MAX_LENGTH,
    CATEGORY_MAX_LENGTH,
    LATITUDE_BOUND,
    LONGITUDE_BOUND,
    TEXT_MAX_LENGTH,
    LocationType,
    RejectionReason,
)
from anchor_pds.core.errors import CheckinValidationError

_TIMESTAMP = TypeAdapter(datetime)

# (wire field, max length) in validation order
_CATEGORY_FIELDS = (
    ("category", CATEGORY_MAX_LENGTH),
    ("categoryGroup", CATEGORY_GROUP_MAX_LENGTH),
    ("categoryIcon", CATEGORY_ICON_MAX_LENGTH),
)


def validate_checkin_record(raw: object) -> CheckinRecord:
    """Validate and normalize a check-in record. Raises CheckinValidationError."""
    if not isinstance(raw, dict):
        _reject(RejectionReason.NOT_AN_OBJECT, "Record must be an object")

    text = _validate_text(raw)
    created_at = _validate_created_at(raw)
    locations = _validate_locations(raw)
    categories = {
        name: _validate_category(raw, name, max_length)
        for name, max_length in _CATEGORY_FIELDS
    }
    return CheckinRecord(
        text=text,
        created_at=created_at,
        locations=locations,
        category=categories["category"],
        category_group=categories["categoryGroup"],
        category_icon=categories["categoryIcon"],
    )


# --- Core fields --------------------------------------------------------------

def _validate_text(raw: dict) -> str:
    text = raw.get("text")
    if not isinstance(text, str) or not text:
        _reject(RejectionReason.MISSING_TEXT, "Record must have a text field", "text")
    _require_well_formed(text, "text")
    if _utf16_length(text) > TEXT_MAX_LENGTH:
        _reject(
            RejectionReason.TEXT_TOO_LONG,
            f"text must be {TEXT_MAX_LENGTH} characters or less", "text",
        )
    return text


def _validate_created_at(raw: dict) -> str:
    created_at = raw.get("createdAt")
    if not isinstance(created_at, str) or not created_at:
        _reject(
            RejectionReason.MISSING_CREATED_AT,
            "Record must have a createdAt field", "createdAt",
        )
    _require_well_formed(created_at, "createdAt")
    if not is_parseable_timestamp(created_at):
        _reject(
            RejectionReason.INVALID_TIMESTAMP,
            "createdAt must be a valid ISO timestamp", "createdAt",
        )
    return created_at


def is_parseable_timestamp(value: str) -> bool:
    """True if value parses as a date/time. The string itself is kept verbatim."""
    try:
        _TIMESTAMP.validate_python(value)
    except ValidationError:
        return False
    return True


# --- Locations ----------------------------------------------------------------

def _validate_locations(raw: dict) -> tuple[LocationItem, ...] | None:
    if "locations" not in raw:
        return None
    items = raw["locations"]
    if not isinstance(items, list):
        _reject(
            RejectionReason.LOCATIONS_NOT_ARRAY,
            "locations must be an array", "locations",
        )
    validated = tuple(_validate_location(item) for item in items)
    # zero validated items is reported as "no locations"
    return validated or None


def _validate_location(item: object) -> LocationItem:
    tag = item.get("$type") if isinstance(item, dict) else None
    if not tag:
        _reject(
            RejectionReason.MISSING_LOCATION_TYPE,
            "Each location must have a $type field", "locations",
        )
    if tag == LocationType.GEO.value:
        return _validate_geo(item)
    if tag == LocationType.ADDRESS.value:
        return _validate_address(item)
    _reject(
        RejectionReason.UNSUPPORTED_LOCATION_TYPE,
        f"Unsupported location type: {_printable(tag)}", "locations",
    )


def _validate_geo(item: dict) -> GeoLocation:
    latitude = item.get("latitude")
    longitude = item.get("longitude")
    if not isinstance(latitude, str) or not latitude:
        _reject(
            RejectionReason.MISSING_LATITUDE,
            "geo location must have latitude as string", "latitude",
        )
    if not isinstance(longitude, str) or not longitude:
        _reject(
            RejectionReason.MISSING_LONGITUDE,
            "geo location must have longitude as string", "longitude",
        )
    if not _in_range(latitude, LATITUDE_BOUND):
        _reject(
            RejectionReason.LATITUDE_OUT_OF_RANGE,
            f"latitude must be a valid number between -{LATITUDE_BOUND} and {LATITUDE_BOUND}",
            "latitude",
        )
    if not _in_range(longitude, LONGITUDE_BOUND):
        _reject(
            RejectionReason.LONGITUDE_OUT_OF_RANGE,
            f"longitude must be a valid number between -{LONGITUDE_BOUND} and {LONGITUDE_BOUND}",
            "longitude",
        )
    return GeoLocation(latitude=latitude, longitude=longitude)


def _in_range(value: str, bound: int) -> bool:
    try:
        number = Decimal(value)
    except (InvalidOperation, ValueError):
        return False
    return number.is_finite() and -bound <= number <= bound


def _validate_address(item: dict) -> AddressLocation:
    for name in ADDRESS_FIELDS:
        if name not in item:
            continue
        if not isinstance(item[name], str):
            _reject(
                RejectionReason.INVALID_ADDRESS_FIELD,
                f"{name} must be a string", name,
            )
        _require_well_formed(item[name], name)
    return AddressLocation.from_dict(item)


# --- Categories ---------------------------------------------------------------

def _validate_category(raw: dict, name: str, max_length: int) -> str | None:
    if name not in raw:
        return None
    value = raw[name]
    if not isinstance(value, str) or not value:
        _reject(
            RejectionReason.INVALID_CATEGORY,
            f"{name} must be a non-empty string", name,
        )
    _require_well_formed(value, name)
    if _utf16_length(value) > max_length:
        _reject(
            RejectionReason.CATEGORY_TOO_LONG,
            f"{name} must be {max_length} characters or less", name,
        )
    return value


# --- Helpers ------------------------------------------------------------------

def _utf16_length(value: str) -> int:
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _is_well_formed(value: str) -> bool:
    """False if value holds an unpaired surrogate (valid JSON, not storable text)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _require_well_formed(value: str, field: str) -> None:
    if not _is_well_formed(value):
        _reject(
            RejectionReason.MALFORMED_UNICODE,
            f"{field} must be valid Unicode text", field,
        )


def _printable(value: object) -> object:
    if isinstance(value, str) and not _is_well_formed(value):
        return value.encode("utf-8", "backslashreplace").decode("utf-8")
    return value


def _reject(reason: RejectionReason, message: str, field: str | None = None):
    raise CheckinValidationError(reason, message, field)
