"""Check-in Record - canonical, validated record values and their wire form.

Invariants:
    - Absent optional fields are None, never "" (present vs absent is explicit)
    - to_dict() emits only present fields; "$type" is always recomputed
    - LocationItem is a closed sum type: GeoLocation | AddressLocation
    - Coordinates stay decimal strings end to end (no float round-off on federation)

Design Decisions:
    - Frozen dataclasses over ORM/pydantic: pure values, hashable, no IO
    - location_from_dict() dispatches on the "$type" tag through LOCATION_TYPES,
      so a third location kind is one new class plus one registry entry
"""

from dataclasses import dataclass

from anchor_pds.core.domain_types import (
    CHECKIN_COLLECTION, AtUri, Cid, Did, LocationType, RecordKey,
)

ADDRESS_FIELDS = ("street", "locality", "region", "country", "postalCode", "name")


@dataclass(frozen=True)
class GeoLocation:
    """community.lexicon.location.geo - coordinates as decimal strings."""
    latitude: str
    longitude: str

    location_type = LocationType.GEO

    def to_dict(self) -> dict:
        return {
            "$type": self.location_type.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeoLocation":
        return cls(latitude=data["latitude"], longitude=data["longitude"])


@dataclass(frozen=True)
class AddressLocation:
    """community.lexicon.location.address - every field optional, no defaults."""
    street: str | None = None
    locality: str | None = None
    region: str | None = None
    country: str | None = None
    postal_code: str | None = None
    name: str | None = None

    location_type = LocationType.ADDRESS

    def to_dict(self) -> dict:
        values = {
            "street": self.street,
            "locality": self.locality,
            "region": self.region,
            "country": self.country,
            "postalCode": self.postal_code,
            "name": self.name,
        }
        out: dict = {"$type": self.location_type.value}
        out.update({k: v for k, v in values.items() if v is not None})
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "AddressLocation":
        return cls(
            street=data.get("street"),
            locality=data.get("locality"),
            region=data.get("region"),
            country=data.get("country"),
            postal_code=data.get("postalCode"),
            name=data.get("name"),
        )


LocationItem = GeoLocation | AddressLocation

LOCATION_TYPES: dict[str, type[GeoLocation] | type[AddressLocation]] = {
    LocationType.GEO.value: GeoLocation,
    LocationType.ADDRESS.value: AddressLocation,
}


def location_from_dict(data: dict) -> LocationItem:
    """Rebuild a location from its wire form. Raises ValueError on unknown tags."""
    tag = data.get("$type")
    location_cls = LOCATION_TYPES.get(tag)
    if location_cls is None:
        raise ValueError(f"Unsupported location type: {tag}")
    return location_cls.from_dict(data)


@dataclass(frozen=True)
class CheckinRecord:
    """app.dropanchor.checkin record body."""
    text: str
    created_at: str
    locations: tuple[LocationItem, ...] | None = None
    category: str | None = None
    category_group: str | None = None
    category_icon: str | None = None

    def to_dict(self, include_type: bool = True) -> dict:
        """Lexicon wire form. include_type=False for feed/record views."""
        out: dict = {}
        if include_type:
            out["$type"] = CHECKIN_COLLECTION
        out["text"] = self.text
        out["createdAt"] = self.created_at
        if self.locations is not None:
            out["locations"] = [loc.to_dict() for loc in self.locations]
        if self.category is not None:
            out["category"] = self.category
        if self.category_group is not None:
            out["categoryGroup"] = self.category_group
        if self.category_icon is not None:
            out["categoryIcon"] = self.category_icon
        return out


@dataclass(frozen=True)
class StoredCheckin:
    """A persisted check-in plus its server-assigned identity."""
    id: RecordKey
    author_did: Did
    uri: AtUri
    cid: Cid | None
    record: CheckinRecord
