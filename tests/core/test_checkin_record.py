"""Check-in record value tests - wire form and location dispatch."""

import pytest

from anchor_pds.core.checkin_record import (
    AddressLocation, CheckinRecord, GeoLocation, location_from_dict,
)


def test_location_from_dict_dispatches_on_type():
    geo = location_from_dict({
        "$type": "community.lexicon.location.geo",
        "latitude": "1.5", "longitude": "2.5",
    })
    address = location_from_dict({
        "$type": "community.lexicon.location.address", "postalCode": "10001",
    })
    assert geo == GeoLocation("1.5", "2.5")
    assert address == AddressLocation(postal_code="10001")


def test_location_from_dict_rejects_unknown_type():
    with pytest.raises(ValueError, match="Unsupported location type"):
        location_from_dict({"$type": "community.lexicon.location.fsq"})


def test_record_view_has_no_type():
    record = CheckinRecord(text="Hi", created_at="2025-06-15T13:00:00Z")
    assert "$type" not in record.to_dict(include_type=False)
    assert record.to_dict()["$type"] == "app.dropanchor.checkin"


def test_empty_locations_tuple_is_emitted_as_empty_list():
    record = CheckinRecord(text="Hi", created_at="2025-06-15T13:00:00Z", locations=())
    assert record.to_dict()["locations"] == []
