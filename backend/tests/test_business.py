"""Tests for business info parsing."""

import pytest

from pagebuilder.application.business.queries import get_business_info
from pagebuilder.domain.business import full_address, load_mapping, parse_hours
from pagebuilder.domain.exceptions import MalformedData

from .factories import BusinessInfoFactory


class TestStructuredFields:
    """Tests for hours and social media decoding."""

    def test_hours_keep_entered_order(self) -> None:
        hours = parse_hours('{"Sunday": "Closed", "Monday - Friday": "9-5", "Saturday": "10-2"}')

        assert list(hours) == ["Sunday", "Monday - Friday", "Saturday"]

    def test_malformed_hours_are_empty(self, caplog) -> None:
        assert parse_hours("{nope") == {}
        assert "malformed business hours" in caplog.text

    def test_strict_loader_raises(self) -> None:
        with pytest.raises(MalformedData):
            load_mapping('["Monday"]')

    def test_full_address_skips_blanks(self) -> None:
        assert full_address({"address": "12 Main St", "city": "Springfield", "zip": "62701"}) == (
            "12 Main St Springfield 62701"
        )


class TestBusinessQuery:
    """Tests for reading the business info record."""

    def test_none_when_not_configured(self, app) -> None:
        assert get_business_info() is None

    def test_normalized_record(self, app) -> None:
        BusinessInfoFactory(hours="not json")

        info = get_business_info()

        assert info["hours"] == {}
        assert info["socialMedia"] == {"instagram": "https://instagram.com/hearth"}
        assert info["phone"] == "(555) 010-2030"
