"""Tests for the field schema table and the display service."""
import pytest

from app.config import settings
from app.schemas.property_schema import Language, PropertyType, as_record
from app.services.display_service import get_property_display_info, render_property
from app.services.field_schema import (
    get_form_schema,
    get_type_schema,
    required_fields,
    should_show_field,
    visible_fields,
)


def _keys(fields):
    return [f.key for f in fields]


class TestFieldSchema:
    def test_apartment_fields(self):
        assert visible_fields("apartment") == ["bedrooms", "bathrooms", "area", "floor", "parking"]

    def test_hotel_fields(self):
        assert visible_fields("hotel") == ["floors", "rooms", "studios", "total_area", "parking"]

    def test_land_has_only_area(self):
        assert visible_fields("land") == ["area"]
        assert should_show_field("area", "land")
        assert not should_show_field("bedrooms", "land")

    def test_unknown_type_uses_fallback(self):
        assert visible_fields("castle") == ["area", "bedrooms", "bathrooms"]
        assert visible_fields(None) == ["area", "bedrooms", "bathrooms"]

    def test_required_fields(self):
        building = required_fields("building")
        assert building[:7] == [
            "title", "description", "location", "property_type",
            "status", "contact_phone", "contact_email",
        ]
        assert set(building[7:]) == {"land_area", "building_area", "floors"}
        assert set(required_fields("hotel")[7:]) == {"total_area", "floors", "rooms"}
        assert required_fields("office")[7:] == ["area"]

    @pytest.mark.parametrize("property_type", [t.value for t in PropertyType])
    def test_form_fields_match_display_fields(self, property_type):
        schema = get_type_schema(property_type)
        display_keys = [e.key for e in schema.primary] + [e.key for e in schema.secondary]
        form = get_form_schema(property_type)
        assert [f.key for f in form.fields] == display_keys

    def test_form_schema_is_localized(self):
        form = get_form_schema("villa", Language.AR)
        assert form.label == "فيلا"
        assert form.fields[0].label == "غرف النوم"
        assert form.fields[0].required is True


class TestPropertyDisplayInfo:
    def test_apartment(self):
        record = {"property_type": "apartment", "bedrooms": 3, "bathrooms": 2, "area": 150, "floor": 4}
        info = get_property_display_info(record, Language.EN)

        assert _keys(info.primary_fields) == ["bedrooms", "bathrooms", "area"]
        assert info.primary_fields[0].value == 3
        assert info.primary_fields[0].label == "Bedrooms"
        assert info.primary_fields[0].icon == "bed"
        assert info.primary_fields[2].value == "150 m²"
        assert _keys(info.secondary_fields) == ["floor"]
        assert info.secondary_fields[0].icon is None

    def test_zero_and_missing_values_are_omitted(self):
        record = {"property_type": "hotel", "floors": 5, "rooms": 40, "studios": 0, "total_area": 2000}
        info = get_property_display_info(record, Language.EN)
        assert _keys(info.primary_fields) == ["floors", "rooms", "total_area"]
        assert info.secondary_fields == []

    def test_arabic_labels_and_unit(self):
        record = {"property_type": "land", "area": 1200.0}
        info = get_property_display_info(record, Language.AR)
        assert info.primary_fields[0].label == "المساحة"
        assert info.primary_fields[0].value == "1200 م²"

    def test_fractional_values_are_kept(self):
        info = get_property_display_info({"property_type": "office", "area": 85.5}, Language.EN)
        assert info.primary_fields[0].value == "85.5 m²"

    def test_unknown_type_falls_back(self):
        info = get_property_display_info({"property_type": "castle", "area": 500, "bedrooms": 8}, "en")
        assert _keys(info.primary_fields) == ["area", "bedrooms"]

    def test_land_ignores_room_counts(self):
        record = {"property_type": "land", "area": 2500, "bedrooms": 3, "bathrooms": 2}
        info = get_property_display_info(record, Language.EN)
        assert _keys(info.primary_fields) == ["area"]
        assert info.secondary_fields == []

    def test_negative_values_are_omitted(self):
        record = {"property_type": "apartment", "bedrooms": -2, "bathrooms": 1, "area": -50, "floor": -1, "parking": 2}
        info = get_property_display_info(record, Language.EN)
        assert _keys(info.primary_fields) == ["bathrooms"]
        assert _keys(info.secondary_fields) == ["parking"]

    def test_malformed_numbers_are_ignored(self):
        record = {"property_type": "apartment", "bedrooms": "many", "area": "120"}
        info = get_property_display_info(record, Language.EN)
        assert _keys(info.primary_fields) == ["area"]


class TestRenderProperty:
    def test_full_render(self):
        record = {
            "id": 7,
            "title_en": "Sea View Villa",
            "title_ar": "فيلا بإطلالة بحرية",
            "title": "Villa",
            "property_type": "villa",
            "status": "for_sale",
            "governorate": "Mount Lebanon",
            "bedrooms": 4,
            "price": 1200000,
            "images": ["/media/a.jpg", "/media/b.jpg"],
        }
        rendered = render_property(record, Language.AR)

        assert rendered.id == "7"
        assert rendered.language == "ar"
        assert rendered.title == "فيلا بإطلالة بحرية"
        assert rendered.language_indicator is None
        assert rendered.property_type_display == "فيلا"
        assert rendered.governorate_display == "جبل لبنان"
        assert rendered.price_display == "USD 1,200,000"
        assert rendered.cover_image == "/media/a.jpg"
        assert _keys(rendered.primary_fields) == ["bedrooms"]

    def test_placeholder_cover(self):
        rendered = render_property({"title": "Land in Batroun"}, Language.EN)
        assert rendered.cover_image == settings.placeholder_image
        assert rendered.images == []

    def test_bad_timestamp_does_not_drop_the_record(self):
        record = {"title": "Sea View Villa", "property_type": "villa", "bedrooms": 3, "created_at": "yesterday"}
        rendered = render_property(record, Language.EN)
        assert rendered.title == "Sea View Villa"
        assert rendered.property_type == "villa"
        assert _keys(rendered.primary_fields) == ["bedrooms"]

    def test_iso_timestamp_is_parsed(self):
        record = as_record({"title": "Villa", "created_at": "2024-05-01T10:30:00Z"})
        assert record.created_at.year == 2024
        assert record.created_at.utcoffset().total_seconds() == 0

    @pytest.mark.parametrize("area", [10**400, "1e400", "nan", float("inf")])
    def test_out_of_range_number_is_dropped_alone(self, area):
        record = {"title": "Sea View Villa", "property_type": "villa", "bedrooms": 3, "area": area}
        rendered = render_property(record, Language.EN)
        assert rendered.title == "Sea View Villa"
        assert _keys(rendered.primary_fields) == ["bedrooms"]
        assert rendered.area_display is None
