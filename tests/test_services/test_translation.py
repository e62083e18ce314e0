"""Tests for translation service: detection, bilingual selection, formatting, quality."""
import pytest

from app.schemas.property_schema import Language, PropertyRecord
from app.services.translation_service import (
    ContentLanguage,
    check_content_quality,
    detect_content_language,
    format_area,
    format_number,
    format_property_for_display,
    get_content_guidelines,
    get_display_content,
    translate_property_content,
)


class TestDetectContentLanguage:
    def test_english(self):
        assert detect_content_language("Beirut") == ContentLanguage.EN

    def test_arabic(self):
        assert detect_content_language("بيروت") == ContentLanguage.AR

    def test_mixed(self):
        assert detect_content_language("Villa فيلا") == ContentLanguage.MIXED

    def test_empty_and_none(self):
        assert detect_content_language("") == ContentLanguage.EN
        assert detect_content_language(None) == ContentLanguage.EN

    def test_digits_only(self):
        assert detect_content_language("12345") == ContentLanguage.EN


class TestTranslatePropertyContent:
    def test_uses_variants_when_both_present(self):
        record = {
            "title": "Villa",
            "title_en": "Sea View Villa",
            "title_ar": "فيلا بإطلالة بحرية",
            "features": ["Pool"],
            "features_en": ["Pool", "Garden"],
            "features_ar": ["مسبح", "حديقة"],
        }
        assert translate_property_content(record, Language.EN)["title"] == "Sea View Villa"
        ar = translate_property_content(record, Language.AR)
        assert ar["title"] == "فيلا بإطلالة بحرية"
        assert ar["features"] == ["مسبح", "حديقة"]

    def test_single_variant_falls_back_to_base_field(self):
        record = {"title": "Villa", "title_en": "Sea View Villa"}
        assert translate_property_content(record, Language.AR)["title"] == "Villa"
        assert translate_property_content(record, Language.EN)["title"] == "Villa"

    def test_empty_variant_does_not_count(self):
        record = {"location": "Hamra", "location_en": "Hamra, Beirut", "location_ar": ""}
        assert translate_property_content(record, Language.EN)["location"] == "Hamra"

    def test_lookup_labels(self):
        record = {"property_type": "apartment", "status": "for_rent", "governorate": "Bekaa"}
        ar = translate_property_content(record, "ar")
        assert ar["property_type_display"] == "شقة"
        assert ar["status_display"] == "للإيجار"
        assert ar["governorate_display"] == "البقاع"
        en = translate_property_content(record, "en")
        assert en["status_display"] == "For Rent"

    def test_unknown_raw_values_pass_through(self):
        record = {"property_type": "castle", "status": "pending", "governorate": "Zahle"}
        resolved = translate_property_content(record, Language.AR)
        assert resolved["property_type_display"] == "castle"
        assert resolved["status_display"] == "pending"
        assert resolved["governorate_display"] == "Zahle"


class TestLanguageIndicator:
    def test_same_language_has_no_indicator(self):
        resolved = get_display_content({"title": "Modern Apartment"}, Language.EN)
        assert resolved["content_language"] == "en"
        assert resolved["language_indicator"] is None

    def test_arabic_content_in_english_view(self):
        resolved = get_display_content({"title": "شقة حديثة"}, Language.EN)
        assert resolved["content_language"] == "ar"
        assert resolved["language_indicator"] == "🇱🇧"
        assert resolved["title"] == "شقة حديثة"

    def test_english_content_in_arabic_view(self):
        resolved = get_display_content({"title": "Modern Apartment"}, Language.AR)
        assert resolved["language_indicator"] == "🇺🇸"

    def test_mixed_content(self):
        resolved = get_display_content({"title": "Villa فيلا"}, Language.AR)
        assert resolved["content_language"] == "mixed"
        assert resolved["language_indicator"] == "🌐"


class TestFormatting:
    def test_format_number(self):
        assert format_number(250000) == "250,000"
        assert format_number(250000.0) == "250,000"
        assert format_number(1234.5) == "1,234.5"

    def test_price_display(self):
        resolved = format_property_for_display({"price": 250000, "currency": "USD"}, Language.EN)
        assert resolved["price_display"] == "USD 250,000"

    def test_contact_for_price(self):
        record = {"price": 250000, "contact_for_price": True}
        assert format_property_for_display(record, Language.EN)["price_display"] == "Contact for Price"
        assert format_property_for_display(record, Language.AR)["price_display"] == "اتصل للسعر"

    @pytest.mark.parametrize("flag", ["false", "0", "no", "", 0])
    def test_false_like_contact_flag_keeps_price(self, flag):
        record = {"price": 250000, "currency": "USD", "contact_for_price": flag}
        assert format_property_for_display(record, Language.EN)["price_display"] == "USD 250,000"

    @pytest.mark.parametrize("flag", ["true", "TRUE", "1", "yes", 1])
    def test_true_like_contact_flag_hides_price(self, flag):
        record = {"price": 250000, "currency": "USD", "contact_for_price": flag}
        assert format_property_for_display(record, Language.EN)["price_display"] == "Contact for Price"

    def test_missing_price(self):
        assert format_property_for_display({"title": "x"}, Language.EN)["price_display"] is None

    def test_area_display_only_when_positive(self):
        assert format_property_for_display({"area": 150}, Language.EN)["area_display"] == "150 m²"
        assert format_property_for_display({"area": 0}, Language.EN)["area_display"] is None
        assert format_property_for_display({}, Language.EN)["area_display"] is None

    def test_format_area(self):
        assert format_area(120.5) == "120.5 m²"
        assert format_area(None) is None
        assert format_area(-3) is None


class TestContentQuality:
    def test_complete_content_scores_100(self):
        record = PropertyRecord(
            title="Modern 3-Bedroom Apartment in Hamra",
            description="Beautiful modern apartment with stunning city views and premium finishes.",
            location="Hamra, Beirut",
            features=["Balcony"],
        )
        report = check_content_quality(record, Language.EN)
        assert report.has_issues is False
        assert report.score == 100
        assert report.issues == []

    def test_empty_record_loses_20_per_check(self):
        report = check_content_quality({}, Language.EN)
        assert report.has_issues is True
        assert len(report.issues) == 4
        assert len(report.suggestions) == 4
        assert report.score == 20

    def test_short_content_on_every_check(self):
        record = {"title": "Villa", "description": "Nice place", "location": "Tyr", "features": []}
        report = check_content_quality(record, Language.EN)
        assert report.issues == [
            "Title is too short",
            "Description is too short",
            "Location is not clearly specified",
            "No features mentioned",
        ]
        assert report.score == 20

    def test_issues_are_localized(self):
        report = check_content_quality({"title": "Short"}, Language.AR)
        assert "العنوان قصير جداً" in report.issues

    def test_checks_resolved_content(self):
        record = {
            "title": "x",
            "title_en": "Modern 3-Bedroom Apartment",
            "title_ar": "شقة",
        }
        en_issues = check_content_quality(record, Language.EN).issues
        ar_issues = check_content_quality(record, Language.AR).issues
        assert "Title is too short" not in en_issues
        assert "العنوان قصير جداً" in ar_issues


@pytest.mark.parametrize("language", [Language.EN, Language.AR])
def test_guidelines(language):
    guidelines = get_content_guidelines(language)
    assert guidelines.tips
    assert guidelines.good_title
