"""Tests for the language service: state, persistence, document, subscribers."""
import json

import pytest

from app.core.exceptions import LanguageStorageError, UnsupportedLanguageError
from app.schemas.property_schema import Language
from app.services.language_service import (
    HostDocument,
    InMemoryLanguageStore,
    JsonFileLanguageStore,
    LanguageService,
)


class BrokenReadStore:
    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        pass


class BrokenWriteStore(InMemoryLanguageStore):
    def set(self, key, value):
        raise OSError("read-only filesystem")


class TestStartup:
    def test_defaults_to_english(self):
        service = LanguageService(InMemoryLanguageStore())
        assert service.get_language() == Language.EN
        assert service.is_rtl is False
        assert service.document.dir == "ltr"
        assert service.document.lang == "en"

    def test_restores_stored_arabic(self):
        document = HostDocument()
        service = LanguageService(InMemoryLanguageStore({"language": "ar"}), document)
        assert service.get_language() == Language.AR
        assert service.is_rtl is True
        assert document.dir == "rtl"
        assert document.lang == "ar"

    def test_invalid_stored_value_is_ignored(self):
        service = LanguageService(InMemoryLanguageStore({"language": "fr"}))
        assert service.get_language() == Language.EN

    def test_unreadable_store_is_ignored(self):
        service = LanguageService(BrokenReadStore())
        assert service.get_language() == Language.EN

    def test_corrupt_json_file_is_ignored(self, tmp_path):
        path = tmp_path / "language.json"
        path.write_text("{not json", encoding="utf-8")
        service = LanguageService(JsonFileLanguageStore(path))
        assert service.get_language() == Language.EN


class TestSetLanguage:
    def test_switch_to_arabic(self):
        store = InMemoryLanguageStore()
        service = LanguageService(store)

        state = service.set_language(Language.AR)

        assert state.language == Language.AR
        assert state.is_rtl is True
        assert state.direction == "rtl"
        assert service.get_language() == Language.AR
        assert store.get("language") == "ar"
        assert service.document.dir == "rtl"
        assert service.document.lang == "ar"

    def test_accepts_plain_strings(self):
        service = LanguageService(InMemoryLanguageStore())
        service.set_language("ar")
        assert service.get_language() == Language.AR

    def test_unsupported_language_raises(self):
        service = LanguageService(InMemoryLanguageStore())
        with pytest.raises(UnsupportedLanguageError):
            service.set_language("fr")
        assert service.get_language() == Language.EN

    def test_is_idempotent(self):
        store = InMemoryLanguageStore()
        service = LanguageService(store)
        service.set_language("ar")
        service.set_language("ar")
        assert service.get_language() == Language.AR
        assert service.is_rtl is True
        assert store.get("language") == "ar"
        assert service.document.dir == "rtl"

    def test_toggle(self):
        service = LanguageService(InMemoryLanguageStore())
        assert service.toggle_language() == Language.AR
        assert service.toggle_language() == Language.EN
        assert service.document.dir == "ltr"

    def test_write_failure_keeps_state(self):
        service = LanguageService(BrokenWriteStore())
        calls = []
        service.subscribe(calls.append)

        with pytest.raises(LanguageStorageError):
            service.set_language("ar")

        assert service.get_language() == Language.EN
        assert service.document.dir == "ltr"
        assert calls == []


class TestSubscribers:
    def test_notified_synchronously(self):
        service = LanguageService(InMemoryLanguageStore())
        seen = []
        service.subscribe(lambda state: seen.append(state.language))

        service.set_language("ar")

        assert seen == [Language.AR]

    def test_notified_even_when_unchanged(self):
        service = LanguageService(InMemoryLanguageStore())
        seen = []
        service.subscribe(lambda state: seen.append(state.language))

        service.set_language("en")
        service.set_language("en")

        assert seen == [Language.EN, Language.EN]

    def test_unsubscribe(self):
        service = LanguageService(InMemoryLanguageStore())
        seen = []
        unsubscribe = service.subscribe(seen.append)

        unsubscribe()
        service.set_language("ar")

        assert seen == []

    def test_failing_subscriber_does_not_block_others(self):
        service = LanguageService(InMemoryLanguageStore())
        seen = []

        def broken(state):
            raise RuntimeError("boom")

        service.subscribe(broken)
        service.subscribe(lambda state: seen.append(state.language))

        service.set_language("ar")

        assert seen == [Language.AR]
        assert service.get_language() == Language.AR


class TestJsonFileLanguageStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "language.json"
        LanguageService(JsonFileLanguageStore(path)).set_language("ar")

        assert json.loads(path.read_text(encoding="utf-8")) == {"language": "ar"}
        assert LanguageService(JsonFileLanguageStore(path)).get_language() == Language.AR

    def test_missing_file_reads_none(self, tmp_path):
        assert JsonFileLanguageStore(tmp_path / "absent.json").get("language") is None
