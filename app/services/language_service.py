"""Language service: the single source of truth for the display language.

One LanguageService instance holds the current language (en/ar) and its text
direction. set_language() persists the choice, updates the host document
attributes (dir/lang) and notifies every subscriber before returning, so any
view rendered after the call observes the new language. Subscribers are
notified on every call, including when the value did not change, so views that
cache resolved content by identity can re-render.

Storage is a small key-value collaborator holding the single key "language":
- JsonFileLanguageStore: durable, a JSON object on disk
- InMemoryLanguageStore: tests and ephemeral processes

A missing, unreadable or invalid stored value on startup falls back to the
default language; startup never raises.
"""
import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Union

from app.config import settings
from app.core.exceptions import LanguageStorageError, UnsupportedLanguageError
from app.core.logging import get_logger
from app.schemas.property_schema import Language

logger = get_logger(__name__)

LANGUAGE_KEY = "language"
DEFAULT_LANGUAGE = Language.EN


@dataclass(frozen=True)
class LanguageState:
    language: Language

    @property
    def is_rtl(self) -> bool:
        return self.language == Language.AR

    @property
    def direction(self) -> str:
        return "rtl" if self.is_rtl else "ltr"


Subscriber = Callable[[LanguageState], None]


class LanguageStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryLanguageStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileLanguageStore:
    """Key-value store persisted as one JSON object."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except (OSError, json.JSONDecodeError):
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)


class HostDocument:
    """Text direction and language tag of the host document."""

    def __init__(self, dir: str = "ltr", lang: str = DEFAULT_LANGUAGE.value):
        self.dir = dir
        self.lang = lang


def parse_language(value: Union[Language, str, None]) -> Language:
    if isinstance(value, Language):
        return value
    try:
        return Language(value)
    except ValueError:
        raise UnsupportedLanguageError(
            f"Unsupported language: {value!r}",
            detail={"supported": [lang.value for lang in Language]},
        )


class LanguageService:
    """Observable, persisted language state shared by every view."""

    def __init__(
        self,
        store: LanguageStore,
        document: Optional[HostDocument] = None,
        default: Language = DEFAULT_LANGUAGE,
    ):
        self._store = store
        self._document = document or HostDocument()
        self._subscribers: List[Subscriber] = []
        self._lock = threading.RLock()
        self._state = LanguageState(self._load_initial(default))
        self._apply_document(self._state)

    def _load_initial(self, default: Language) -> Language:
        try:
            stored = self._store.get(LANGUAGE_KEY)
        except Exception as e:
            logger.warning("Could not read stored language: %s. Using '%s'.", str(e), default.value)
            return default

        if stored is None:
            return default
        try:
            return Language(stored)
        except ValueError:
            logger.warning("Ignoring invalid stored language %r. Using '%s'.", stored, default.value)
            return default

    def _apply_document(self, state: LanguageState) -> None:
        self._document.dir = state.direction
        self._document.lang = state.language.value

    @property
    def state(self) -> LanguageState:
        return self._state

    @property
    def document(self) -> HostDocument:
        return self._document

    @property
    def is_rtl(self) -> bool:
        return self._state.is_rtl

    def get_language(self) -> Language:
        return self._state.language

    def set_language(self, language: Union[Language, str]) -> LanguageState:
        """Persist, apply and broadcast a language choice."""
        lang = parse_language(language)

        with self._lock:
            try:
                self._store.set(LANGUAGE_KEY, lang.value)
            except OSError as e:
                raise LanguageStorageError("Could not persist language preference", detail=str(e)) from e

            previous = self._state.language
            state = LanguageState(lang)
            self._state = state
            self._apply_document(state)
            if previous != lang:
                logger.info("Language changed from %s to %s", previous.value, lang.value, extra={"language": lang.value})
            self._notify(state)
            return state

    def toggle_language(self) -> Language:
        with self._lock:
            target = Language.AR if self._state.language == Language.EN else Language.EN
            return self.set_language(target).language

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, state: LanguageState) -> None:
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Language subscriber %r failed", callback)


_service: Optional[LanguageService] = None
_service_lock = threading.Lock()


def get_language_service() -> LanguageService:
    """Process-wide LanguageService backed by the configured JSON file."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = LanguageService(
                    JsonFileLanguageStore(settings.language_store_path),
                    default=Language(settings.default_language),
                )
    return _service
