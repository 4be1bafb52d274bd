from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class LocalizedText(str):
    """Localized string that remembers the key and locale it was loaded from."""

    key: Optional[str]
    locale: Optional[str]

    def __new__(cls, value: str, *, key: Optional[str] = None, locale: Optional[str] = None):
        obj = super().__new__(cls, value)
        obj.key = key
        obj.locale = locale
        return obj

    def format(self, *args: Any, **kwargs: Any) -> "LocalizedText":  # type: ignore[override]
        return LocalizedText(super().format(*args, **kwargs), key=self.key, locale=self.locale)


class LocaleStore:
    """Loads and serves localized strings from JSON files.

    Nested objects are flattened into dotted keys. Arrays are joined into one
    multi-line text.
    """

    def __init__(self, locale_directory: Path, default_locale: str = "it"):
        self.locale_directory = locale_directory
        self.default_locale = default_locale
        self._translations: Dict[str, Dict[str, LocalizedText]] = {}
        self._load_locale(default_locale)

    def available_locales(self) -> List[str]:
        return sorted(path.stem for path in self.locale_directory.glob("*.json"))

    def has_key(self, key: str) -> bool:
        return key in self._translations.get(self.default_locale, {})

    def missing_keys(self, locale: str) -> List[str]:
        """Keys of the default catalog that ``locale`` does not translate."""
        catalog = self._get_catalog(locale)
        return sorted(key for key in self._translations[self.default_locale] if key not in catalog)

    def translate(self, key: str, *, locale: Optional[str] = None, **kwargs: Any) -> LocalizedText:
        """Return a translated entry, falling back to the default locale."""

        target_locale = locale or self.default_locale
        entry = self._get_catalog(target_locale).get(key)

        if entry is None and target_locale != self.default_locale:
            entry = self._translations[self.default_locale].get(key)

        if entry is None:
            raise KeyError(f"Translation key '{key}' not found for locale '{target_locale}'")

        if kwargs:
            return entry.format(**kwargs)

        return entry

    def _get_catalog(self, locale: str) -> Dict[str, LocalizedText]:
        if locale not in self._translations:
            self._load_locale(locale)
        return self._translations.get(locale, self._translations.get(self.default_locale, {}))

    def _load_locale(self, locale: str) -> None:
        locale_file = self.locale_directory / f"{locale}.json"
        if not locale_file.exists():
            logger.warning("Locale file for '%s' not found at %s", locale, locale_file)
            return

        with locale_file.open("r", encoding="utf-8") as file:
            raw_data = json.load(file)

        self._translations[locale] = {
            key: self._normalize_value(value, key=key, locale=locale)
            for key, value in self._flatten_keys(raw_data).items()
        }

    def _normalize_value(self, value: Any, *, key: str, locale: str) -> LocalizedText:
        if isinstance(value, list):
            return LocalizedText("\n".join(str(line) for line in value), key=key, locale=locale)
        return LocalizedText(str(value), key=key, locale=locale)

    def _flatten_keys(self, data: Dict[str, Any], parent_key: str = "") -> Dict[str, Any]:
        items: Dict[str, Any] = {}
        for key, value in data.items():
            new_key = f"{parent_key}.{key}" if parent_key else key
            if isinstance(value, dict):
                items.update(self._flatten_keys(value, new_key))
            else:
                items[new_key] = value
        return items


class LocaleKeyAccessor:
    """Provides attribute access to translation keys, e.g. ``Key.registration.prompt_name``."""

    def __init__(self, store: LocaleStore, locale: Optional[str] = None, prefix: str = ""):
        self._store = store
        self._locale = locale
        self._prefix = prefix

    @property
    def locale(self) -> str:
        return self._locale or self._store.default_locale

    def for_locale(self, locale: str) -> "LocaleKeyAccessor":
        return LocaleKeyAccessor(self._store, locale=locale, prefix=self._prefix)

    def __getattr__(self, item: str):
        if item.startswith("__"):
            raise AttributeError(item)

        candidate_key = f"{self._prefix}.{item}" if self._prefix else item

        if self._store.has_key(candidate_key):
            return self._store.translate(candidate_key, locale=self._locale)

        return LocaleKeyAccessor(self._store, locale=self._locale, prefix=candidate_key)

