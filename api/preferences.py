"""Language preference for the dashboard UI.

The preference is a single mutable cell read and written through
``LanguagePreference``. Where it is persisted is decided by the store passed in,
so tests can use ``MemoryPreferenceStore`` and the app a JSON file.
"""
import json
import logging
import os
import threading
from typing import Optional

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ('en', 'zh')


class MemoryPreferenceStore:
    def __init__(self, value: Optional[str] = None):
        self.value = value

    def load(self) -> Optional[str]:
        return self.value

    def save(self, value: str) -> None:
        self.value = value


class JsonFilePreferenceStore:
    """Keeps the preference in a small JSON file: {"language": "en"}"""
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, encoding='utf-8') as f:
                return json.load(f).get('language')
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable language preference file {self.path}: {e}")
            return None

    def save(self, value: str) -> None:
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump({'language': value}, f)


class LanguagePreference:
    def __init__(self, store, default: str = 'en'):
        if default not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {default}")
        self.store = store
        self._lock = threading.Lock()
        stored = store.load()
        if stored in SUPPORTED_LANGUAGES:
            self._language = stored
        else:
            if stored is not None:
                logger.warning(f"Stored language {stored!r} is not supported, using {default}")
            self._language = default

    def get(self) -> str:
        return self._language

    def set(self, language: str) -> str:
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        with self._lock:
            self._save(language)
        return language

    def toggle(self) -> str:
        """Switch between English and Chinese"""
        with self._lock:
            language = 'zh' if self._language == 'en' else 'en'
            self._save(language)
        return language

    def _save(self, language: str) -> None:
        # caller holds _lock
        self._language = language
        self.store.save(language)
