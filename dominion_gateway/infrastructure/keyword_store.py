"""Storage seam for per-user category keyword overrides"""

from threading import Lock
from typing import Dict, Protocol
from dominion_gateway.domain.categorizer import clean_overrides
from dominion_gateway.domain.models import KeywordOverrides


class KeywordOverrideStore(Protocol):
    """Persistence for keyword overrides lives outside this service"""

    def get(self, user_id: str) -> KeywordOverrides: ...

    def save(self, user_id: str, overrides: KeywordOverrides) -> KeywordOverrides: ...


class InMemoryKeywordStore:
    """Process-local store used by default and in tests"""

    def __init__(self):
        self._data: Dict[str, KeywordOverrides] = {}
        self._lock = Lock()

    def get(self, user_id: str) -> KeywordOverrides:
        with self._lock:
            stored = self._data.get(user_id)
        return clean_overrides(stored) if stored else KeywordOverrides()

    def save(self, user_id: str, overrides: KeywordOverrides) -> KeywordOverrides:
        cleaned = clean_overrides(overrides)
        with self._lock:
            self._data[user_id] = cleaned
        return cleaned
