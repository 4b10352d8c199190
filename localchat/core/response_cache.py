"""
Bounded response cache.

FIFO map from (model, raw prompt) to a successful generation. Process
scoped; never persisted.

Dependencies: collections
System role: Model gateway response cache
"""

from collections import OrderedDict
from typing import Generic, TypeVar

V = TypeVar("V")


class ResponseCache(Generic[V]):
    """
    Insertion-ordered cache evicting the oldest entry when full.

    Reads do not refresh an entry's position (FIFO, not LRU).
    """

    def __init__(self, max_entries: int = 100) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, V] = OrderedDict()

    @staticmethod
    def make_key(model_name: str, prompt: str) -> str:
        return f"{model_name}:{prompt}"

    def get(self, model_name: str, prompt: str) -> V | None:
        return self._entries.get(self.make_key(model_name, prompt))

    def put(self, model_name: str, prompt: str, value: V) -> None:
        self._entries[self.make_key(model_name, prompt)] = value
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
