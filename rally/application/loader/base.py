"""Request-scoped batched loading.

A ``BatchLoader`` collapses every ``load`` issued before the event loop
next runs into one ``dispatch`` call with the distinct keys. Results are
cached per loader instance, so a loader must never outlive the request
that created it.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic, Hashable, Optional, TypeVar

import logfire
from strawberry.dataloader import DataLoader

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LoadError(Exception):
    """A bulk fetch failed; every load waiting on that batch gets this error."""

    def __init__(self, loader: str, keys: Sequence[Any], cause: Exception):
        self.loader = loader
        self.keys = list(keys)
        self.cause = cause
        super().__init__(f"{loader} failed to load {len(self.keys)} keys: {cause}")


class BatchLoader(ABC, Generic[K, V]):
    """Deduplicating, caching bulk loader for one kind of key."""

    def __init__(self) -> None:
        self._loader: DataLoader[K, Optional[V]] = DataLoader(load_fn=self._load_batch)

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    async def dispatch(self, keys: list[K]) -> Mapping[K, V]:
        """Fetch all keys in one store round trip.

        Keys missing from the returned mapping resolve to ``missing()``.
        """
        pass

    def missing(self) -> Optional[V]:
        """Value for a key the store does not have."""
        return None

    async def load(self, key: K) -> Optional[V]:
        return await self._loader.load(key)

    async def load_many(self, keys: Sequence[K]) -> list[Optional[V]]:
        return list(await self._loader.load_many(keys))

    async def _load_batch(self, keys: list[K]) -> list[Optional[V]]:
        with logfire.span("dispatch {loader}", loader=self.name, batch_size=len(keys)):
            try:
                found = await self.dispatch(keys)
            except Exception as e:
                logfire.error(
                    "Batch load failed", loader=self.name, batch_size=len(keys), error=str(e)
                )
                raise LoadError(self.name, keys, e) from e

        return [found[key] if key in found else self.missing() for key in keys]
