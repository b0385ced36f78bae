from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, PositiveInt

SENTINEL_ID = 0


class RecommendationSlot(BaseModel):
    """One position in a recommendation list: either a movie id or empty"""

    model_config = ConfigDict(frozen=True)

    movie_id: Optional[PositiveInt] = None

    @classmethod
    def from_raw(cls, value: int) -> "RecommendationSlot":
        if value == SENTINEL_ID:
            return cls()
        return cls(movie_id=value)

    @property
    def is_empty(self) -> bool:
        return self.movie_id is None


class RecommendationTable:
    """Immutable movie id -> ordered recommendation slots mapping"""

    def __init__(self, entries: Mapping[int, Iterable[RecommendationSlot]]):
        self._entries = MappingProxyType({movie_id: tuple(slots) for movie_id, slots in entries.items()})
        self._known_ids = frozenset(self._entries)

    @classmethod
    def from_raw(cls, raw: Mapping[int, Iterable[int]]) -> "RecommendationTable":
        return cls(
            {movie_id: [RecommendationSlot.from_raw(value) for value in values] for movie_id, values in raw.items()}
        )

    @property
    def known_ids(self) -> FrozenSet[int]:
        return self._known_ids

    def get(self, movie_id: int) -> Optional[Tuple[RecommendationSlot, ...]]:
        return self._entries.get(movie_id)

    def __contains__(self, movie_id: object) -> bool:
        return movie_id in self._known_ids

    def __len__(self) -> int:
        return len(self._entries)
