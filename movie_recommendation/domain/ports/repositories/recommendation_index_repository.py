from abc import ABC, abstractmethod
from typing import FrozenSet, Optional, Tuple

from movie_recommendation.domain.models.recommendation_table import RecommendationSlot


class RecommendationIndexRepository(ABC):
    @property
    @abstractmethod
    def known_ids(self) -> FrozenSet[int]:
        pass

    @abstractmethod
    def lookup(self, movie_id: int) -> Optional[Tuple[RecommendationSlot, ...]]:
        pass

    @abstractmethod
    def contains(self, movie_id: int) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
