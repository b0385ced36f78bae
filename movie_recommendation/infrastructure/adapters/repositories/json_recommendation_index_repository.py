import json
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from movie_recommendation.domain.exceptions import LoadError
from movie_recommendation.domain.models.recommendation_table import RecommendationSlot, RecommendationTable
from movie_recommendation.domain.ports.repositories.recommendation_index_repository import (
    RecommendationIndexRepository,
)
from movie_recommendation.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class JsonRecommendationIndexRepository(RecommendationIndexRepository):
    """Recommendation index backed by a precomputed JSON artifact, loaded once"""

    def __init__(self, table: RecommendationTable):
        self.table = table

    @classmethod
    def from_path(cls, path: str) -> "JsonRecommendationIndexRepository":
        return cls(cls.load(path))

    @staticmethod
    def load(path: str) -> RecommendationTable:
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except FileNotFoundError as e:
            raise LoadError(f"Recommendation artifact not found: {path}") from e
        except OSError as e:
            raise LoadError(f"Failed to read recommendation artifact: {path}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LoadError(f"Recommendation artifact is not valid JSON: {path}") from e

        table = RecommendationTable.from_raw(_parse_entries(raw, path))
        logger.info(f"Loaded recommendations for {len(table)} movies from {path}")
        return table

    @property
    def known_ids(self) -> FrozenSet[int]:
        return self.table.known_ids

    def lookup(self, movie_id: int) -> Optional[Tuple[RecommendationSlot, ...]]:
        return self.table.get(movie_id)

    def contains(self, movie_id: int) -> bool:
        return movie_id in self.table

    def __len__(self) -> int:
        return len(self.table)


def _parse_entries(raw: Any, path: str) -> Dict[int, List[int]]:
    if not isinstance(raw, dict):
        raise LoadError(f"Recommendation artifact must be a JSON object: {path}")

    entries: Dict[int, List[int]] = {}
    for key, values in raw.items():
        if not (key.isascii() and key.isdigit()) or int(key) <= 0:
            raise LoadError(f"Invalid movie id key {key!r} in {path}")
        if not isinstance(values, list):
            raise LoadError(f"Recommendations for movie {key} must be a list in {path}")
        for value in values:
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise LoadError(f"Invalid recommended id {value!r} for movie {key} in {path}")
        entries[int(key)] = values
    return entries
