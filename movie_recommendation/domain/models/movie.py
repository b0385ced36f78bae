from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MovieMetadata(BaseModel):
    """Catalog record for a movie as returned by the metadata provider.

    Only ``id`` is interpreted; every other provider field is carried through untouched.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    id: int
    title: Optional[str] = None


class EnrichedRecommendation(BaseModel):
    """A movie together with the resolved metadata of its recommendations, strongest first"""

    movie: MovieMetadata
    recommendations: List[MovieMetadata] = Field(default_factory=list)
