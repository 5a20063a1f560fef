"""Read models returned by the list and detail operations.

Field names are snake_case in Python and camelCase on the wire; serialize with
``by_alias=True`` (FastAPI does this for response models).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class NameIndexEntry(_WireModel):
    """One row of the bulk name index."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    resource_url: str = Field(alias="resourceUrl")


class EntitySummary(_WireModel):
    id: int
    name: str
    image_url: str = Field(alias="imageUrl")
    types: List[str] = []


class PokemonListPage(_WireModel):
    """A list page plus the search-filtered count.

    total_count ignores the type filter, so it can overstate how many typed
    matches exist.
    """

    pokemon: List[EntitySummary] = []
    total_count: int = Field(alias="totalCount")


class StatValue(_WireModel):
    name: str
    value: int


class AbilityInfo(_WireModel):
    name: str
    is_hidden: bool = Field(alias="isHidden")


class EvolutionStage(_WireModel):
    id: int
    name: str


class EntityDetail(_WireModel):
    id: int
    name: str
    image_url: str = Field(alias="imageUrl")
    height: float  # meters
    weight: float  # kilograms
    stats: List[StatValue] = []
    abilities: List[AbilityInfo] = []
    types: List[str] = []
    description: str
    evolution_chain: Optional[List[EvolutionStage]] = Field(default=None, alias="evolutionChain")
