"""Compose the detail view: core record, flavor text, evolution path."""

from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pokedex.aggregation.evolution import parse_evolution_chain
from pokedex.aggregation.normalize import (
    DEFAULT_PLACEHOLDER_IMAGE,
    display_name,
    resolve_image_url,
    slot_ordered_types,
)
from pokedex.aggregation.pokemon_models import (
    AbilityInfo,
    EntityDetail,
    EvolutionStage,
    StatValue,
)
from pokedex.errors import NotFound, UpstreamError
from pokedex.retrieval.client import UpstreamClient
from pokedex.utils.logging import get_logger

logger = get_logger(__name__)

NO_DESCRIPTION = "No description available."

STAT_ORDER = ["hp", "attack", "defense", "special-attack", "special-defense", "speed"]

# fields the detail view cannot be built without
REQUIRED_RECORD_FIELDS = ("id", "name", "height", "weight")

T = TypeVar("T")


@dataclass(frozen=True)
class SubFetch(Generic[T]):
    """Result of a best-effort lookup: a value plus whether it is a fallback."""

    value: T
    degraded: bool = False
    reason: Optional[str] = None

    @classmethod
    def fallback(cls, value: T, reason: str) -> "SubFetch[T]":
        return cls(value=value, degraded=True, reason=reason)


@dataclass(frozen=True)
class SpeciesInfo:
    description: str
    evolution_chain_url: Optional[str]


def find_english_flavor_text(entries: Optional[List[Dict]]) -> str:
    """First English flavor text with line/form feeds flattened to spaces."""
    for entry in entries or []:
        if (entry.get("language") or {}).get("name") == "en":
            text = entry.get("flavor_text") or ""
            for ch in ("\n", "\f", "\r"):
                text = text.replace(ch, " ")
            return text or NO_DESCRIPTION
    return NO_DESCRIPTION


def order_stats(raw_stats: List[Dict]) -> List[StatValue]:
    """Canonical stat order; unknown stats go last in upstream order."""
    def rank(stat: Dict) -> int:
        name = stat["stat"]["name"]
        return STAT_ORDER.index(name) if name in STAT_ORDER else len(STAT_ORDER)

    return [
        StatValue(name=display_name(stat["stat"]["name"]), value=stat["base_stat"])
        for stat in sorted(raw_stats, key=rank)
    ]


def order_abilities(raw_abilities: List[Dict]) -> List[AbilityInfo]:
    return [
        AbilityInfo(name=display_name(a["ability"]["name"]), is_hidden=bool(a.get("is_hidden", False)))
        for a in sorted(raw_abilities, key=lambda a: a.get("slot", 0))
    ]


class DetailAggregator:
    """Builds EntityDetail for one name or id.

    The primary record is required. Species and evolution lookups are
    best-effort and fall back to NO_DESCRIPTION and an absent chain.
    """

    def __init__(self, client: UpstreamClient, *, placeholder_image: str = DEFAULT_PLACEHOLDER_IMAGE):
        self.client = client
        self.placeholder_image = placeholder_image

    def detail(self, name_or_id: str) -> EntityDetail:
        """
        Fetch and assemble the detail view.

        Args:
            name_or_id: Lower-cased name or numeric id

        Returns:
            EntityDetail

        Raises:
            NotFound: Upstream answered 404 for the primary record
            UpstreamError: Any other failure fetching the primary record
        """
        record = self._fetch_primary(name_or_id)

        species = self._fetch_species(record)
        if species.degraded:
            logger.warning(f"Species lookup for {name_or_id} degraded: {species.reason}")

        evolution: SubFetch[Optional[List[EvolutionStage]]]
        if species.degraded or not species.value.evolution_chain_url:
            evolution = SubFetch.fallback(None, "no evolution chain url")
        else:
            evolution = self._fetch_evolution(species.value.evolution_chain_url)
        if evolution.degraded:
            logger.info(f"Evolution chain for {name_or_id} unavailable: {evolution.reason}")

        return EntityDetail(
            id=record["id"],
            name=record["name"],
            image_url=resolve_image_url(record.get("sprites"), self.placeholder_image),
            height=record["height"] / 10,
            weight=record["weight"] / 10,
            stats=order_stats(record.get("stats") or []),
            abilities=order_abilities(record.get("abilities") or []),
            types=slot_ordered_types(record),
            description=species.value.description,
            evolution_chain=evolution.value,
        )

    def _fetch_primary(self, name_or_id: str) -> Dict[str, Any]:
        url = self.client.pokemon_url(name_or_id)
        logger.info(f"Fetching details for: {name_or_id} from {url}")
        outcome = self.client.fetch_json(url)
        if not outcome.ok:
            error = outcome.error
            if error.is_not_found:
                raise NotFound(f'Pokémon "{name_or_id}" not found') from error
            logger.error(f"Upstream error for {name_or_id}: {error.message}")
            raise UpstreamError(f"Failed to fetch Pokémon data from PokeAPI: {error.message}") from error
        data = outcome.data
        if not isinstance(data, dict):
            raise UpstreamError(f"Failed to fetch Pokémon data from PokeAPI: malformed record for {name_or_id}")
        missing = [key for key in REQUIRED_RECORD_FIELDS if data.get(key) is None]
        if missing:
            raise UpstreamError(
                f"Failed to fetch Pokémon data from PokeAPI: record for {name_or_id} is missing {', '.join(missing)}"
            )
        return data

    def _fetch_species(self, record: Dict) -> SubFetch[SpeciesInfo]:
        missing = SpeciesInfo(description=NO_DESCRIPTION, evolution_chain_url=None)
        species_url = (record.get("species") or {}).get("url")
        if not species_url:
            return SubFetch.fallback(missing, "record has no species url")

        outcome = self.client.fetch_json(species_url)
        if not outcome.ok:
            return SubFetch.fallback(missing, outcome.error.message)
        data = outcome.data
        if not isinstance(data, dict):
            return SubFetch.fallback(missing, "species payload is not an object")

        chain_url = (data.get("evolution_chain") or {}).get("url")
        return SubFetch(
            SpeciesInfo(
                description=find_english_flavor_text(data.get("flavor_text_entries")),
                evolution_chain_url=chain_url,
            )
        )

    def _fetch_evolution(self, chain_url: str) -> SubFetch[Optional[List[EvolutionStage]]]:
        outcome = self.client.fetch_json(chain_url)
        if not outcome.ok:
            return SubFetch.fallback(None, outcome.error.message)
        data = outcome.data
        if not isinstance(data, dict) or not isinstance(data.get("chain"), dict):
            return SubFetch.fallback(None, "evolution payload has no chain")
        try:
            return SubFetch(parse_evolution_chain(data["chain"]))
        except (AttributeError, TypeError, ValueError) as e:
            return SubFetch.fallback(None, f"malformed evolution chain: {e}")
