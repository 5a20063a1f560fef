"""Pokemon API: the list and detail read operations."""

from typing import Any, Optional

from ..aggregation.pokemon_models import EntityDetail, PokemonListPage
from ..errors import BadRequest, InternalError, PokedexError
from ..service import PokedexService
from ..utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OFFSET = 0


def _parse_non_negative_int(value: Any, default: int) -> int:
    """Parse a query value; missing, non-numeric, or negative gives the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _normalize_term(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    term = value.strip().lower()
    return term or None


def list_pokemon(
    service: PokedexService,
    limit: Any = None,
    offset: Any = None,
    search: Optional[str] = None,
    type: Optional[str] = None,
) -> PokemonListPage:
    """
    List one page of Pokémon summaries.

    Args:
        service: Process service
        limit: Page size; raw query value accepted (default 20)
        offset: Start offset; raw query value accepted (default 0)
        search: Case-insensitive name substring
        type: Case-insensitive type name, applied after pagination

    Returns:
        PokemonListPage; total_count counts search matches only

    Raises:
        IndexUnavailable: Name index has never been fetched and the fetch failed
        InternalError: Any unexpected processing failure
    """
    page_limit = _parse_non_negative_int(limit, service.default_limit)
    page_offset = _parse_non_negative_int(offset, DEFAULT_OFFSET)
    try:
        return service.lister.list(
            page_limit,
            page_offset,
            search_term=_normalize_term(search),
            type_filter=_normalize_term(type),
        )
    except PokedexError:
        raise
    except Exception as e:
        logger.error(f"Error listing Pokémon: {e}", exc_info=True)
        raise InternalError("Internal Server Error fetching Pokémon data") from e


def get_pokemon_detail(service: PokedexService, name_or_id: Optional[str]) -> EntityDetail:
    """
    Get the detail view for one Pokémon.

    Args:
        service: Process service
        name_or_id: Name or numeric id, any case

    Returns:
        EntityDetail

    Raises:
        BadRequest: Blank name
        NotFound: Upstream has no such Pokémon
        UpstreamError: Upstream failed on the primary record
        InternalError: Any unexpected processing failure
    """
    key = (name_or_id or "").strip().lower()
    if not key:
        raise BadRequest("Pokémon name or ID is required")
    try:
        return service.detailer.detail(key)
    except PokedexError:
        raise
    except Exception as e:
        logger.error(f"Error building detail for {key}: {e}", exc_info=True)
        raise InternalError("Failed to process Pokémon details.") from e
