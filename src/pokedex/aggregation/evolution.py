"""Linearize an upstream evolution graph into a single root-to-leaf path."""

from typing import Dict, List, Optional

from pokedex.aggregation.normalize import display_name, id_from_resource_url
from pokedex.aggregation.pokemon_models import EvolutionStage
from pokedex.utils.logging import get_logger

logger = get_logger(__name__)


def parse_evolution_chain(root: Optional[Dict]) -> List[EvolutionStage]:
    """
    Walk the chain from its root, always following the first branch.

    Branching evolutions (eevee and friends) collapse to evolves_to[0];
    the other branches are never represented.

    Args:
        root: The ``chain`` node of an evolution-chain payload

    Returns:
        Ordered list of EvolutionStage, root first. Nodes whose species URL
        does not end in a numeric id, or that have no species name, are
        skipped.
    """
    stages: List[EvolutionStage] = []
    node = root
    while node:
        species = node.get("species") or {}
        species_id = id_from_resource_url(species.get("url") or "")
        species_name = species.get("name")
        if species_id is None:
            logger.debug(f"Skipping evolution node without numeric id: {species.get('url')}")
        elif not isinstance(species_name, str) or not species_name:
            logger.debug(f"Skipping evolution node {species_id} without a species name")
        else:
            stages.append(EvolutionStage(id=species_id, name=display_name(species_name)))

        children = node.get("evolves_to") or []
        node = children[0] if children else None
    return stages
