"""Process-level composition of the client, cache, and aggregators."""

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from pokedex.aggregation.detail_aggregator import DetailAggregator
from pokedex.aggregation.list_aggregator import ListAggregator
from pokedex.cache.name_index import NameIndexCache
from pokedex.config.loader import get_section
from pokedex.retrieval.client import UpstreamClient


@dataclass
class PokedexService:
    """Everything a read operation needs, built once per process."""

    client: UpstreamClient
    cache: NameIndexCache
    lister: ListAggregator
    detailer: DetailAggregator
    default_limit: int = 20

    @classmethod
    def from_config(
        cls,
        config: Optional[Dict] = None,
        *,
        client: Optional[UpstreamClient] = None,
        clock: Callable[[], float] = time.time,
    ) -> "PokedexService":
        upstream_cfg = get_section(config, "upstream")
        cache_cfg = get_section(config, "cache")
        list_cfg = get_section(config, "list")

        client = client or UpstreamClient(upstream_cfg)
        cache = NameIndexCache(
            client=client,
            ttl_seconds=float(cache_cfg["ttl_seconds"]),
            index_limit=int(cache_cfg["index_limit"]),
            clock=clock,
        )
        placeholder = list_cfg["placeholder_image"]
        return cls(
            client=client,
            cache=cache,
            lister=ListAggregator(
                cache,
                client,
                max_concurrent_fetches=int(list_cfg["max_concurrent_fetches"]),
                placeholder_image=placeholder,
            ),
            detailer=DetailAggregator(client, placeholder_image=placeholder),
            default_limit=int(list_cfg["default_limit"]),
        )
