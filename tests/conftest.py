"""Pytest configuration and fixtures."""

import threading
from typing import Dict, List, Optional

import pytest

from pokedex.errors import FetchError
from pokedex.retrieval.client import FetchOutcome, UpstreamClient
from pokedex.service import PokedexService

BASE_URL = "https://pokeapi.test/api/v2"


class FakeUpstream(UpstreamClient):
    """UpstreamClient that answers from an in-memory route table."""

    def __init__(self, routes: Optional[Dict[str, object]] = None):
        super().__init__({"base_url": BASE_URL})
        self.routes: Dict[str, object] = dict(routes or {})
        self.failures: Dict[str, FetchError] = {}
        self.calls: List[str] = []
        self._calls_lock = threading.Lock()

    def fail(self, url: str, status: Optional[int] = 500) -> None:
        self.failures[url] = FetchError(
            f"Failed to fetch {url}: {status}",
            url=url,
            status=status,
            transport=status is None,
        )

    def fetch_json(self, url: str) -> FetchOutcome:
        with self._calls_lock:
            self.calls.append(url)
        if url in self.failures:
            return FetchOutcome(url=url, ok=False, error=self.failures[url])
        if url not in self.routes:
            return FetchOutcome(url=url, ok=False, error=FetchError("Not Found", url=url, status=404))
        return FetchOutcome(url=url, ok=True, data=self.routes[url])


def pokemon_url(name_or_id) -> str:
    return f"{BASE_URL}/pokemon/{name_or_id}"


def make_pokemon(
    pokemon_id: int,
    name: str,
    types: List[str],
    *,
    artwork: Optional[str] = "official",
    species_url: Optional[str] = None,
) -> Dict:
    """Minimal upstream pokemon record."""
    other = {}
    if artwork == "official":
        other["official-artwork"] = {"front_default": f"https://img.test/art/{pokemon_id}.png"}
    elif artwork == "home":
        other["home"] = {"front_default": f"https://img.test/home/{pokemon_id}.png"}
    sprites = {"front_default": f"https://img.test/sprite/{pokemon_id}.png" if artwork != "none" else None, "other": other}
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "sprites": sprites,
        "stats": [],
        "abilities": [],
        "species": {"url": species_url or f"{BASE_URL}/pokemon-species/{pokemon_id}/"},
    }


def index_payload(names: List[str]) -> Dict:
    return {
        "count": len(names),
        "results": [{"name": n, "url": pokemon_url(n)} for n in names],
    }


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def service(upstream, clock):
    """Service wired to the fake upstream with a controllable clock."""
    return PokedexService.from_config({"upstream": {"base_url": BASE_URL}}, client=upstream, clock=clock)


@pytest.fixture
def starter_catalog(upstream):
    """Index of seven pokemon with full records registered."""
    roster = [
        (1, "bulbasaur", ["grass", "poison"]),
        (4, "charmander", ["fire"]),
        (5, "charmeleon", ["fire"]),
        (7, "squirtle", ["water"]),
        (25, "pikachu", ["electric"]),
        (37, "vulpix", ["fire"]),
        (58, "growlithe", ["fire"]),
    ]
    upstream.routes[f"{BASE_URL}/pokemon?limit=1500"] = index_payload([name for _, name, _ in roster])
    for pokemon_id, name, types in roster:
        upstream.routes[pokemon_url(name)] = make_pokemon(pokemon_id, name, types)
    return roster
