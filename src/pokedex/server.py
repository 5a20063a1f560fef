"""HTTP surface: FastAPI routes over the read API.

Run with ``pokedex serve`` or ``uvicorn --factory pokedex.server:create_app``.
"""

from typing import Dict, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from pokedex.aggregation.pokemon_models import EntityDetail, PokemonListPage
from pokedex.api.pokemon_api import get_pokemon_detail, list_pokemon
from pokedex.config.loader import load_config
from pokedex.errors import PokedexError
from pokedex.service import PokedexService
from pokedex.utils.logging import get_logger

logger = get_logger(__name__)


def _service(request: Request) -> PokedexService:
    return request.app.state.service


async def _pokedex_error_handler(request: Request, exc: PokedexError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(service: Optional[PokedexService] = None, config: Optional[Dict] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        service: Pre-built service (tests inject fakes here)
        config: Config dict used when service is None; loaded from disk if also None

    Returns:
        FastAPI app with the service on ``app.state.service``
    """
    if service is None:
        service = PokedexService.from_config(config if config is not None else load_config())

    app = FastAPI(title="Pokédex API", version="1.0.0")
    app.state.service = service
    app.add_exception_handler(PokedexError, _pokedex_error_handler)

    @app.get("/api/pokemon", response_model=PokemonListPage)
    def list_route(
        request: Request,
        limit: Optional[str] = Query(default=None),
        offset: Optional[str] = Query(default=None),
        search: Optional[str] = Query(default=None),
        type: Optional[str] = Query(default=None),
    ) -> PokemonListPage:
        return list_pokemon(_service(request), limit=limit, offset=offset, search=search, type=type)

    @app.get("/api/pokemon/{name}", response_model=EntityDetail)
    def detail_route(request: Request, name: str) -> EntityDetail:
        return get_pokemon_detail(_service(request), name)

    @app.get("/healthz")
    def healthz(request: Request) -> Dict:
        return {"status": "ok", "cache": _service(request).cache.status()}

    return app
