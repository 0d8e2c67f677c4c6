from fastapi import Depends

from pokedex.clients import HttpAdapter, HttpxAdapter
from pokedex.config import settings
from pokedex.services import PokemonStore, SeedService

_pokemon_store = None
_http_adapter = None


def get_pokemon_store() -> PokemonStore:
    global _pokemon_store
    if _pokemon_store is None:
        _pokemon_store = PokemonStore(default_limit=settings.default_limit)
    return _pokemon_store


def get_http_adapter() -> HttpAdapter:
    global _http_adapter
    if _http_adapter is None:
        _http_adapter = HttpxAdapter(timeout=settings.http_timeout)
    return _http_adapter


def get_seed_service(
    store: PokemonStore = Depends(get_pokemon_store),
    http: HttpAdapter = Depends(get_http_adapter),
) -> SeedService:
    return SeedService(
        store=store,
        http=http,
        base_url=settings.pokeapi_base_url,
        default_limit=settings.seed_limit,
    )


async def close_http_adapter():
    global _http_adapter
    if _http_adapter is not None:
        await _http_adapter.close()
        _http_adapter = None
