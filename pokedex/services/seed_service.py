import logging

from pokedex.clients.http_adapter import HttpAdapter
from pokedex.models import CreatePokemon, PokeAPIResourceList, SeedResult
from pokedex.services.pokemon_store import PokemonStore

logger = logging.getLogger(__name__)


def number_from_url(url: str) -> int:
    """'https://pokeapi.co/api/v2/pokemon/25/' -> 25"""
    return int(url.rstrip("/").rsplit("/", 1)[-1])


class SeedService:
    """Replaces the stored Pokemon with the PokeAPI index."""

    def __init__(self, store: PokemonStore, http: HttpAdapter, base_url: str, default_limit: int):
        self._store = store
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._default_limit = default_limit

    async def seed(self, limit: int | None = None) -> SeedResult:
        limit = limit or self._default_limit
        index = await self._http.get(
            f"{self._base_url}/pokemon?limit={limit}",
            response_model=PokeAPIResourceList,
        )

        payloads = [
            CreatePokemon(name=entry.name, number=number_from_url(entry.url))
            for entry in index.results
        ]

        removed = await self._store.clear()
        logger.info(f"Seed: removed {removed} existing Pokemon")
        inserted = await self._store.insert_many(payloads)
        logger.info(f"Seed: inserted {inserted} Pokemon")
        return SeedResult(inserted=inserted)
