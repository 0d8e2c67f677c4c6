from .pokemon_store import PokemonStore
from .seed_service import SeedService

__all__ = [
    'PokemonStore',
    'SeedService',
]
