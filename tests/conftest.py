import mongomock
import pytest
from mongoengine import connect, disconnect

from pokedex.db import Pokemon
from pokedex.services.pokemon_store import PokemonStore


@pytest.fixture(scope="function")
def mongo_connection():
    """
    Registers an in-memory MongoDB (mongomock) as the default connection.
    Each test gets an empty collection.
    """
    connection = connect(
        "pokedex_test",
        host="mongodb://localhost",
        mongo_client_class=mongomock.MongoClient,
    )
    yield connection
    Pokemon.drop_collection()
    disconnect()


@pytest.fixture
def store(mongo_connection):
    """PokemonStore with a small default page so pagination is easy to see."""
    return PokemonStore(default_limit=3)
