import logging
from bson import ObjectId
from mongoengine import (
    DictField,
    Document,
    IntField,
    ListField,
    StringField,
    connect,
    disconnect,
)

from pokedex.config import Settings

logger = logging.getLogger(__name__)


class Pokemon(Document):
    """Stored Pokemon document. ``name`` is kept lowercase by the store."""

    name = StringField(required=True, unique=True)
    number = IntField(required=True, min_value=1)
    types = ListField(StringField())
    abilities = ListField(StringField())
    stats = DictField()

    meta = {
        "collection": "pokemons",
        "indexes": ["number"],
    }


def is_valid_id(value: str) -> bool:
    """True when ``value`` has the shape of a MongoDB ObjectId (24 hex chars)."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def connect_db(settings: Settings, **kwargs):
    """Registers the default mongoengine connection (the client connects lazily)."""
    logger.info(f"Connecting to MongoDB at {settings.mongodb_url} (db: {settings.mongodb_db})")
    return connect(db=settings.mongodb_db, host=settings.mongodb_url, **kwargs)


def close_db():
    disconnect()
    logger.info("MongoDB connection closed.")
