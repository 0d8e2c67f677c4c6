import logging
from typing import Any, Callable, TypeVar

from fastapi.concurrency import run_in_threadpool
from mongoengine import NotUniqueError
from mongoengine.errors import BulkWriteError

from pokedex.db import Pokemon, is_valid_id
from pokedex.errors import DuplicateKey, NotFound, StorageUnavailable
from pokedex.models import CreatePokemon, PokemonRecord, UpdatePokemon

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest value MongoDB can store as an integer (int64)
MAX_NUMBER = 2**63 - 1


def normalize_name(name: str) -> str:
    return name.strip().lower()


def parse_number(term: str) -> int | None:
    """Returns the Pokedex number ``term`` denotes, or None if it isn't one."""
    stripped = term.strip()
    if not stripped.isdecimal():
        return None
    value = int(stripped)
    return value if value <= MAX_NUMBER else None


def to_record(pokemon: Pokemon) -> PokemonRecord:
    return PokemonRecord(
        id=str(pokemon.id),
        name=pokemon.name,
        number=pokemon.number,
        types=list(pokemon.types or []),
        abilities=list(pokemon.abilities or []),
        stats=dict(pokemon.stats or {}),
    )


def _conflicting_keys(error: NotUniqueError, fallback: dict[str, Any]) -> dict[str, Any]:
    # mongoengine re-raises the driver error, which carries keyValue on a real server
    cause = error.__cause__ or error.__context__
    details = getattr(cause, "details", None) or {}
    return details.get("keyValue") or fallback


def _duplicate_write_error(error: Exception) -> dict[str, Any] | None:
    """Returns the first duplicate-key entry of a failed bulk write, if any."""
    if not isinstance(error, BulkWriteError):
        return None
    cause = error.__cause__ or error.__context__
    details = getattr(cause, "details", None) or {}
    return next(
        (write for write in details.get("writeErrors", []) if write.get("code") == 11000),
        None,
    )


class PokemonStore:
    """All reads and writes of stored Pokemon go through here."""

    def __init__(self, default_limit: int):
        self.default_limit = default_limit

    async def _call(self, action: str, func: Callable[[], T]) -> T:
        """Runs a blocking driver call in the threadpool.

        Uniqueness violations are re-raised for the caller to translate; any
        other driver failure is logged in full and replaced by a generic
        StorageUnavailable.
        """
        try:
            return await run_in_threadpool(func)
        except NotUniqueError:
            raise
        except Exception as e:
            if _duplicate_write_error(e) is not None:
                raise
            logger.error(f"Can't {action} Pokemon: {e}", exc_info=True)
            raise StorageUnavailable(f"Can't {action} Pokemon - Check server logs")

    async def create(self, payload: CreatePokemon) -> PokemonRecord:
        data = payload.model_dump()
        data["name"] = normalize_name(data["name"])
        try:
            pokemon = await self._call("create", lambda: Pokemon(**data).save())
        except NotUniqueError as e:
            raise DuplicateKey(_conflicting_keys(e, {"name": data["name"]}))
        logger.info(f"Created Pokemon '{pokemon.name}' ({pokemon.id})")
        return to_record(pokemon)

    async def list_all(self, limit: int | None = None, offset: int | None = None) -> list[PokemonRecord]:
        """Returns one page of Pokemon ordered by number."""
        limit = self.default_limit if limit is None else limit
        # MongoDB reads limit(0) as "no limit"
        if limit < 1:
            return []
        offset = max(offset or 0, 0)
        pokemons = await self._call(
            "list",
            lambda: list(Pokemon.objects.order_by("number").skip(offset).limit(limit)),
        )
        return [to_record(pokemon) for pokemon in pokemons]

    async def find_by_term(self, term: str) -> PokemonRecord:
        """
        Resolves ``term`` to a single Pokemon.

        Lookup order: by id when ``term`` is a valid ObjectId, then by
        number when it is numeric, then by (lowercased, trimmed) name. An id
        match wins even when the same term would also match a number.
        """
        pokemon = None

        if is_valid_id(term):
            pokemon = await self._call("find", lambda: Pokemon.objects(id=term).first())

        number = parse_number(term)
        if pokemon is None and number is not None:
            pokemon = await self._call("find", lambda: Pokemon.objects(number=number).first())

        if pokemon is None:
            name = normalize_name(term)
            pokemon = await self._call("find", lambda: Pokemon.objects(name=name).first())

        if pokemon is None:
            raise NotFound(term)
        return to_record(pokemon)

    async def update(self, pokemon_id: str, patch: UpdatePokemon) -> PokemonRecord:
        if not is_valid_id(pokemon_id):
            raise NotFound(pokemon_id, f"Pokemon with id {pokemon_id} not found")

        changes = patch.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = normalize_name(changes["name"])

        if not changes:
            pokemon = await self._call("update", lambda: Pokemon.objects(id=pokemon_id).first())
        else:
            try:
                pokemon = await self._call(
                    "update",
                    lambda: Pokemon.objects(id=pokemon_id).modify(new=True, **changes),
                )
            except NotUniqueError as e:
                fallback = {"name": changes["name"]} if "name" in changes else changes
                raise DuplicateKey(_conflicting_keys(e, fallback))

        if pokemon is None:
            raise NotFound(pokemon_id, f"Pokemon with id {pokemon_id} not found")
        return to_record(pokemon)

    async def remove(self, pokemon_id: str) -> None:
        if not is_valid_id(pokemon_id):
            raise NotFound(pokemon_id, f"Pokemon with id {pokemon_id} not found")
        deleted = await self._call("delete", lambda: Pokemon.objects(id=pokemon_id).delete())
        if deleted == 0:
            raise NotFound(pokemon_id, f"Pokemon with id {pokemon_id} not found")
        logger.info(f"Deleted Pokemon {pokemon_id}")

    async def clear(self) -> int:
        """Deletes every stored Pokemon. Used by the seed."""
        return await self._call("delete", lambda: Pokemon.objects.delete())

    async def insert_many(self, payloads: list[CreatePokemon]) -> int:
        """Inserts all ``payloads`` in one bulk write and returns how many were stored."""
        if not payloads:
            return 0
        documents = [
            Pokemon(**{**payload.model_dump(), "name": normalize_name(payload.name)})
            for payload in payloads
        ]
        try:
            ids = await self._call(
                "create",
                lambda: Pokemon.objects.insert(documents, load_bulk=False),
            )
        except NotUniqueError as e:
            raise DuplicateKey(_conflicting_keys(e, {"name": [d.name for d in documents]}))
        except BulkWriteError as e:
            duplicate = _duplicate_write_error(e)
            raise DuplicateKey(
                duplicate.get("keyValue") or {"name": documents[duplicate["index"]].name}
            )
        return len(ids)
