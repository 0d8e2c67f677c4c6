"""Typed errors raised by the store, the seed service and the HTTP adapter.

Each error knows the status code the HTTP layer should answer with, so
``pokedex.main`` translates all of them with a single handler.
"""
import json
from typing import Any


class PokedexError(Exception):
    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(PokedexError):
    status_code = 404

    def __init__(self, term: Any, detail: str | None = None):
        self.term = term
        super().__init__(detail or f'Pokemon with id, name or number "{term}" not found')


class DuplicateKey(PokedexError):
    status_code = 400

    def __init__(self, key_value: dict[str, Any]):
        self.key_value = key_value
        super().__init__(f"Pokemon exists in DB {json.dumps(key_value, default=str)}")


class StorageUnavailable(PokedexError):
    # Callers only see a generic message; the cause is logged
    status_code = 500


class ExternalServiceError(PokedexError):
    status_code = 503

    def __init__(self, detail: str):
        super().__init__(f"External API Error: {detail}")
