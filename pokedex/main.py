import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from pokedex.config import settings
from pokedex.db import close_db, connect_db
from pokedex.dependencies import close_http_adapter, get_pokemon_store, get_seed_service
from pokedex.errors import PokedexError
from pokedex.models import (
    CreatePokemon,
    PaginationParams,
    PokemonRecord,
    SeedResult,
    UpdatePokemon,
)
from pokedex.services import PokemonStore, SeedService

logger = logging.getLogger(__name__)
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup...")
    connect_db(settings)
    yield
    logger.info("Application shutdown...")
    await close_http_adapter()
    close_db()


app = FastAPI(
    title="Pokedex API",
    description="CRUD service for Pokemon stored in MongoDB.",
    lifespan=lifespan,
)


@app.exception_handler(PokedexError)
async def pokedex_error_handler(request: Request, exc: PokedexError):
    # Store and client errors carry their own status code
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


router = APIRouter(prefix="/api/v2")


@router.post(
    "/pokemon",
    response_model=PokemonRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Creates a Pokemon",
)
async def create_pokemon(
    payload: CreatePokemon,
    store: PokemonStore = Depends(get_pokemon_store),
):
    """Names are stored lowercase; a name that already exists answers 400."""
    return await store.create(payload)


@router.get(
    "/pokemon",
    response_model=list[PokemonRecord],
    summary="Lists Pokemon ordered by number",
)
async def list_pokemon(
    pagination: Annotated[PaginationParams, Query()],
    store: PokemonStore = Depends(get_pokemon_store),
):
    return await store.list_all(limit=pagination.limit, offset=pagination.offset)


@router.get(
    "/pokemon/{term}",
    response_model=PokemonRecord,
    summary="Finds a Pokemon by id, number or name",
)
async def find_pokemon(
    term: str,
    store: PokemonStore = Depends(get_pokemon_store),
):
    return await store.find_by_term(term)


@router.patch(
    "/pokemon/{pokemon_id}",
    response_model=PokemonRecord,
    summary="Updates a Pokemon",
)
async def update_pokemon(
    pokemon_id: str,
    patch: UpdatePokemon,
    store: PokemonStore = Depends(get_pokemon_store),
):
    return await store.update(pokemon_id, patch)


@router.delete(
    "/pokemon/{pokemon_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deletes a Pokemon",
)
async def delete_pokemon(
    pokemon_id: str,
    store: PokemonStore = Depends(get_pokemon_store),
):
    await store.remove(pokemon_id)


@router.get(
    "/seed",
    response_model=SeedResult,
    summary="Replaces the stored Pokemon with the PokeAPI index",
)
async def seed(
    limit: int | None = Query(default=None, ge=1),
    service: SeedService = Depends(get_seed_service),
):
    # Upstream failures surface as 503 through the PokedexError handler
    return await service.seed(limit)


app.include_router(router)
