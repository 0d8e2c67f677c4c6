from pydantic import BaseModel, ConfigDict, Field


# Public shape of a stored Pokemon (internal metadata is never exposed)
class PokemonRecord(BaseModel):
    id: str
    name: str
    number: int
    types: list[str] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)


# Request body for POST /pokemon; strings are trimmed before length checks
class CreatePokemon(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    number: int = Field(ge=1)
    types: list[str] = Field(default_factory=list)
    abilities: list[str] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)


# Request body for PATCH /pokemon/{id}; only fields the caller sends are applied
class UpdatePokemon(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1)
    number: int | None = Field(default=None, ge=1)
    types: list[str] | None = None
    abilities: list[str] | None = None
    stats: dict[str, int] | None = None


class PaginationParams(BaseModel):
    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)


# One entry of the PokeAPI /pokemon index
class PokeAPIResource(BaseModel):
    name: str
    url: str


class PokeAPIResourceList(BaseModel):
    count: int = 0
    results: list[PokeAPIResource] = Field(default_factory=list)


class SeedResult(BaseModel):
    inserted: int
