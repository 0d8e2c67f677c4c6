import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from pokedex.errors import ExternalServiceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class HttpAdapter(ABC):
    """Outbound HTTP fetch capability. Implementations return the decoded body."""

    @abstractmethod
    async def get(self, url: str, response_model: type[ModelT] | None = None) -> Any:
        ...

    async def close(self):
        pass


class HttpxAdapter(HttpAdapter):
    def __init__(self, timeout: float = 5.0, client: httpx.AsyncClient | None = None):
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def get(self, url: str, response_model: type[ModelT] | None = None) -> Any:
        """GETs ``url`` and returns its JSON body, validated into ``response_model`` if given."""
        try:
            response = await self.client.get(url)
            response.raise_for_status()  # Raises for 4xx/5xx status codes
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"GET {url} failed with status {e.response.status_code}")
            raise ExternalServiceError(f"GET {url} failed with status {e.response.status_code}")
        except httpx.RequestError as e:
            # Network failures/timeouts
            logger.error(f"GET {url} network error: {str(e)}")
            raise ExternalServiceError(f"Network error calling {url}: {str(e)}")
        except ValueError:
            logger.error(f"GET {url} returned a body that isn't JSON.")
            raise ExternalServiceError(f"{url} returned an unexpected response format.")

        if response_model is None:
            return data
        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            logger.error(f"GET {url} response doesn't match {response_model.__name__}: {e}")
            raise ExternalServiceError(f"{url} returned an unexpected response format.")

    async def close(self):
        """Close the underlying HTTP client (call on app shutdown)."""
        await self.client.aclose()
