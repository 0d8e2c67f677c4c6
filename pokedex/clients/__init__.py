"""Client modules for external API communication."""
from .http_adapter import HttpAdapter, HttpxAdapter

__all__ = [
    'HttpAdapter',
    'HttpxAdapter',
]
