from .connection import CosmosStore

__all__ = ["CosmosStore"]
