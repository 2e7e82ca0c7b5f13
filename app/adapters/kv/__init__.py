"""Durable key-value store adapter (optional collaborator)."""

from app.adapters.kv.client import KVClient
from app.adapters.kv.factory import create_kv_client

__all__ = ["KVClient", "create_kv_client"]
