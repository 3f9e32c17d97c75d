"""Storage clients and the blob tiering pipeline.

Example:
    >>> from tierfix.stores import get_storage_client
    >>> client = get_storage_client("memory")
"""

from tierfix.stores.backends._protocols import StorageClient
from tierfix.stores.factory import get_storage_client, register_client

__all__ = [
    "StorageClient",
    "get_storage_client",
    "register_client",
]
