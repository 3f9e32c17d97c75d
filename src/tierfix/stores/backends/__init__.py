"""Storage client backends.

This package contains implementations of the ``StorageClient`` capability:

- azure: Azure Blob Storage (azure-storage-blob)
- memory: In-memory storage (for testing, no dependencies)

Use the get_storage_client() factory function to create client instances:

    >>> from tierfix.stores import get_storage_client
    >>> client = get_storage_client("azure", connection_string="...")
"""

# Backends are imported lazily by the factory.
