"""Mock implementations for cloud SDK testing.

This module provides in-memory mocks that match the Protocol definitions,
allowing tests to run without network access.
"""

from tests.mocks.cloud_mocks import (
    MockAzureBlobClient,
    MockAzureBlobProperties,
    MockAzureBlobServiceClient,
    MockAzureContainerClient,
    create_mock_azure_client,
)

__all__ = [
    "MockAzureBlobClient",
    "MockAzureBlobProperties",
    "MockAzureBlobServiceClient",
    "MockAzureContainerClient",
    "create_mock_azure_client",
]
