"""
Exception types raised while resolving endpoints and fetching Silo tags.
"""

from typing import List, Optional


class SiloTagsError(Exception):
    """Base class for every error raised by silo_tags."""


class UnsupportedChainError(SiloTagsError, ValueError):
    def __init__(self, chain_id: str, supported: List[str]):
        self.chain_id = chain_id
        self.supported = list(supported)
        super().__init__(
            f"Unsupported chain ID: {chain_id!r}. Supported chain IDs are: {', '.join(self.supported)}"
        )


class TransportError(SiloTagsError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP error! status: {status_code}")


class QueryError(SiloTagsError):
    # Subgraph messages stay on the exception and in the logs, not in str(exc).
    def __init__(self, messages: Optional[List[str]] = None):
        self.messages = list(messages or [])
        super().__init__("GraphQL errors occurred")


class NoDataError(SiloTagsError):
    def __init__(self, detail: str = "No data found"):
        super().__init__(detail)


class TagFetchError(SiloTagsError, RuntimeError):
    """Raised by the orchestrator when any page fetch fails."""
