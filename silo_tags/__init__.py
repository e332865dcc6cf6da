"""
Silo Tags

Harvests Silo v1 contracts from their subgraphs and publishes them as
public contract tags.
"""

__version__ = "1.0.0"

from silo_tags.core.endpoints import CHAIN_ENDPOINTS, prepare_url
from silo_tags.core.errors import (
    NoDataError,
    QueryError,
    SiloTagsError,
    TagFetchError,
    TransportError,
    UnsupportedChainError,
)
from silo_tags.core.harvesters.subgraph_harvester import returnTags, return_tags

__all__ = [
    "__version__",
    "CHAIN_ENDPOINTS",
    "prepare_url",
    "return_tags",
    "returnTags",
    "SiloTagsError",
    "UnsupportedChainError",
    "TransportError",
    "QueryError",
    "NoDataError",
    "TagFetchError",
]
