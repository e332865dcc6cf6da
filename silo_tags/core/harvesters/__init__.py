"""
Data harvesting modules for Silo subgraphs.
"""

from silo_tags.core.harvesters.subgraph_harvester import main as subgraph_main

__all__ = [
    "subgraph_main",
]
