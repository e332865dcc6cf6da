"""
Core functionality for Silo tag harvesting.
"""

from silo_tags.core.utils import (
    TAG_FIELDS,
    OutputTag,
    SiloRecord,
    build_tag,
    is_valid_name,
    transform_silos,
    truncate_name,
)

__all__ = [
    "TAG_FIELDS",
    "OutputTag",
    "SiloRecord",
    "build_tag",
    "is_valid_name",
    "transform_silos",
    "truncate_name",
]
