"""
Validation, formatting and tag construction for Silo records.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple, TypedDict

from silo_tags.core.errors import NoDataError

logger = logging.getLogger(__name__)

PROJECT_NAME = "Silo v1"
WEBSITE_LINK = "https://silo.finance"
NAME_SUFFIX = " Silo"

MAX_NAME_LENGTH = 45
ELLIPSIS = "..."

_TAG_PATTERN = re.compile(r"<[^>]*>")

# Column order of every exported tag
TAG_FIELDS: Tuple[str, ...] = (
    "Contract Address",
    "Public Name Tag",
    "Project Name",
    "UI/Website Link",
    "Public Note",
)

OutputTag = TypedDict(
    "OutputTag",
    {
        "Contract Address": str,
        "Public Name Tag": str,
        "Project Name": str,
        "UI/Website Link": str,
        "Public Note": str,
    },
)


@dataclass(frozen=True)
class SiloRecord:
    id: str
    name: str
    created_timestamp: int

    @classmethod
    def from_subgraph(cls, item: Dict[str, Any]) -> "SiloRecord":
        """Build a record from one ``silos`` item as returned by the subgraph."""
        try:
            return cls(
                id=str(item["id"]),
                name="" if item["name"] is None else str(item["name"]),
                created_timestamp=int(item["createdTimestamp"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise NoDataError(f"Malformed silo record: {item!r}") from exc


def is_valid_name(name: str) -> bool:
    if not name or not name.strip():
        return False
    return _TAG_PATTERN.search(name) is None


def truncate_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    if len(name) <= max_length:
        return name
    return name[: max_length - len(ELLIPSIS)] + ELLIPSIS


def contract_address(chain_id: str, silo_id: str) -> str:
    return f"eip155:{chain_id}:{silo_id}"


def build_tag(chain_id: str, record: SiloRecord) -> OutputTag:
    return {
        "Contract Address": contract_address(chain_id, record.id),
        "Public Name Tag": truncate_name(record.name) + NAME_SUFFIX,
        "Project Name": PROJECT_NAME,
        "UI/Website Link": WEBSITE_LINK,
        "Public Note": f"The liquidity pool contract for the {record.name} silo on {PROJECT_NAME}.",
    }


def transform_silos(chain_id: str, records: Iterable[SiloRecord]) -> List[OutputTag]:
    """
    Map one page of records to tags.

    Records whose name is blank or contains markup are skipped; all of them
    are reported in a single log line for the page.
    """
    tags: List[OutputTag] = []
    rejected: List[str] = []
    for record in records:
        if not is_valid_name(record.name):
            rejected.append(f"{record.id} (name: {record.name!r})")
            continue
        tags.append(build_tag(chain_id, record))

    if rejected:
        logger.warning(f"Skipping {len(rejected)} silo(s) with invalid names: {', '.join(rejected)}")
    return tags
