"""
subgraph_harvester.py — Silo v1 contract tag harvester
------------------------------------------------------
Pulls every Silo created on a supported chain from its subgraph and turns it
into a public contract tag.

Workflow
--------
1) Resolve the gateway endpoint for the chain and inject the API key.
2) Page through ``silos`` ordered by ``createdTimestamp`` (1000 per page),
   using the last page's highest timestamp as the next lower bound.
3) Validate and map each page to tags; stop on the first short page.
4) (CLI only) write the tags to CSV / JSON / pickle via pandas.

Configuration knobs (``silo_tags_config.yml``)
----------------------------------------------
- ``chain_id``: one of 1, 10, 8453, 42161.
- ``api_key``: Graph gateway key; ``GRAPH_API_KEY`` in the env wins.
- ``out_path``: output file, ``{chain}`` is substituted.
- ``request_timeout``: seconds per request, ``null`` to wait forever.
- ``show_progress``: tqdm page counter.
- ``log_level``: standard logging level name.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import requests
import yaml
from requests.adapters import HTTPAdapter
from tqdm import tqdm

from silo_tags.core.endpoints import prepare_url
from silo_tags.core.errors import NoDataError, QueryError, TagFetchError, TransportError
from silo_tags.core.utils import TAG_FIELDS, OutputTag, SiloRecord, transform_silos

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000

# ---------------- Configuration ----------------

CONFIG_PATH = os.environ.get("SILO_TAGS_CONFIG_PATH", "silo_tags_config.yml")

DEFAULT_CONFIG: Dict[str, Any] = {
    "chain_id": "1",
    "api_key": "",
    "out_path": "data/silo_tags_{chain}.csv",
    "request_timeout": None,
    "show_progress": True,
    "log_level": "INFO",
}


def load_config(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        print(f"Configuration file {path!r} not found. Using defaults.")
        cfg = DEFAULT_CONFIG.copy()
    else:
        with open(path, "r") as fh:
            loaded = yaml.safe_load(fh) or {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a YAML mapping.")
        cfg = DEFAULT_CONFIG.copy()
        cfg.update(loaded)

    env_key = os.environ.get("GRAPH_API_KEY", "").strip()
    if env_key:
        cfg["api_key"] = env_key
    cfg["api_key"] = str(cfg.get("api_key") or "").strip()
    if not cfg["api_key"]:
        raise ValueError("No API key configured: set 'api_key' or export GRAPH_API_KEY.")

    # YAML reads an unquoted 1 as int; chain ids are strings everywhere else
    if isinstance(cfg["chain_id"], bool) or not isinstance(cfg["chain_id"], (str, int)):
        raise ValueError("Config field 'chain_id' must be a chain id such as '1' or '42161'.")
    cfg["chain_id"] = str(cfg["chain_id"]).strip()

    if cfg["request_timeout"] is not None:
        cfg["request_timeout"] = float(cfg["request_timeout"])
        if cfg["request_timeout"] <= 0:
            raise ValueError("request_timeout must be positive (or null for no timeout).")

    cfg["out_path"] = str(cfg["out_path"]).format(chain=cfg["chain_id"])
    cfg["show_progress"] = bool(cfg["show_progress"])
    cfg["log_level"] = str(cfg["log_level"]).upper()
    return cfg


# ---------------- Graph helpers ----------------

Q_SILO_PAGE = """
query GetSilos($lastTimestamp: BigInt!) {
  silos(first: %d, orderBy: createdTimestamp, orderDirection: asc,
        where: { createdTimestamp_gt: $lastTimestamp }) {
    id
    name
    createdTimestamp
  }
}
""" % PAGE_SIZE

HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

_SESSION_LOCAL = threading.local()


def _get_session() -> requests.Session:
    s = getattr(_SESSION_LOCAL, "session", None)
    if s is None:
        s = requests.Session()
        adapter = HTTPAdapter(pool_connections=4, pool_maxsize=4)
        s.mount("http://", adapter)
        s.mount("https://", adapter)
        _SESSION_LOCAL.session = s
    return s


def fetch_silo_page(url: str, last_timestamp: int,
                    session: Optional[requests.Session] = None,
                    timeout: Optional[float] = None) -> List[SiloRecord]:
    """
    Fetch one page of silos created strictly after ``last_timestamp``.

    No retries: any failure is raised to the caller.
    """
    payload = {"query": Q_SILO_PAGE, "variables": {"lastTimestamp": int(last_timestamp)}}
    r = (session or _get_session()).post(url, json=payload, headers=HEADERS, timeout=timeout)
    if not r.ok:
        raise TransportError(r.status_code)

    body = r.json()
    errors = body.get("errors") if isinstance(body, dict) else None
    if errors:
        messages = [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]
        for message in messages:
            logger.error(f"GraphQL error: {message}")
        raise QueryError(messages)

    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict) or not isinstance(data.get("silos"), list):
        raise NoDataError()

    return [SiloRecord.from_subgraph(item) for item in data["silos"]]


# ---------------- Orchestration ----------------

def return_tags(chain_id: str, api_key: str,
                session: Optional[requests.Session] = None,
                timeout: Optional[float] = None,
                progress: bool = False) -> List[OutputTag]:
    """
    Return tags for every valid Silo on ``chain_id``.

    An unsupported chain raises ``UnsupportedChainError`` before any request.
    Any failure while paging raises ``TagFetchError``; tags gathered before
    the failure are dropped.
    """
    url = prepare_url(chain_id, api_key)

    tags: List[OutputTag] = []
    last_timestamp = 0
    pb = tqdm(total=None, desc="Silo pages", dynamic_ncols=True, leave=False, disable=not progress)
    try:
        while True:
            try:
                page = fetch_silo_page(url, last_timestamp, session=session, timeout=timeout)
            except Exception as exc:
                message = str(exc)
                if not message:
                    raise TagFetchError("An unknown error occurred while fetching data.") from exc
                raise TagFetchError(f"Failed fetching data: {message}") from exc

            tags.extend(transform_silos(chain_id, page))
            pb.update(1)
            pb.set_postfix(silos=len(tags))
            logger.debug(f"Fetched {len(page)} silos after timestamp {last_timestamp}")

            if len(page) != PAGE_SIZE:
                break
            last_timestamp = max(record.created_timestamp for record in page)
    finally:
        pb.close()

    logger.info(f"Collected {len(tags)} Silo tags for chain {chain_id}")
    return tags


# Name used by the external tag-collection framework
returnTags = return_tags


# ---------------- Output ----------------

def write_tags(tags: Sequence[OutputTag], path: str) -> str:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame(list(tags), columns=list(TAG_FIELDS))

    suffix = out_path.suffix.lower()
    if suffix == ".csv":
        df.to_csv(out_path, index=False)
    elif suffix == ".json":
        df.to_json(out_path, orient="records", indent=2)
    else:
        df.to_pickle(out_path)
    return str(out_path)


# ---------------- Driver ----------------

def main() -> None:
    cfg = load_config(CONFIG_PATH)
    logging.basicConfig(
        level=getattr(logging, cfg["log_level"], logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    chain_id = cfg["chain_id"]
    print(f"Starting Silo tag fetch for chain {chain_id}")
    tags = return_tags(
        chain_id,
        cfg["api_key"],
        timeout=cfg["request_timeout"],
        progress=cfg["show_progress"],
    )
    path = write_tags(tags, cfg["out_path"])
    print(f"  ✓ Wrote {len(tags):,} tags → {path}")


if __name__ == "__main__":
    main()
