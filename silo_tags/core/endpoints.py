"""
Subgraph endpoints for the supported chains.

Every template carries the literal ``[api-key]`` placeholder that
``prepare_url`` replaces with the caller's Graph gateway key.
"""

import re
from types import MappingProxyType
from typing import List, Mapping
from urllib.parse import quote

from silo_tags.core.errors import UnsupportedChainError

API_KEY_PLACEHOLDER = "[api-key]"

_GATEWAY = "https://gateway.thegraph.com/api/" + API_KEY_PLACEHOLDER + "/subgraphs/id/"

# chain id -> Silo v1 subgraph deployment on the decentralized network
CHAIN_ENDPOINTS: Mapping[str, str] = MappingProxyType({
    "1": _GATEWAY + "GTEyHhRmhRRJkQfrDWsapcZ8sBKAka4GFej6gn3BpJNq",
    "10": _GATEWAY + "HVhUwNTKRhTwhsPBDWnyGrCaU4yWvXmY6x7ELGzVuWdS",
    "8453": _GATEWAY + "7MhGSuY4zD2M5FNqGrH8r4VnMYt7ZN5RY4KyQ2yEAxLv",
    "42161": _GATEWAY + "2ufoztRpybsgogPVW6j9NTn1JmBWFYPKbP7pAabizADU",
})

_NUMERIC = re.compile(r"^\d+$")

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def supported_chain_ids() -> List[str]:
    return list(CHAIN_ENDPOINTS.keys())


def prepare_url(chain_id: str, api_key: str) -> str:
    """Return the endpoint for ``chain_id`` with the encoded ``api_key`` filled in."""
    if not isinstance(chain_id, str) or not _NUMERIC.match(chain_id) or chain_id not in CHAIN_ENDPOINTS:
        raise UnsupportedChainError(chain_id, supported_chain_ids())
    template = CHAIN_ENDPOINTS[chain_id]
    return template.replace(API_KEY_PLACEHOLDER, quote(str(api_key), safe=_URI_COMPONENT_SAFE))
