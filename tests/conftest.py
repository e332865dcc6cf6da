"""
Shared fakes for the subgraph HTTP layer.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        return self._payload


class FakeSession:
    """Replays queued responses and records every POST it receives."""

    def __init__(self, responses: List[Any]):
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, json: Optional[dict] = None, headers: Optional[dict] = None,
             timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        nxt = self._responses.pop(0)
        if isinstance(nxt, BaseException):
            raise nxt
        return nxt


def silo_item(idx: int, name: Optional[str] = None, ts: Optional[int] = None) -> Dict[str, Any]:
    return {
        "id": f"0x{idx:040x}",
        "name": f"Token{idx}" if name is None else name,
        "createdTimestamp": str(idx if ts is None else ts),
    }


def silos_page(items: List[Dict[str, Any]]) -> FakeResponse:
    return FakeResponse({"data": {"silos": items}})


@pytest.fixture()
def make_session():
    def _make(*responses: Any) -> FakeSession:
        return FakeSession(list(responses))
    return _make
