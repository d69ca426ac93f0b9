import httpx

from .types import BeaconGenesis, BlockHeader, NodeIdentity

DEFAULT_TIMEOUT = 10.0


class BeaconApiClient:
    """Client for the subset of the standard beacon node REST API the tests need."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._pre_call_hook = None

    def _get(self, path: str) -> dict:
        if self._pre_call_hook is not None:
            self._pre_call_hook(path)
        resp = httpx.get(f"{self.base_url}{path}", timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()["data"]

    def node_identity(self) -> NodeIdentity:
        return NodeIdentity.from_dict(self._get("/eth/v1/node/identity"))

    def genesis(self) -> BeaconGenesis:
        return BeaconGenesis.from_dict(self._get("/eth/v1/beacon/genesis"))

    def head_header(self) -> BlockHeader:
        return BlockHeader.from_dict(self._get("/eth/v1/beacon/headers/head"))

    def peer_count(self) -> int:
        return int(self._get("/eth/v1/node/peer_count")["connected"])
