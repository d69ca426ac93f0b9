"""Handles on started nodes.

A handle wraps the service returned by the provisioner. The service carries
its addresses in `props` (`name`, `ip`) and exposes `create_rpc()` /
`create_beacon_api()` for querying the node from the harness.
"""

from .config import PORT_ENGINE_RPC, PORT_EXECUTION_P2P, PORT_EXECUTION_RPC
from .errors import AddressUnavailable
from .keys import KeyTranche


class NodeHandle:
    kind = "node"

    def __init__(self, client):
        self.client = client

    @property
    def name(self) -> str:
        return self.client.props.get("name", self.kind)

    @property
    def ip(self) -> str:
        ip = self.client.props.get("ip")
        if not ip:
            raise AddressUnavailable(f"{self.kind} {self.name} has no address yet")
        return ip

    def _check_running(self, what: str):
        if not self.client.check_status():
            raise AddressUnavailable(f"{self.kind} {self.name} is not running, no {what}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ExecutionNode(NodeHandle):
    kind = "execution node"

    def enode_url(self) -> str:
        """Discovery address, with the host replaced by the node's network address."""
        self._check_running("enode")
        try:
            info = self.client.create_rpc().admin_nodeInfo()
            enode = info["enode"]
        except Exception as e:
            raise AddressUnavailable(f"{self.kind} {self.name} has no enode yet: {e}") from e

        node_id = enode.split("@", 1)[0]
        return f"{node_id}@{self.ip}:{PORT_EXECUTION_P2P}"

    def user_rpc_address(self) -> str:
        self._check_running("user RPC")
        return f"http://{self.ip}:{PORT_EXECUTION_RPC}"

    def engine_rpc_address(self) -> str:
        self._check_running("engine RPC")
        return f"http://{self.ip}:{PORT_ENGINE_RPC}"


class BeaconNode(NodeHandle):
    kind = "beacon node"

    def enr(self) -> str:
        self._check_running("ENR")
        try:
            identity = self.client.create_beacon_api().node_identity()
        except Exception as e:
            raise AddressUnavailable(f"{self.kind} {self.name} has no ENR yet: {e}") from e
        if not identity.enr:
            raise AddressUnavailable(f"{self.kind} {self.name} reported an empty ENR")
        return identity.enr

    def api_address(self) -> str:
        self._check_running("beacon API")
        return self.ip


class ValidatorClient(NodeHandle):
    kind = "validator client"

    def __init__(self, client, tranche: KeyTranche):
        super().__init__(client)
        self.tranche = tranche
