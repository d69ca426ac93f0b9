"""Node start state machine.

Which branch a start takes depends only on how many nodes of the role the
testnet already has: the first node of a layer anchors discovery, every later
node bootstraps off that first node. Bootstrapping always targets node 0, not
the latest or a random one, so the topology stays deterministic.
"""

import logging
from typing import Protocol, Sequence

from .bundle import ConfigBundle, bundle
from .config import PRODUCER_CREDENTIALS, ClientDefinition, Eth1Consensus, NodeRole
from .errors import AddressUnavailable, ConfigError, DependencyError, NodeIndexError
from .keys import keys_bundle
from .nodes import BeaconNode, ExecutionNode, ValidatorClient
from .prepared import PreparedTestnet
from .state import Testnet

logger = logging.getLogger(__name__)


class Provisioner(Protocol):
    """Starts a node image and returns the running service, or raises `ProvisionError`."""

    def start_client(self, role: NodeRole, client: ClientDefinition, opts: ConfigBundle): ...


def is_first(nodes: list) -> bool:
    return len(nodes) == 0


def check_index(role: str, kind: str, index: int, available: int):
    if index < 0 or index >= available:
        raise NodeIndexError(role, kind, index, available)


class BootstrapSequencer:
    """Starts nodes one at a time, wiring each one to the nodes it depends on."""

    def __init__(self, prepared: PreparedTestnet, provisioner: Provisioner):
        self.prepared = prepared
        self.provisioner = provisioner

    def _start(self, role: NodeRole, client: ClientDefinition, opts: ConfigBundle):
        logger.info(f"Starting {role.value} node: {client.name} ({client.version})")
        return self.provisioner.start_client(role, client, opts)

    def start_execution_node(
        self, testnet: Testnet, client: ClientDefinition, consensus: Eth1Consensus
    ) -> ExecutionNode:
        if is_first(testnet.eth1):
            opts = bundle(self.prepared.execution_opts, producer_params(consensus))
        else:
            opts = bundle(self.prepared.execution_opts, {"BOOTNODE": execution_bootnode(testnet)})

        node = ExecutionNode(self._start(NodeRole.EXECUTION, client, opts))
        testnet.eth1.append(node)
        return node

    def start_beacon_node(
        self, testnet: Testnet, client: ClientDefinition, eth1_indices: Sequence[int]
    ) -> BeaconNode:
        for index in eth1_indices:
            check_index("beacon node", "eth1 nodes", index, len(testnet.eth1))

        # Hook up beacon node to (maybe multiple) eth1 nodes
        addrs = []
        engine_addrs = []
        for index in eth1_indices:
            eth1_node = testnet.eth1[index]
            try:
                addrs.append(eth1_node.user_rpc_address())
                engine_addrs.append(eth1_node.engine_rpc_address())
            except AddressUnavailable as e:
                raise DependencyError(
                    f"eth1 node {index} used for beacon node without available RPC: {e}"
                ) from e

        sources = [
            self.prepared.beacon_opts,
            {
                "ETH1_RPC_ADDRS": ",".join(addrs),
                "ETH1_ENGINE_RPC_ADDRS": ",".join(engine_addrs),
            },
        ]
        if not is_first(testnet.beacons):
            sources.append({"BOOTNODE_ENRS": beacon_bootnode(testnet)})

        node = BeaconNode(self._start(NodeRole.BEACON, client, bundle(*sources)))
        testnet.beacons.append(node)
        return node

    def start_validator_client(
        self, testnet: Testnet, client: ClientDefinition, bn_index: int, tranche_index: int
    ) -> ValidatorClient:
        tranches = self.prepared.key_tranches
        check_index("validator client", "beacon nodes", bn_index, len(testnet.beacons))
        check_index("validator client", "key tranches", tranche_index, len(tranches))

        bn = testnet.beacons[bn_index]
        try:
            bn_api = bn.api_address()
        except AddressUnavailable as e:
            raise DependencyError(f"beacon node {bn_index} has no API for validator client: {e}") from e

        tranche = tranches[tranche_index]
        opts = bundle(
            self.prepared.validator_opts,
            lambda: keys_bundle(tranche),
            {"BN_API_IP": bn_api},
        )

        vc = ValidatorClient(self._start(NodeRole.VALIDATOR, client, opts), tranche)
        testnet.validators.append(vc)
        return vc


def producer_params(consensus: Eth1Consensus) -> dict[str, str]:
    """Block producer credentials for the first execution node."""
    try:
        return dict(PRODUCER_CREDENTIALS[consensus])
    except KeyError as e:
        raise ConfigError(f"no producer credentials for consensus {consensus}") from e


def execution_bootnode(testnet: Testnet) -> str:
    try:
        return testnet.eth1[0].enode_url()
    except AddressUnavailable as e:
        raise DependencyError(f"failed to get eth1 bootnode URL: {e}") from e


def beacon_bootnode(testnet: Testnet) -> str:
    try:
        return testnet.beacons[0].enr()
    except AddressUnavailable as e:
        raise DependencyError(f"failed to get ENR as bootnode for beacon node: {e}") from e
