import logging

import flexitest

from testnet import BootstrapSequencer, PreparedTestnet, Testnet, TestnetConfig, prepare_testnet
from utils.genesis_tool import Eth2TestnetGenesis
from utils.utils import VALIDATOR_KEYS_PATH, read_validator_keys

logger = logging.getLogger(__name__)


class TestnetLiveEnv(flexitest.LiveEnv):
    """
    Live environment that also exposes the prepared artifacts and the started topology.
    """

    __test__ = False

    def __init__(self, svcs, prepared: PreparedTestnet, testnet: Testnet):
        super().__init__(svcs)
        self.prepared = prepared
        self.testnet = testnet


class BaseTestnetEnv(flexitest.EnvConfig):
    """Base environment class: prepares genesis and starts node groups in dependency order."""

    def __init__(self, config: TestnetConfig, keys_path=VALIDATOR_KEYS_PATH):
        super().__init__()
        self.config = config
        self.keys_path = keys_path

    def prepare(self, ectx: flexitest.EnvContext) -> PreparedTestnet:
        """Build genesis artifacts, with the genesis tool working in its own service dir."""
        keys = read_validator_keys(self.keys_path)
        workdir = ectx.make_service_dir("_genesis")
        return prepare_testnet(self.config, keys, Eth2TestnetGenesis(workdir))

    def start_nodes(self, ectx: flexitest.EnvContext, prepared: PreparedTestnet) -> Testnet:
        """
        Start every node group: all execution nodes first, then a beacon node on
        top of each, then one validator client per beacon node with the tranche
        of the same index.
        """
        testnet = prepared.create_testnet()
        sequencer = BootstrapSequencer(prepared, ectx.get_factory("client"))

        for node in self.config.nodes:
            sequencer.start_execution_node(testnet, node.execution_client, self.config.eth1_consensus)

        for i, node in enumerate(self.config.nodes):
            sequencer.start_beacon_node(testnet, node.beacon_client, [i])

        for i, node in enumerate(self.config.nodes):
            sequencer.start_validator_client(testnet, node.validator_client, i, i)

        logger.info(
            f"Started {len(testnet.eth1)} execution nodes, {len(testnet.beacons)} beacon nodes, "
            f"{len(testnet.validators)} validator clients"
        )
        return testnet

    def init(self, ectx: flexitest.EnvContext) -> flexitest.LiveEnv:
        prepared = self.prepare(ectx)
        testnet = self.start_nodes(ectx, prepared)
        return TestnetLiveEnv(testnet.services(), prepared, testnet)
