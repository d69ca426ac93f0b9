from constants import TESTNET_SIZE, default_testnet_config
from testnet import Eth1Consensus

from .base_env import BaseTestnetEnv


class TestnetEnv(BaseTestnetEnv):
    """Env running a configurable number of node groups, all bootstrapping off the first one."""

    __test__ = False

    def __init__(self, num_nodes=TESTNET_SIZE, eth1_consensus=Eth1Consensus.CLIQUE):
        super().__init__(default_testnet_config(num_nodes, eth1_consensus))
