from constants import default_testnet_config

from .base_env import BaseTestnetEnv


class BasicEnv(BaseTestnetEnv):
    """Environment running a single node group: one execution node, one beacon node, one validator client."""

    def __init__(self):
        super().__init__(default_testnet_config(num_nodes=1))
