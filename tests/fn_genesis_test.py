import flexitest

from envs.base_test import TestnetTestBase
from utils import wait_until_beacon_ready, wait_until_execution_ready


@flexitest.register
class GenesisTest(TestnetTestBase):
    """
    Test that both layers started from the prepared genesis:
    1. the beacon node reports the genesis time and validators root we built
    2. the execution node runs the chain id the deposit config points at
    """

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("basic")

    def main(self, ctx: flexitest.RunContext):
        testnet = ctx.testnet

        beacon_api = ctx.get_service("beacon_0").create_beacon_api()
        wait_until_beacon_ready(beacon_api)
        genesis = beacon_api.genesis()
        self.logger.info(f"Beacon genesis: {genesis}")

        assert genesis.genesis_time == testnet.genesis_time
        assert genesis.genesis_validators_root == testnet.genesis_validators_root
        assert genesis.genesis_time == testnet.eth1_genesis.timestamp + 30

        eth1_rpc = ctx.get_service("execution_0").create_rpc()
        wait_until_execution_ready(eth1_rpc)
        chain_id = int(eth1_rpc.eth_chainId(), 16)
        self.logger.info(f"Execution chain id: {chain_id}")
        assert chain_id == testnet.spec.deposit_chain_id

        return True
