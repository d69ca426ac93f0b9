import json

import pytest
import yaml

from conftest import GENESIS_ROOT, NOW, FakeStateBuilder, make_config, make_keys
from testnet import ConfigError, Eth1Consensus, GenesisError, prepare_testnet
from testnet.chain_spec import MIN_VALIDATOR_COUNT_FLOOR


@pytest.fixture
def prepared(keys, state_builder):
    return prepare_testnet(make_config(num_nodes=2), keys, state_builder, now=NOW)


def test_prepared_artifacts(prepared, keys):
    assert prepared.eth1_genesis.timestamp == NOW
    assert prepared.eth2_genesis.genesis_time == NOW + 30
    assert prepared.eth2_genesis.genesis_validators_root == GENESIS_ROOT
    assert prepared.keys == tuple(keys)
    assert [len(t) for t in prepared.key_tranches] == [32, 32]


def test_whole_pool_goes_into_genesis(keys):
    builder = FakeStateBuilder()
    prepare_testnet(make_config(num_nodes=3), keys, builder, now=NOW)
    assert builder.calls[0][3] == 64


def test_execution_opts(prepared):
    opts = prepared.execution_opts
    assert opts["CHAIN_ID"] == "1"
    assert opts["NETWORK_ID"] == "1"
    assert opts["TERMINAL_TOTAL_DIFFICULTY"] == "0"
    assert opts["CHECK_LIVE_PORT"] == "8545"
    assert "LOGLEVEL" in opts

    genesis = json.loads(opts.files["genesis.json"])
    assert genesis["timestamp"] == hex(NOW)
    # producer credentials are only added for the first node
    assert "MINER" not in opts
    assert "CLIQUE_PRIVATEKEY" not in opts


def test_beacon_opts(prepared):
    opts = prepared.beacon_opts
    assert opts["BN_API_PORT"] == "4000"
    assert opts["BN_GRPC_PORT"] == "4001"
    assert opts["METRICS_PORT"] == "8080"
    assert opts["CHECK_LIVE_PORT"] == "4000"
    assert opts["MERGE_ENABLED"] == "1"
    assert opts["ETH1_GENESIS_TIME"] == str(NOW)
    assert opts["GENESIS_FORK"] == "bellatrix"
    assert opts["CONFIG_DEPOSIT_CONTRACT_ADDRESS"] == prepared.spec.deposit_contract_address
    assert opts.files["genesis.ssz"] == prepared.eth2_genesis.ssz

    config = yaml.safe_load(opts.files["config.yaml"])
    assert config["MIN_GENESIS_ACTIVE_VALIDATOR_COUNT"] == 64


def test_validator_opts(prepared):
    opts = prepared.validator_opts
    assert opts["CHECK_LIVE_PORT"] == "0"
    assert opts["BN_API_PORT"] == "4000"
    assert "config.yaml" in opts.files
    assert "genesis.ssz" not in opts.files
    assert "BN_API_IP" not in opts


@pytest.mark.parametrize(
    "altair, merge, fork",
    [(0, 0, "bellatrix"), (0, 4, "altair"), (2, 4, "phase0")],
)
def test_genesis_fork_matches_genesis_tool(keys, altair, merge, fork):
    builder = FakeStateBuilder()
    config = make_config(altair_fork_epoch=altair, merge_fork_epoch=merge)
    prepared = prepare_testnet(config, keys, builder, now=NOW)

    # beacon nodes start on the same fork the genesis state was built for
    (spec, _, _, _) = builder.calls[0]
    assert prepared.beacon_opts["GENESIS_FORK"] == spec.genesis_fork() == fork


def test_create_testnet(prepared):
    testnet = prepared.create_testnet()
    assert testnet.genesis_time == NOW + 30
    assert testnet.genesis_validators_root == GENESIS_ROOT
    assert testnet.spec is prepared.spec
    assert testnet.eth1 == testnet.beacons == testnet.validators == []

    # every call gives a fresh record
    testnet.eth1.append(object())
    assert prepared.create_testnet().eth1 == []


def test_prepare_is_deterministic(keys):
    a = prepare_testnet(make_config(), keys, FakeStateBuilder(), now=NOW)
    b = prepare_testnet(make_config(), keys, FakeStateBuilder(), now=NOW)
    assert a == b


def test_ethash_prepare(keys, state_builder):
    prepared = prepare_testnet(make_config(consensus=Eth1Consensus.ETHASH), keys, state_builder, now=NOW)
    assert "CLIQUE_PERIOD" not in prepared.execution_opts


def test_not_enough_keys(state_builder):
    with pytest.raises(GenesisError):
        prepare_testnet(make_config(validator_count=MIN_VALIDATOR_COUNT_FLOOR), make_keys(8), state_builder, now=NOW)


def test_no_nodes(keys, state_builder):
    with pytest.raises(ConfigError):
        prepare_testnet(make_config(num_nodes=0), keys, state_builder, now=NOW)


def test_builder_failure_propagates(keys):
    class BrokenBuilder:
        def build_state(self, spec, eth1_genesis, genesis_time, keys):
            raise GenesisError("tool exited with 1")

    with pytest.raises(GenesisError, match="tool exited"):
        prepare_testnet(make_config(), keys, BrokenBuilder(), now=NOW)
