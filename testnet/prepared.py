import json
import logging
import os
from dataclasses import dataclass
from typing import Sequence

from .bundle import ConfigBundle, bundle
from .chain_spec import ChainSpec
from .config import (
    PORT_BEACON_API,
    PORT_BEACON_GRPC,
    PORT_EXECUTION_RPC,
    PORT_METRICS,
    TestnetConfig,
)
from .errors import GenesisError
from .genesis import (
    ConsensusGenesisState,
    ExecutionGenesis,
    GenesisStateBuilder,
    build_consensus_state,
    build_genesis,
    consensus_genesis_time,
)
from .keys import KeyDetails, KeyTranche, key_tranches
from .state import Testnet

logger = logging.getLogger(__name__)


def common_params(spec: ChainSpec) -> dict[str, str]:
    """Parameters shared by beacon nodes and validator clients."""
    return {
        "BN_API_PORT": str(PORT_BEACON_API),
        "BN_GRPC_PORT": str(PORT_BEACON_GRPC),
        "METRICS_PORT": str(PORT_METRICS),
        "CONFIG_DEPOSIT_CONTRACT_ADDRESS": spec.deposit_contract_address,
    }


def eth1_bundle(eth1_genesis: ExecutionGenesis) -> ConfigBundle:
    genesis_json = json.dumps(eth1_genesis.to_genesis_json(), indent=2)
    return ConfigBundle(files={"genesis.json": genesis_json.encode()})


def consensus_configs_bundle(spec: ChainSpec) -> ConfigBundle:
    return ConfigBundle(files={"config.yaml": spec.to_yaml().encode()})


def state_bundle(state: ConsensusGenesisState) -> ConfigBundle:
    return ConfigBundle(files={"genesis.ssz": state.ssz})


def execution_bundle(eth1_genesis: ExecutionGenesis) -> ConfigBundle:
    return bundle(
        eth1_genesis.to_params(),
        lambda: eth1_bundle(eth1_genesis),
        {
            "CHECK_LIVE_PORT": str(PORT_EXECUTION_RPC),
            "LOGLEVEL": os.getenv("LOGLEVEL", "3"),
        },
    )


def beacon_bundle(
    spec: ChainSpec, eth1_genesis: ExecutionGenesis, state: ConsensusGenesisState
) -> ConfigBundle:
    return bundle(
        common_params(spec),
        {
            "CHECK_LIVE_PORT": str(PORT_BEACON_API),
            "MERGE_ENABLED": "1",
            "ETH1_GENESIS_TIME": str(eth1_genesis.timestamp),
            "GENESIS_FORK": spec.genesis_fork(),
        },
        lambda: state_bundle(state),
        lambda: consensus_configs_bundle(spec),
    )


def validator_bundle(spec: ChainSpec) -> ConfigBundle:
    return bundle(
        common_params(spec),
        {"CHECK_LIVE_PORT": "0"},
        lambda: consensus_configs_bundle(spec),
    )


@dataclass(frozen=True)
class PreparedTestnet:
    """All the options for starting nodes, ready to build the network."""

    spec: ChainSpec
    eth1_genesis: ExecutionGenesis
    eth2_genesis: ConsensusGenesisState
    # kept to fabricate extra signed messages during a test
    keys: tuple[KeyDetails, ...]
    key_tranches: tuple[KeyTranche, ...]
    execution_opts: ConfigBundle
    beacon_opts: ConfigBundle
    validator_opts: ConfigBundle

    def create_testnet(self) -> Testnet:
        return Testnet(
            genesis_time=self.eth2_genesis.genesis_time,
            genesis_validators_root=self.eth2_genesis.genesis_validators_root,
            spec=self.spec,
            eth1_genesis=self.eth1_genesis,
        )


def check_cross_layer(spec: ChainSpec, eth1_genesis: ExecutionGenesis, state: ConsensusGenesisState):
    if spec.terminal_total_difficulty != eth1_genesis.terminal_total_difficulty:
        raise GenesisError(
            f"terminal total difficulty mismatch: spec {spec.terminal_total_difficulty}, "
            f"execution genesis {eth1_genesis.terminal_total_difficulty}"
        )
    if spec.deposit_chain_id != eth1_genesis.chain_id:
        raise GenesisError(
            f"deposit chain id {spec.deposit_chain_id} != chain id {eth1_genesis.chain_id}"
        )
    if spec.deposit_network_id != eth1_genesis.network_id:
        raise GenesisError(
            f"deposit network id {spec.deposit_network_id} != network id {eth1_genesis.network_id}"
        )
    if state.genesis_time != consensus_genesis_time(eth1_genesis):
        raise GenesisError(
            f"consensus genesis time {state.genesis_time} is not offset from "
            f"execution genesis {eth1_genesis.timestamp}"
        )


def prepare_testnet(
    config: TestnetConfig,
    keys: Sequence[KeyDetails],
    state_builder: GenesisStateBuilder,
    now: int | None = None,
) -> PreparedTestnet:
    """
    Build all artifacts required to start a testnet.

    Args:
        config: Run parameters; one key tranche is made per node definition.
        keys: The full validator credential pool.
        state_builder: Collaborator producing the consensus genesis state.
        now: Execution genesis timestamp, defaults to the current time.
    """
    eth1_genesis, spec = build_genesis(config, now)
    tranches = key_tranches(keys, len(config.nodes))
    state = build_consensus_state(spec, eth1_genesis, keys, state_builder)
    check_cross_layer(spec, eth1_genesis, state)

    logger.info(
        f"Prepared testnet: eth1 genesis {eth1_genesis.timestamp}, eth2 genesis "
        f"{state.genesis_time}, {len(keys)} validators in {len(tranches)} tranches"
    )
    return PreparedTestnet(
        spec=spec,
        eth1_genesis=eth1_genesis,
        eth2_genesis=state,
        keys=tuple(keys),
        key_tranches=tuple(tranches),
        execution_opts=execution_bundle(eth1_genesis),
        beacon_opts=beacon_bundle(spec, eth1_genesis, state),
        validator_opts=validator_bundle(spec),
    )
