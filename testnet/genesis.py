"""Genesis derivation for both chain layers.

The execution genesis is built first; the consensus `ChainSpec` copies the
execution chain id and network id from it so the two layers agree by
construction.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from .chain_spec import MAINNET, MIN_VALIDATOR_COUNT_FLOOR, ChainSpec
from .config import PRODUCER_CREDENTIALS, Eth1Consensus, TestnetConfig
from .errors import ConfigError, GenesisError
from .keys import KeyDetails

logger = logging.getLogger(__name__)

DEPOSIT_CONTRACT_ADDRESS = "0x4242424242424242424242424242424242424242"

# Window for dependent nodes to start before the beacon chain progresses.
GENESIS_DELAY_SECS = 30

DEFAULT_CHAIN_ID = 1
DEFAULT_NETWORK_ID = 1

EXECUTION_FORK_BLOCKS = (
    "homestead",
    "eip150",
    "eip155",
    "eip158",
    "byzantium",
    "constantinople",
    "petersburg",
    "istanbul",
    "berlin",
    "london",
)

ZERO_HASH = "0x" + "00" * 32
ZERO_ADDRESS = "0x" + "00" * 20
PREFUND_BALANCE = "0x" + "ff" * 12


@dataclass(frozen=True)
class ExecutionGenesis:
    chain_id: int
    network_id: int
    consensus: Eth1Consensus
    terminal_total_difficulty: int
    timestamp: int
    deposit_contract_address: str = DEPOSIT_CONTRACT_ADDRESS
    clique_period: int = 2
    gas_limit: int = 30_000_000

    def signer(self) -> str:
        return PRODUCER_CREDENTIALS[self.consensus]["MINER"]

    def to_params(self) -> dict[str, str]:
        """Start parameters every execution node receives."""
        params = {
            "CHAIN_ID": str(self.chain_id),
            "NETWORK_ID": str(self.network_id),
            "TERMINAL_TOTAL_DIFFICULTY": str(self.terminal_total_difficulty),
            "CONFIG_DEPOSIT_CONTRACT_ADDRESS": self.deposit_contract_address,
        }
        for fork in EXECUTION_FORK_BLOCKS:
            params[f"FORK_{fork.upper()}"] = "0"
        if self.consensus == Eth1Consensus.CLIQUE:
            params["CLIQUE_PERIOD"] = str(self.clique_period)
        return params

    def to_genesis_json(self) -> dict:
        chain_config = {"chainId": self.chain_id}
        for fork in EXECUTION_FORK_BLOCKS:
            chain_config[f"{fork}Block"] = 0
        chain_config["terminalTotalDifficulty"] = self.terminal_total_difficulty

        if self.consensus == Eth1Consensus.CLIQUE:
            chain_config["clique"] = {"period": self.clique_period, "epoch": 30000}
            # vanity, signer list, empty seal
            extra_data = "0x" + "00" * 32 + self.signer() + "00" * 65
            difficulty = "0x1"
        else:
            chain_config["ethash"] = {}
            extra_data = "0x"
            difficulty = hex(0x20000)

        return {
            "config": chain_config,
            "nonce": "0x0",
            "timestamp": hex(self.timestamp),
            "extraData": extra_data,
            "gasLimit": hex(self.gas_limit),
            "difficulty": difficulty,
            "mixHash": ZERO_HASH,
            "coinbase": ZERO_ADDRESS,
            "alloc": {self.signer(): {"balance": PREFUND_BALANCE}},
        }


@dataclass(frozen=True)
class ConsensusGenesisState:
    genesis_time: int
    genesis_validators_root: str
    validator_count: int
    ssz: bytes = field(default=b"", repr=False)


class GenesisStateBuilder(Protocol):
    """Produces a consensus genesis state from the chain configuration and validator keys."""

    def build_state(
        self,
        spec: ChainSpec,
        eth1_genesis: ExecutionGenesis,
        genesis_time: int,
        keys: Sequence[KeyDetails],
    ) -> ConsensusGenesisState: ...


def check_params(config: TestnetConfig):
    numeric = {
        "terminal_total_difficulty": config.terminal_total_difficulty,
        "validator_count": config.validator_count,
        "slot_time": config.slot_time,
        "altair_fork_epoch": config.altair_fork_epoch,
        "merge_fork_epoch": config.merge_fork_epoch,
    }
    for name, value in numeric.items():
        if value < 0:
            raise ConfigError(f"{name} must be non-negative, got {value}")

    if config.validator_count < MIN_VALIDATOR_COUNT_FLOOR:
        raise ConfigError(
            f"validator_count {config.validator_count} is below the genesis floor of "
            f"{MIN_VALIDATOR_COUNT_FLOOR}"
        )


def build_genesis(config: TestnetConfig, now: int | None = None) -> tuple[ExecutionGenesis, ChainSpec]:
    """
    Derive the execution genesis descriptor and the consensus chain spec.

    Args:
        config: Run parameters.
        now: Wall clock time in seconds, taken from the system clock when omitted.

    Returns:
        The execution genesis and the chain spec, agreeing on terminal total
        difficulty, chain id and network id.
    """
    check_params(config)
    if now is None:
        now = int(time.time())

    eth1_genesis = ExecutionGenesis(
        chain_id=DEFAULT_CHAIN_ID,
        network_id=DEFAULT_NETWORK_ID,
        consensus=config.eth1_consensus,
        terminal_total_difficulty=config.terminal_total_difficulty,
        timestamp=int(now),
    )

    # copy the default mainnet config, and make some minimal modifications for testnet usage
    spec = MAINNET.with_overrides(
        deposit_contract_address=eth1_genesis.deposit_contract_address,
        deposit_chain_id=eth1_genesis.chain_id,
        deposit_network_id=eth1_genesis.network_id,
        eth1_follow_distance=1,
        altair_fork_epoch=config.altair_fork_epoch,
        bellatrix_fork_epoch=config.merge_fork_epoch,
        min_genesis_active_validator_count=config.validator_count,
        seconds_per_slot=config.slot_time,
        terminal_total_difficulty=eth1_genesis.terminal_total_difficulty,
    )
    logger.debug(f"Built genesis at timestamp {eth1_genesis.timestamp} ({config.eth1_consensus.value})")
    return eth1_genesis, spec


def consensus_genesis_time(eth1_genesis: ExecutionGenesis) -> int:
    return eth1_genesis.timestamp + GENESIS_DELAY_SECS


def build_consensus_state(
    spec: ChainSpec,
    eth1_genesis: ExecutionGenesis,
    keys: Sequence[KeyDetails],
    builder: GenesisStateBuilder,
) -> ConsensusGenesisState:
    """Run the state builder and check what it produced against the execution genesis."""
    required = spec.min_genesis_active_validator_count
    if len(keys) < required:
        raise GenesisError(f"need {required} validator keys for genesis, only have {len(keys)}")

    genesis_time = consensus_genesis_time(eth1_genesis)
    state = builder.build_state(spec, eth1_genesis, genesis_time, keys)

    if state.genesis_time != genesis_time:
        raise GenesisError(
            f"genesis state has time {state.genesis_time}, expected {genesis_time}"
        )
    if state.validator_count != len(keys):
        raise GenesisError(
            f"genesis state has {state.validator_count} validators, expected {len(keys)}"
        )
    return state


def state_from_ssz(blob: bytes, validator_count: int) -> ConsensusGenesisState:
    """
    Read genesis time and validators root from a serialized BeaconState.

    Both are the first fixed-size fields of the state in every fork:
    `genesis_time` (uint64, little endian) then `genesis_validators_root` (Bytes32).
    """
    if len(blob) < 40:
        raise GenesisError(f"genesis state is too short: {len(blob)} bytes")
    return ConsensusGenesisState(
        genesis_time=int.from_bytes(blob[0:8], "little"),
        genesis_validators_root="0x" + blob[8:40].hex(),
        validator_count=validator_count,
        ssz=blob,
    )
