"""Consensus layer chain configuration.

Field names mirror the upper-case keys of a consensus client `config.yaml`,
lower-cased.
"""

from dataclasses import asdict, dataclass, replace

import yaml

FAR_FUTURE_EPOCH = 2**64 - 1

FORKS = ("phase0", "altair", "bellatrix", "capella")


@dataclass(frozen=True)
class ChainSpec:
    preset_base: str
    config_name: str
    # Transition
    terminal_total_difficulty: int
    terminal_block_hash: str
    terminal_block_hash_activation_epoch: int
    # Genesis
    min_genesis_active_validator_count: int
    min_genesis_time: int
    genesis_fork_version: str
    genesis_delay: int
    # Forking
    altair_fork_version: str
    altair_fork_epoch: int
    bellatrix_fork_version: str
    bellatrix_fork_epoch: int
    capella_fork_version: str
    capella_fork_epoch: int
    # Time parameters
    seconds_per_slot: int
    seconds_per_eth1_block: int
    min_validator_withdrawability_delay: int
    shard_committee_period: int
    eth1_follow_distance: int
    # Validator cycle
    inactivity_score_bias: int
    inactivity_score_recovery_rate: int
    ejection_balance: int
    min_per_epoch_churn_limit: int
    churn_limit_quotient: int
    # Fork choice
    proposer_score_boost: int
    # Deposit contract
    deposit_chain_id: int
    deposit_network_id: int
    deposit_contract_address: str

    def fork_epoch(self, fork: str) -> int:
        if fork == "phase0":
            return 0
        return getattr(self, f"{fork}_fork_epoch")

    def genesis_fork(self) -> str:
        """Latest fork scheduled at epoch 0."""
        return [fork for fork in FORKS if self.fork_epoch(fork) == 0][-1]

    def to_config(self) -> dict:
        """Config as consensus clients expect it, upper-case keys."""
        return {k.upper(): v for k, v in asdict(self).items()}

    def to_yaml(self) -> str:
        return yaml.dump(self.to_config(), default_flow_style=False, sort_keys=False)

    def with_overrides(self, **overrides) -> "ChainSpec":
        return replace(self, **overrides)


MAINNET = ChainSpec(
    preset_base="mainnet",
    config_name="mainnet",
    terminal_total_difficulty=58750000000000000000000,
    terminal_block_hash="0x0000000000000000000000000000000000000000000000000000000000000000",
    terminal_block_hash_activation_epoch=FAR_FUTURE_EPOCH,
    min_genesis_active_validator_count=16384,
    min_genesis_time=1606824000,
    genesis_fork_version="0x00000000",
    genesis_delay=604800,
    altair_fork_version="0x01000000",
    altair_fork_epoch=74240,
    bellatrix_fork_version="0x02000000",
    bellatrix_fork_epoch=144896,
    capella_fork_version="0x03000000",
    capella_fork_epoch=FAR_FUTURE_EPOCH,
    seconds_per_slot=12,
    seconds_per_eth1_block=14,
    min_validator_withdrawability_delay=256,
    shard_committee_period=256,
    eth1_follow_distance=2048,
    inactivity_score_bias=4,
    inactivity_score_recovery_rate=16,
    ejection_balance=16000000000,
    min_per_epoch_churn_limit=4,
    churn_limit_quotient=65536,
    proposer_score_boost=40,
    deposit_chain_id=1,
    deposit_network_id=1,
    deposit_contract_address="0x00000000219ab540356cBB839Cbe05303d7705Fa",
)

# MIN_GENESIS_ACTIVE_VALIDATOR_COUNT of the minimal preset, the smallest any preset allows.
MIN_VALIDATOR_COUNT_FLOOR = 64
