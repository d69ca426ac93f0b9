from .bundle import ConfigBundle, bundle
from .chain_spec import MAINNET, ChainSpec
from .config import ClientDefinition, Eth1Consensus, NodeDefinition, NodeRole, TestnetConfig
from .errors import (
    AddressUnavailable,
    ConfigError,
    DependencyError,
    GenesisError,
    NodeIndexError,
    ProvisionError,
    TestnetError,
)
from .genesis import ConsensusGenesisState, ExecutionGenesis, GenesisStateBuilder, build_genesis
from .keys import KeyDetails, KeyTranche, key_tranches, load_validator_keys
from .nodes import BeaconNode, ExecutionNode, ValidatorClient
from .prepared import PreparedTestnet, prepare_testnet
from .sequencer import BootstrapSequencer, Provisioner
from .state import Testnet

__all__ = [
    "AddressUnavailable",
    "BeaconNode",
    "BootstrapSequencer",
    "ChainSpec",
    "ClientDefinition",
    "ConfigBundle",
    "ConfigError",
    "ConsensusGenesisState",
    "DependencyError",
    "Eth1Consensus",
    "ExecutionGenesis",
    "ExecutionNode",
    "GenesisError",
    "GenesisStateBuilder",
    "KeyDetails",
    "KeyTranche",
    "MAINNET",
    "NodeDefinition",
    "NodeIndexError",
    "NodeRole",
    "PreparedTestnet",
    "ProvisionError",
    "Provisioner",
    "Testnet",
    "TestnetConfig",
    "TestnetError",
    "ValidatorClient",
    "bundle",
    "build_genesis",
    "key_tranches",
    "load_validator_keys",
    "prepare_testnet",
]
