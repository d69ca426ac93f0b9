from dataclasses import dataclass, field
from enum import Enum

PORT_BEACON_API = 4000
PORT_BEACON_GRPC = 4001
PORT_BEACON_P2P = 9000
PORT_METRICS = 8080
PORT_EXECUTION_RPC = 8545
PORT_ENGINE_RPC = 8551
PORT_EXECUTION_P2P = 30303


class Eth1Consensus(Enum):
    """Block production algorithm of the execution chain before the merge."""

    ETHASH = "ethash"
    CLIQUE = "clique"


class NodeRole(Enum):
    EXECUTION = "execution"
    BEACON = "beacon"
    VALIDATOR = "validator"


@dataclass(frozen=True)
class ClientDefinition:
    """A node image able to play one role in the testnet."""

    name: str
    image: str
    role: NodeRole
    version: str = "latest"

    @property
    def image_ref(self) -> str:
        return f"{self.image}:{self.version}"


@dataclass(frozen=True)
class NodeDefinition:
    """One node group: an execution node, the beacon node on top and its validator client."""

    execution_client: ClientDefinition
    beacon_client: ClientDefinition
    validator_client: ClientDefinition


@dataclass
class TestnetConfig:
    """User supplied parameters of a testnet run."""

    __test__ = False

    terminal_total_difficulty: int
    validator_count: int
    slot_time: int
    altair_fork_epoch: int = 0
    merge_fork_epoch: int = 0
    eth1_consensus: Eth1Consensus = Eth1Consensus.CLIQUE
    nodes: list[NodeDefinition] = field(default_factory=list)


# Well-known block producer credentials, handed to the first execution node only.
PRODUCER_CREDENTIALS = {
    Eth1Consensus.ETHASH: {
        "MINER": "1212121212121212121212121212121212121212",
    },
    Eth1Consensus.CLIQUE: {
        "CLIQUE_PRIVATEKEY": "9c647b8b7c4e7c3490668fb6c11473619db80c93704c70893d3813af4090c39c",
        "MINER": "658bdf435d810c91414ec09147daa6db62406379",
    },
}
