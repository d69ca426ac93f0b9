from dataclasses import dataclass, field

from .chain_spec import ChainSpec
from .genesis import ExecutionGenesis
from .nodes import BeaconNode, ExecutionNode, ValidatorClient


@dataclass
class Testnet:
    """
    Record of the nodes started so far in one run.

    Lists only ever grow; the bootstrap sequencer appends one node per start
    and never removes or reorders entries.
    """

    __test__ = False

    genesis_time: int
    genesis_validators_root: str
    spec: ChainSpec
    eth1_genesis: ExecutionGenesis
    eth1: list[ExecutionNode] = field(default_factory=list)
    beacons: list[BeaconNode] = field(default_factory=list)
    validators: list[ValidatorClient] = field(default_factory=list)

    def services(self) -> dict:
        """Started services keyed by service name, for handing to flexitest."""
        svcs = {}
        for node in [*self.eth1, *self.beacons, *self.validators]:
            svcs[node.name] = node.client
        return svcs
