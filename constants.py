import os

from testnet import ClientDefinition, Eth1Consensus, NodeDefinition, NodeRole, TestnetConfig

TESTNET_SIZE = 2

VALIDATOR_COUNT = 64
SLOT_TIME = 6
TERMINAL_TOTAL_DIFFICULTY = 0

DEFAULT_IMAGES = {
    NodeRole.EXECUTION: ("go-ethereum", "testnet/go-ethereum"),
    NodeRole.BEACON: ("lighthouse-bn", "testnet/lighthouse-bn"),
    NodeRole.VALIDATOR: ("lighthouse-vc", "testnet/lighthouse-vc"),
}


def resolve_client(role: NodeRole) -> ClientDefinition:
    """Client for a role, `TESTNET_<ROLE>_IMAGE` overrides the default image."""
    name, image = DEFAULT_IMAGES[role]
    image = os.environ.get(f"TESTNET_{role.value.upper()}_IMAGE", image)
    version = os.environ.get(f"TESTNET_{role.value.upper()}_VERSION", "latest")
    return ClientDefinition(name=name, image=image, role=role, version=version)


def default_node() -> NodeDefinition:
    return NodeDefinition(
        execution_client=resolve_client(NodeRole.EXECUTION),
        beacon_client=resolve_client(NodeRole.BEACON),
        validator_client=resolve_client(NodeRole.VALIDATOR),
    )


def default_testnet_config(num_nodes: int, eth1_consensus=Eth1Consensus.CLIQUE) -> TestnetConfig:
    return TestnetConfig(
        terminal_total_difficulty=TERMINAL_TOTAL_DIFFICULTY,
        validator_count=VALIDATOR_COUNT,
        slot_time=SLOT_TIME,
        altair_fork_epoch=0,
        merge_fork_epoch=0,
        eth1_consensus=eth1_consensus,
        nodes=[default_node() for _ in range(num_nodes)],
    )
