"""
Service naming constants and utilities for functional tests.
"""

from testnet import NodeRole


def get_node_service_name(role: NodeRole, idx: int) -> str:
    """
    Generate consistent node service name.

    Args:
        role: The node role
        idx: Index of the node among nodes of the same role (e.g., 0, 1, 2)

    Returns:
        Formatted service name like "beacon_1"
    """
    return f"{role.value}_{idx}"


def get_container_name(env_name: str, service_name: str) -> str:
    """
    Generate the docker container name of a node, unique per environment.

    Returns:
        Name like "basic-beacon-1", also used as the node's host name inside the network
    """
    return f"{env_name}-{service_name}".replace("_", "-").lower()


def get_network_name(env_name: str) -> str:
    """
    Generate the docker network name shared by all nodes of an environment.
    """
    return f"testnet-{env_name}".replace("_", "-").lower()
