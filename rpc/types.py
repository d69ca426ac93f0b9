from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NodeIdentity:
    """Response of the beacon API `GET /eth/v1/node/identity`."""

    peer_id: str
    enr: str
    p2p_addresses: list[str]

    @classmethod
    def from_dict(cls, data: dict) -> NodeIdentity:
        return cls(
            peer_id=data["peer_id"],
            enr=data.get("enr", ""),
            p2p_addresses=data.get("p2p_addresses", []),
        )


@dataclass
class BeaconGenesis:
    """Response of the beacon API `GET /eth/v1/beacon/genesis`."""

    genesis_time: int
    genesis_validators_root: str
    genesis_fork_version: str

    @classmethod
    def from_dict(cls, data: dict) -> BeaconGenesis:
        return cls(
            genesis_time=int(data["genesis_time"]),
            genesis_validators_root=data["genesis_validators_root"],
            genesis_fork_version=data["genesis_fork_version"],
        )


@dataclass
class BlockHeader:
    slot: int
    proposer_index: int
    root: str

    @classmethod
    def from_dict(cls, data: dict) -> BlockHeader:
        message = data["header"]["message"]
        return cls(
            slot=int(message["slot"]),
            proposer_index=int(message["proposer_index"]),
            root=data["root"],
        )
