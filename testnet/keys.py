import json
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from .bundle import ConfigBundle
from .errors import ConfigError

MAX_EFFECTIVE_BALANCE_GWEI = 32_000_000_000


@dataclass(frozen=True)
class KeyDetails:
    """Type definition for a validator credential."""

    pubkey: str
    withdrawal_credentials: str
    keystore: dict
    password: str

    @classmethod
    def from_dict(cls, data: dict) -> "KeyDetails":
        return cls(
            pubkey=data["pubkey"],
            withdrawal_credentials=data["withdrawal_credentials"],
            keystore=data["keystore"],
            password=data["password"],
        )


@dataclass(frozen=True)
class KeyTranche:
    """A group of validator keys to run on one validator client."""

    index: int
    keys: tuple[KeyDetails, ...]

    def __len__(self) -> int:
        return len(self.keys)

    def pubkeys(self) -> list[str]:
        return [k.pubkey for k in self.keys]


def load_validator_keys(path: str | Path) -> list[KeyDetails]:
    """
    Read the validator credential pool.

    Args:
        path: JSON file holding a list of objects with `pubkey`,
            `withdrawal_credentials`, `keystore` and `password`.

    Returns:
        The credentials in file order.
    """
    with open(path) as f:
        raw_keys = json.load(f)
    return [KeyDetails.from_dict(raw) for raw in raw_keys]


def key_tranches(pool: Sequence[KeyDetails], n: int) -> list[KeyTranche]:
    """
    Split the pool into `n` ordered, disjoint tranches.

    Sizes differ by at most one and the remainder goes to the earliest
    tranches. When `n` exceeds the pool size the trailing tranches are empty.
    """
    if n < 1:
        raise ConfigError(f"need at least one key tranche, got {n}")

    base, remainder = divmod(len(pool), n)
    tranches = []
    start = 0
    for i in range(n):
        size = base + (1 if i < remainder else 0)
        tranches.append(KeyTranche(index=i, keys=tuple(pool[start : start + size])))
        start += size
    return tranches


def keys_bundle(tranche: KeyTranche) -> ConfigBundle:
    """Keystores and their passwords, laid out the way validator images load them."""
    files = {}
    for key in tranche.keys:
        files[f"keys/{key.pubkey}/voting-keystore.json"] = json.dumps(key.keystore).encode()
        files[f"secrets/{key.pubkey}"] = key.password.encode()
    return ConfigBundle(files=files)


def validators_listing(keys: Sequence[KeyDetails], balance: int = MAX_EFFECTIVE_BALANCE_GWEI) -> str:
    """Genesis validator list, one `pubkey:withdrawal_credentials:balance` per line."""
    return "".join(f"{k.pubkey}:{k.withdrawal_credentials}:{balance}\n" for k in keys)
