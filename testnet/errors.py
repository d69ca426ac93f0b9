"""Errors raised while preparing and bootstrapping a testnet.

None of these are recovered from inside the harness. They abort the
environment that raised them and flexitest reports the failure.
"""


class TestnetError(Exception):
    """Base class for all testnet harness errors."""

    # keep pytest from collecting this as a test class
    __test__ = False


class ConfigError(TestnetError):
    """Malformed input parameters, e.g. a tranche count of zero."""


class GenesisError(TestnetError):
    """Genesis construction failed for the given inputs."""


class NodeIndexError(TestnetError, IndexError):
    """
    A dependency index points outside the nodes started so far.

    This is a test authoring error, not a runtime condition.
    """

    def __init__(self, role: str, kind: str, index: int, available: int):
        super().__init__(
            f"only have {available} {kind}, cannot find index {index} for {role}"
        )
        self.role = role
        self.kind = kind
        self.index = index
        self.available = available


class DependencyError(TestnetError):
    """A referenced node exists but has not produced the required address."""


class ProvisionError(TestnetError):
    """The external node failed to start."""


class AddressUnavailable(TestnetError):
    """A node has not exposed the requested interface (yet)."""
