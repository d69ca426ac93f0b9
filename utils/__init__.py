from utils.utils import (
    read_validator_keys,
    wait_until,
    wait_until_beacon_ready,
    wait_until_execution_ready,
    wait_until_slot,
)

TEST_DIR = "tests"

__all__ = [
    "TEST_DIR",
    "read_validator_keys",
    "wait_until",
    "wait_until_beacon_ready",
    "wait_until_execution_ready",
    "wait_until_slot",
]
