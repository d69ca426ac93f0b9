import logging
import time
from pathlib import Path

from testnet import KeyDetails, load_validator_keys

VALIDATOR_KEYS_PATH = Path(__file__).parent.parent / "artifacts" / "validator_keys.json"


def read_validator_keys(path: str | Path = VALIDATOR_KEYS_PATH) -> list[KeyDetails]:
    """
    Get the validator credential pool from artifacts/validator_keys.json

    Args:
        path: Override for the keys file

    Returns:
        List of KeyDetails, in file order
    """
    keys = load_validator_keys(path)
    logging.debug(f"Loaded {len(keys)} validator keys from {path}")
    return keys


def wait_until(
    condition,
    timeout: int = 120,
    step: int = 1,
    error_msg: str = "Condition not met within timeout",
):
    """
    Generic wait function that polls a condition until it's met or timeout occurs.

    Args:
        condition: A callable that returns True when the condition is met.
        timeout: Timeout in seconds (default: 120).
        step: Poll interval in seconds (default: 1).
        error_msg: Custom error message for timeout.
    """
    end_time = time.time() + timeout

    while time.time() < end_time:
        time.sleep(step)  # sleep first

        try:
            if condition():
                return
        except Exception as ex:
            logging.debug(f"{ex} while waiting: {error_msg}")

    raise TimeoutError(f"{error_msg} (timeout: {timeout}s)")


def is_execution_ready(rpc_client) -> bool:
    """True once the execution client answers `eth_blockNumber`."""
    return rpc_client.eth_blockNumber() is not None


def is_beacon_ready(beacon_api) -> bool:
    """True once the beacon node serves its genesis."""
    return beacon_api.genesis() is not None


def wait_until_execution_ready(rpc_client, timeout: int = 120, step: int = 1):
    """
    Waits until the execution client answers JSON-RPC.

    Args:
        rpc_client: The RPC client to check for readiness
        timeout: Timeout in seconds (default 120 seconds)
        step: Poll interval in seconds (default 1 second)
    """
    wait_until(
        lambda: is_execution_ready(rpc_client),
        timeout=timeout,
        step=step,
        error_msg="Execution client did not start within timeout",
    )


def wait_until_beacon_ready(beacon_api, timeout: int = 120, step: int = 1):
    """
    Waits until the beacon node serves its genesis.

    Args:
        beacon_api: The beacon API client to check for readiness
        timeout: Timeout in seconds (default 120 seconds)
        step: Poll interval in seconds (default 1 second)
    """
    wait_until(
        lambda: is_beacon_ready(beacon_api),
        timeout=timeout,
        step=step,
        error_msg="Beacon node did not start within timeout",
    )


def wait_until_slot(beacon_api, slot: int, timeout: int = 300, step: int = 2) -> int:
    """Wait until the beacon node's head reaches `slot`, returns the head slot."""
    result = {"slot": 0}

    def check_slot():
        result["slot"] = beacon_api.head_header().slot
        return result["slot"] >= slot

    wait_until(
        check_slot,
        timeout=timeout,
        step=step,
        error_msg=f"Timeout after {timeout} seconds waiting for slot {slot}",
    )
    return result["slot"]
