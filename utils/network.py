import logging

from utils.utils import wait_until


def wait_until_beacons_connected(beacon_apis, timeout=300):
    """Wait until every beacon node has at least one peer"""

    def check_all_connected():
        for idx, api in enumerate(beacon_apis):
            peers = api.peer_count()
            if peers < 1:
                logging.debug(f"Beacon node {idx} has no peers, waiting...")
                return False
        logging.info("All beacon nodes have peers")
        return True

    wait_until(
        check_all_connected,
        timeout=timeout,
        step=5,
        error_msg=f"Timeout after {timeout} seconds waiting for beacon nodes to find peers",
    )


def wait_until_eth1_connected(eth1_rpcs, timeout=300):
    """Wait until every execution node has at least one peer"""

    def check_all_connected():
        for idx, rpc in enumerate(eth1_rpcs):
            peers = int(rpc.net_peerCount(), 16)
            if peers < 1:
                logging.debug(f"Execution node {idx} has no peers, waiting...")
                return False
        logging.info("All execution nodes have peers")
        return True

    wait_until(
        check_all_connected,
        timeout=timeout,
        step=5,
        error_msg=f"Timeout after {timeout} seconds waiting for execution nodes to find peers",
    )
