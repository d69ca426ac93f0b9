import os
import sys

import flexitest

from envs import BasicEnv, TestnetEnv
from envs.testenv import TestnetTestRuntime
from factory.client import ClientFactory
from testnet import Eth1Consensus
from utils import TEST_DIR
from utils.logging import setup_root_logger


def main(argv):
    setup_root_logger()

    root_dir = os.path.dirname(os.path.abspath(__file__))
    test_dir = os.path.join(root_dir, TEST_DIR)

    # Create datadir.
    datadir_root = flexitest.create_datadir_in_workspace(os.path.join(root_dir, "_dd"))

    # Probe tests.
    modules = flexitest.runtime.scan_dir_for_modules(test_dir)
    tests = flexitest.runtime.load_candidate_modules(modules)

    # Register factory
    client_fac = ClientFactory([12300 + i for i in range(200)])
    factories = {"client": client_fac}

    # Register envs
    env_configs = {
        "basic": BasicEnv(),
        "network": TestnetEnv(),
        "network_ethash": TestnetEnv(eth1_consensus=Eth1Consensus.ETHASH),
    }

    # Set up the runtime and prepare tests.
    rt = TestnetTestRuntime(env_configs, datadir_root, factories)
    rt.prepare_registered_tests()

    # Run the tests and then dump the results.
    arg_test_names = argv[1:]
    if len(arg_test_names) > 0:
        tests = arg_test_names

    results = rt.run_tests(tests)
    rt.save_json_file("results.json", results)
    flexitest.dump_results(results)
    flexitest.fail_on_error(results)
    return 0


if __name__ == "__main__":
    main(sys.argv)
