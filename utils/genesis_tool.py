import json
import logging
import os
import subprocess
import tempfile
from dataclasses import replace
from pathlib import Path
from typing import Sequence

from testnet import ChainSpec, ConsensusGenesisState, ExecutionGenesis, GenesisError, KeyDetails
from testnet.genesis import state_from_ssz
from testnet.keys import validators_listing

BINARY_PATH = os.environ.get("ETH2_TESTNET_GENESIS_BIN", "eth2-testnet-genesis")

logger = logging.getLogger(__name__)


class Eth2TestnetGenesis:
    """
    Builds the consensus genesis state with the `eth2-testnet-genesis` tool.

    The tool derives genesis time as `MIN_GENESIS_TIME + GENESIS_DELAY` when
    the execution block is older, so the config it is handed pins both.
    """

    def __init__(self, workdir: str | None = None):
        self.workdir = workdir or tempfile.mkdtemp()

    def _run_command(self, args: list[str]) -> str:
        cmd = [BINARY_PATH] + args
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return result.stdout
        except FileNotFoundError as e:
            raise GenesisError(f"genesis tool not found: {BINARY_PATH}") from e
        except subprocess.CalledProcessError as e:
            error_msg = f"Command failed with exit code {e.returncode}:\n"
            error_msg += f"Command: {' '.join(cmd)}\n"
            if e.stdout:
                error_msg += f"Stdout: {e.stdout}\n"
            if e.stderr:
                error_msg += f"Stderr: {e.stderr}\n"
            raise GenesisError(error_msg) from e

    def build_state(
        self,
        spec: ChainSpec,
        eth1_genesis: ExecutionGenesis,
        genesis_time: int,
        keys: Sequence[KeyDetails],
    ) -> ConsensusGenesisState:
        workdir = Path(self.workdir)
        workdir.mkdir(parents=True, exist_ok=True)

        tool_spec = replace(spec, min_genesis_time=genesis_time, genesis_delay=0)
        config_path = workdir / "config.yaml"
        config_path.write_text(tool_spec.to_yaml())

        eth1_config_path = workdir / "genesis.json"
        eth1_config_path.write_text(json.dumps(eth1_genesis.to_genesis_json()))

        validators_path = workdir / "validators.txt"
        validators_path.write_text(validators_listing(keys))

        state_path = workdir / "genesis.ssz"
        fork = spec.genesis_fork()
        args = [
            fork,
            "--config",
            str(config_path),
            "--eth1-config",
            str(eth1_config_path),
            "--validators",
            str(validators_path),
            "--state-output",
            str(state_path),
        ]
        out = self._run_command(args)
        logger.debug(f"genesis tool output: {out}")

        try:
            blob = state_path.read_bytes()
        except OSError as e:
            raise GenesisError(f"genesis tool produced no state at {state_path}") from e

        state = state_from_ssz(blob, len(keys))
        logger.info(
            f"Built genesis state: time {state.genesis_time}, "
            f"validators root {state.genesis_validators_root}"
        )
        return state
