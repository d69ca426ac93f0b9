"""Node image factory for functional testing.

Starts execution, beacon and validator images as docker containers attached
to one docker network per environment, so nodes reach each other by container
name. API ports are also published on host ports for the harness to query.
"""

import atexit
import logging
import os
import subprocess
from dataclasses import asdict
from functools import partial
from pathlib import Path

import flexitest
import toml

from rpc import inject_service_create_beacon_api, inject_service_create_rpc
from testnet import ClientDefinition, ConfigBundle, NodeRole, ProvisionError
from testnet.config import PORT_BEACON_API, PORT_ENGINE_RPC, PORT_EXECUTION_RPC
from utils.service_names import get_container_name, get_network_name, get_node_service_name
from utils.utils import is_beacon_ready, is_execution_ready, wait_until

from .config_cfg import ContainerConfig, PortMapping

logger = logging.getLogger(__name__)

DOCKER_BIN = os.environ.get("DOCKER_BIN", "docker")

# Directory inside the image where bundle files are mounted.
INPUT_DIR = "/testnet/input"

LIVE_TIMEOUT_SECS = 120

PUBLISHED_PORTS = {
    NodeRole.EXECUTION: [PORT_EXECUTION_RPC, PORT_ENGINE_RPC],
    NodeRole.BEACON: [PORT_BEACON_API],
    NodeRole.VALIDATOR: [],
}

_networks: set[str] = set()


def _cleanup_networks():
    """Remove the docker networks created by this process (called at process exit)."""
    for network in sorted(_networks):
        subprocess.run([DOCKER_BIN, "network", "rm", network], capture_output=True)
    _networks.clear()


atexit.register(_cleanup_networks)


def ensure_docker_network(network: str):
    if network in _networks:
        return
    inspect = subprocess.run([DOCKER_BIN, "network", "inspect", network], capture_output=True)
    if inspect.returncode != 0:
        try:
            subprocess.run(
                [DOCKER_BIN, "network", "create", network],
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise ProvisionError(f"failed to create docker network {network}: {e.stderr}") from e
        logger.info(f"Created docker network {network}")
    _networks.add(network)


class ClientFactory(flexitest.Factory):
    """Factory starting node images with a `ConfigBundle`."""

    def __init__(self, port_range: list[int]):
        super().__init__(port_range)
        self._started: dict[tuple[str, NodeRole], int] = {}

    @flexitest.with_ectx("ctx")
    def start_client(
        self,
        role: NodeRole,
        client: ClientDefinition,
        opts: ConfigBundle,
        ctx: flexitest.EnvContext,
    ) -> flexitest.Service:
        """Start one node and wait until it is live.

        Args:
            role: Role the node plays in the testnet.
            client: Image to run.
            opts: Start parameters (container env) and input files.
            ctx: Environment context from flexitest

        Returns:
            The running service, with `name` and `ip` props.

        Raises:
            ProvisionError: The container did not start or never became live.
        """
        envdd_path = Path(ctx.envdd_path)
        env_name = envdd_path.name

        key = (env_name, role)
        idx = self._started.get(key, 0)
        self._started[key] = idx + 1

        name = get_node_service_name(role, idx)
        datadir = ctx.make_service_dir(name)
        container_name = get_container_name(env_name, name)
        network = get_network_name(env_name)
        ensure_docker_network(network)

        input_dir = str((envdd_path / name / "input").resolve())
        write_input_files(input_dir, opts.files)

        ports = [PortMapping(container=p, host=self.next_port()) for p in PUBLISHED_PORTS[role]]
        cfg = ContainerConfig(
            name=name,
            container_name=container_name,
            network=network,
            image=client.image_ref,
            role=role.value,
            input_dir=input_dir,
            ports=ports,
            params=dict(opts.params),
            files=sorted(opts.files),
        )
        with open(os.path.join(datadir, "container.toml"), "w") as f:
            toml.dump(asdict(cfg), f)

        logfile = os.path.join(datadir, "service.log")
        host_ports = {p.container: p.host for p in ports}
        props = {
            "name": name,
            "ip": container_name,
            "role": role.value,
            "client": client.name,
            "logfile": logfile,
            **{f"host_port_{p.container}": p.host for p in ports},
        }

        svc = flexitest.service.ProcService(props, docker_run_cmd(cfg), stdout=logfile)
        try:
            svc.start()
        except OSError as e:
            raise ProvisionError(f"failed to start {role.value} node {name} ({client.name}): {e}") from e

        if role == NodeRole.EXECUTION:
            inject_service_create_rpc(
                svc, f"http://127.0.0.1:{host_ports[PORT_EXECUTION_RPC]}", name
            )
        elif role == NodeRole.BEACON:
            inject_service_create_beacon_api(
                svc, f"http://127.0.0.1:{host_ports[PORT_BEACON_API]}", name
            )

        wait_until_live(svc, name, role)

        return svc


def docker_run_cmd(cfg: ContainerConfig) -> list[str]:
    cmd = [
        DOCKER_BIN,
        "run",
        "--rm",
        "--name",
        cfg.container_name,
        "--network",
        cfg.network,
        "-v",
        f"{cfg.input_dir}:{INPUT_DIR}:ro",
    ]
    for p in cfg.ports:
        cmd += ["-p", f"{p.host}:{p.container}"]
    for k, v in cfg.params.items():
        cmd += ["-e", f"{k}={v}"]
    cmd.append(cfg.image)
    return cmd


def write_input_files(input_dir: str, files: dict[str, bytes]):
    for rel_path, data in files.items():
        path = Path(input_dir) / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


def wait_until_live(
    svc: flexitest.Service,
    name: str,
    role: NodeRole,
    timeout: int = LIVE_TIMEOUT_SECS,
    step: int = 1,
):
    """
    Waits until the node answers its API: JSON-RPC for execution nodes, the
    beacon REST API for beacon nodes. Validator clients expose nothing to
    poll, so they only have to still be running.

    Raises:
        ProvisionError: The container exited or never answered within `timeout`.
    """
    if role == NodeRole.EXECUTION:
        is_ready = partial(is_execution_ready, svc.create_rpc())
    elif role == NodeRole.BEACON:
        is_ready = partial(is_beacon_ready, svc.create_beacon_api())
    else:
        is_ready = None

    if is_ready is not None:
        # stop waiting early if the container is gone
        def _live_or_dead():
            return not svc.check_status() or is_ready()

        try:
            wait_until(
                _live_or_dead,
                timeout=timeout,
                step=step,
                error_msg=f"Node {name} did not answer its API",
            )
        except TimeoutError as e:
            svc.stop()
            raise ProvisionError(f"node {name} did not become live: {e}") from e

    if not svc.check_status():
        raise ProvisionError(f"{role.value} node {name} exited before becoming live")
