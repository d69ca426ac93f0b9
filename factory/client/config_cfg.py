from dataclasses import dataclass, field


@dataclass
class PortMapping:
    container: int
    host: int


@dataclass
class ContainerConfig:
    """What a node container was started with, dumped next to its logs."""

    name: str
    container_name: str
    network: str
    image: str
    role: str
    input_dir: str
    ports: list[PortMapping] = field(default_factory=list)
    params: dict[str, str] = field(default_factory=dict)
    files: list[str] = field(default_factory=list)
