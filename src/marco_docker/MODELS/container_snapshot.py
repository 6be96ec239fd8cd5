"""
Models for the inspection data of a single running container.
"""
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field

class PortBinding(BaseModel):
    """
    A host address that a container port is published on.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    host_ip: str = Field(default="", alias="HostIp")
    host_port: str = Field(default="", alias="HostPort")

class ContainerSnapshot(BaseModel):
    """
    Read-only view of a container at inspection time.
    Only the parts needed for backend discovery are kept.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    env: List[str] = []
    ports: Dict[str, List[PortBinding]] = {}  # {"80/tcp": [bindings]}

    @classmethod
    def from_inspect(cls, data: Dict[str, Any]) -> "ContainerSnapshot":
        """
        Builds a snapshot from a Docker inspect payload.

        :param data: The decoded response of ``GET /containers/{id}/json``.
        :return: A ContainerSnapshot instance.
        """
        config = data.get('Config') or {}
        network = data.get('NetworkSettings') or {}

        ports = {}
        for spec, bindings in (network.get('Ports') or {}).items():
            # Exposed but unpublished ports come back as null
            ports[spec] = [PortBinding(**b) for b in bindings or []]

        return cls(
            id=data.get('Id', ''),
            env=list(config.get('Env') or []),
            ports=ports,
        )
