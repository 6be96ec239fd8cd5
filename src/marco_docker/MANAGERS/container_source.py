"""
Access to the containers running on the local Docker engine.
"""
import logging
from typing import List

import docker
import requests
from docker.errors import DockerException
from pydantic import ValidationError

from ..exceptions import AcquisitionError
from ..MODELS.container_snapshot import ContainerSnapshot

logger = logging.getLogger(__name__)

class DockerContainerSource:
    """
    Lists and inspects running containers through the Docker Engine API.
    A new client is opened for every pass.
    """
    def __init__(self, endpoint: str, timeout: float = 30.0):
        """
        Initializes the container source.

        :param endpoint: Docker endpoint, e.g. ``unix:///var/run/docker.sock``.
        :param timeout: Seconds to wait for each Docker API call.
        """
        self.endpoint = endpoint
        self.timeout = timeout

    def _client(self) -> docker.DockerClient:
        try:
            return docker.DockerClient(base_url=self.endpoint, timeout=self.timeout)
        except DockerException as e:
            raise AcquisitionError(f"Cannot connect to Docker at {self.endpoint}: {e}") from e

    def list_running(self, client: docker.DockerClient) -> List[str]:
        """
        Returns the ids of the running containers.
        """
        try:
            return [c.id for c in client.containers.list()]
        except (DockerException, requests.RequestException) as e:
            raise AcquisitionError(f"Failed to list containers: {e}") from e

    def inspect(self, client: docker.DockerClient, container_id: str) -> ContainerSnapshot:
        """
        Inspects a single container.
        """
        try:
            data = client.api.inspect_container(container_id)
        except (DockerException, requests.RequestException) as e:
            raise AcquisitionError(f"Failed to inspect container {container_id}: {e}") from e
        try:
            return ContainerSnapshot.from_inspect(data)
        except ValidationError as e:
            raise AcquisitionError(f"Malformed inspect data for container {container_id}: {e}") from e

    def snapshots(self) -> List[ContainerSnapshot]:
        """
        Inspects every running container, in listing order.

        Raises:
            AcquisitionError: If the engine cannot be reached or any call fails.
        """
        client = self._client()
        try:
            ids = self.list_running(client)
            logger.debug("Found %d running containers", len(ids))
            return [self.inspect(client, cid) for cid in ids]
        finally:
            client.close()
