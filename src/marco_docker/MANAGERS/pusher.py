"""
A single push cycle: inspect containers, build the mapping, send it to Marco.
"""
import logging
from typing import List, Optional

from ..exceptions import EmptyMappingError
from ..MODELS.agent_config import AgentConfig
from ..MODELS.backend import BACKEND_TYPE, Backend, DomainMapping
from ..REGISTRY.registry_client import MarcoClient
from .container_source import DockerContainerSource
from .mapping_builder import MappingBuilder

logger = logging.getLogger(__name__)

class Pusher:
    """
    Runs push cycles for one agent configuration.
    """
    def __init__(self,
                 config: AgentConfig,
                 source: Optional[DockerContainerSource] = None,
                 client: Optional[MarcoClient] = None):
        """
        Initializes the pusher.

        :param config: Agent configuration.
        :param source: Container source, defaults to the configured Docker endpoint.
        :param client: Marco client, defaults to one using the configured timeout.
        """
        self.config = config
        self.source = source or DockerContainerSource(config.endpoint, config.timeout)
        self.client = client or MarcoClient(config.timeout)
        self.builder = MappingBuilder(config.env, config.ports, config.match_mode)

    def collect(self) -> DomainMapping:
        """
        Builds the mapping from a fresh snapshot of the running containers.

        :return: Domain to backend URLs.
        """
        snapshots = self.source.snapshots()
        mapping = self.builder.build(snapshots)
        logger.debug("Built %d domains from %d containers", len(mapping), len(snapshots))
        return mapping

    @staticmethod
    def to_backends(mapping: DomainMapping) -> List[Backend]:
        """
        Converts a mapping into Marco records, one per domain, in mapping order.
        """
        return [Backend(type=BACKEND_TYPE, domain=domain, list=urls)
                for domain, urls in mapping.items()]

    def push(self) -> List[Backend]:
        """
        Runs one cycle. Nothing is sent unless every step succeeds.

        :return: The records that were sent.
        :raises AcquisitionError: If the containers could not be inspected.
        :raises EmptyMappingError: If no container qualified.
        :raises TransportError: If Marco could not be reached.
        """
        mapping = self.collect()
        if not mapping:
            raise EmptyMappingError("Empty list of environments.")

        backends = self.to_backends(mapping)
        self.client.send(backends, self.config.marco)
        return backends
