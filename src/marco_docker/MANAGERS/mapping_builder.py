# Copyright 2024 The marco-docker Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Derivation of the domain to backend URL mapping from container snapshots.
"""
import logging
from typing import Iterable, List, Optional

from ..MODELS.backend import DomainMapping
from ..MODELS.container_snapshot import ContainerSnapshot, PortBinding
from ..PARSERS.env_parser import EnvParser
from ..UTILS.matching import MatchMode, port_allowed

logger = logging.getLogger(__name__)

WILDCARD_IP = "0.0.0.0"
LOOPBACK_IP = "127.0.0.1"


def get_port(exposed: str) -> str:
    """
    Strips the protocol from an exposed port spec ("80/tcp" -> "80").
    """
    return exposed.split("/", 1)[0]


def first_binding(bindings: List[PortBinding]) -> Optional[PortBinding]:
    """
    First-binding-wins: a port published on several host addresses is only
    proxied through the first one.
    """
    return bindings[0] if bindings else None


def get_proxy_url(bindings: List[PortBinding]) -> str:
    """
    Builds the URL a port can be reached on from the host.

    Args:
        bindings: Host bindings of a single container port.

    Returns:
        The URL, or an empty string if the port is not published.
    """
    binding = first_binding(bindings)
    if binding is None:
        return ""

    # Wildcard binds are reachable locally, the same way Swarm resolves them
    ip = binding.host_ip
    if ip == WILDCARD_IP:
        ip = LOOPBACK_IP

    return f"http://{ip}:{binding.host_port}"


class MappingBuilder:
    """
    Groups the published ports of running containers by domain.
    """
    def __init__(self, domain_env_key: str, allowed_ports: str,
                 match_mode: MatchMode = MatchMode.SUBSTRING):
        """
        Initializes the builder.

        :param domain_env_key: Environment variable holding a container's domain.
        :param allowed_ports: Comma separated ports eligible for proxying.
        :param match_mode: How the key and the ports are matched.
        """
        self.domain_env_key = domain_env_key
        self.allowed_ports = allowed_ports
        self.match_mode = match_mode

    def build(self, snapshots: Iterable[ContainerSnapshot]) -> DomainMapping:
        """
        Builds the mapping for one poll cycle.

        Containers without a domain, and ports that are filtered out or not
        published, contribute nothing. URLs are neither sorted nor deduplicated.

        :param snapshots: Inspected containers, in listing order.
        :return: Domain to backend URLs. Empty if no container qualified.
        """
        mapping: DomainMapping = {}
        for snapshot in snapshots:
            domain = EnvParser.lookup(snapshot.env, self.domain_env_key, self.match_mode)
            if not domain:
                logger.debug("Skipping container %s: no %s variable",
                             snapshot.id, self.domain_env_key)
                continue

            for spec, bindings in snapshot.ports.items():
                if not port_allowed(get_port(spec), self.allowed_ports, self.match_mode):
                    continue
                url = get_proxy_url(bindings)
                if url:
                    mapping.setdefault(domain, []).append(url)

        return mapping


def build(snapshots: Iterable[ContainerSnapshot], domain_env_key: str,
          allowed_ports: str, match_mode: MatchMode = MatchMode.SUBSTRING) -> DomainMapping:
    """
    Shortcut for ``MappingBuilder(...).build(snapshots)``.
    """
    return MappingBuilder(domain_env_key, allowed_ports, match_mode).build(snapshots)
