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
Client for pushing backend lists to a Marco load balancer.
"""

import logging
from typing import List, Optional

import requests

from ..exceptions import TransportError
from ..MODELS.backend import Backend

logger = logging.getLogger(__name__)


class MarcoClient:
    """
    Sends backend records to Marco as a JSON array over HTTP.
    """

    def __init__(self, timeout: float = 30.0, session: Optional[requests.Session] = None):
        """
        Initialize the Marco client.

        Args:
            timeout: Seconds to wait for Marco to answer.
            session: HTTP session to reuse. A new one is created if omitted.
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, backends: List[Backend], url: str) -> None:
        """
        Push the complete backend list.

        Args:
            backends: One record per domain.
            url: Address of the Marco backend endpoint.

        Raises:
            TransportError: If Marco cannot be reached or rejects the payload.
        """
        payload = [b.model_dump() for b in backends]
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportError(f"Failed to push to Marco at {url}: {e}") from e

        logger.debug("Marco accepted %d backends (HTTP %s)", len(backends), response.status_code)
