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
Periodic execution of push cycles with a fixed interval between them.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..exceptions import MarcoDockerError

logger = logging.getLogger(__name__)


@dataclass
class PollStats:
    """Counters for the cycles run so far."""

    cycles: int = 0
    completed: int = 0
    failed: int = 0
    last_error: Optional[str] = None


class Poller:
    """
    Runs a task forever, sleeping a fixed interval between runs.
    Failed cycles are logged and never stop the loop; there is no backoff.
    """

    def __init__(self, task: Callable[[], Any], interval: float = 15):
        """
        Initializes the poller.

        :param task: Callable running one cycle. It signals failure by raising
            a MarcoDockerError.
        :param interval: Seconds between the end of a cycle and the next one.
        """
        self.task = task
        self.interval = interval
        self.stats = PollStats()
        self.thread = None
        self._stop = threading.Event()

    @property
    def running(self) -> bool:
        return not self._stop.is_set()

    def start(self):
        """
        Starts polling on a background thread.
        """
        self._stop.clear()
        self.thread = threading.Thread(target=self.run_forever, daemon=True)
        self.thread.start()

    def stop(self):
        """
        Stops polling. A cycle in progress is allowed to finish.
        """
        self._stop.set()
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=1)

    def run_once(self) -> bool:
        """
        Runs a single cycle and logs its outcome.

        Returns:
            True if the cycle completed.
        """
        self.stats.cycles += 1
        logger.info("Started pushing data to Marco.", extra={"type": "started"})
        try:
            self.task()
        except MarcoDockerError as e:
            self.stats.failed += 1
            self.stats.last_error = str(e)
            logger.warning(str(e), extra={"type": "failed"})
            return False
        except Exception as e:
            self.stats.failed += 1
            self.stats.last_error = str(e)
            logger.error("Unexpected error while pushing to Marco: %s", e,
                         exc_info=True, extra={"type": "failed"})
            return False

        self.stats.completed += 1
        logger.info("Successfully pushed data to Marco.", extra={"type": "completed"})
        return True

    def run_forever(self):
        """
        Runs cycles until stop() is called.
        """
        while self.running:
            self.run_once()
            # Interruptible sleep
            self._stop.wait(self.interval)
