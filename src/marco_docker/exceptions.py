"""
Errors raised by a push cycle.

Every error here is scoped to a single cycle: the poller logs it and carries
on with the next one.
"""


class MarcoDockerError(Exception):
    """Base class for all cycle-level failures."""


class AcquisitionError(MarcoDockerError):
    """Listing or inspecting containers through the Docker API failed."""


class EmptyMappingError(MarcoDockerError):
    """No running container produced a backend URL, so there is nothing to push."""


class TransportError(MarcoDockerError):
    """Sending the backend list to Marco failed."""
