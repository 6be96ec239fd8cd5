"""
Models for the agent configuration.
"""
from pydantic import BaseModel, ConfigDict, Field

from ..UTILS.matching import MatchMode

DEFAULT_MARCO = "http://localhost:81"
DEFAULT_ENDPOINT = "unix:///var/run/docker.sock"
DEFAULT_PORTS = "80,8080,2368,8983"
DEFAULT_ENV = "DOMAIN"
DEFAULT_FREQUENCY = 15
DEFAULT_TIMEOUT = 30.0

# Setting name -> environment variable overriding its default
ENV_VARS = {
    "marco": "MARCO_ECS_URL",
    "endpoint": "DOCKER_HOST",
    "ports": "MARCO_DOCKER_PORTS",
    "env": "MARCO_DOCKER_ENV",
    "frequency": "MARCO_ECS_FREQUENCY",
    "match_mode": "MARCO_DOCKER_MATCH",
    "timeout": "MARCO_DOCKER_TIMEOUT",
}

class AgentConfig(BaseModel):
    """
    Immutable settings for one agent process, built once at startup.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    marco: str = Field(default=DEFAULT_MARCO, min_length=1)
    endpoint: str = Field(default=DEFAULT_ENDPOINT, min_length=1)
    ports: str = DEFAULT_PORTS
    env: str = Field(default=DEFAULT_ENV, min_length=1)
    frequency: int = Field(default=DEFAULT_FREQUENCY, gt=0)
    match_mode: MatchMode = MatchMode.SUBSTRING
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

