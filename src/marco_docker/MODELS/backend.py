"""
Models for the records pushed to Marco.
"""
from typing import Dict, List
from pydantic import BaseModel

BACKEND_TYPE = "docker"

# Domain -> backend URLs, in the order the containers were inspected
DomainMapping = Dict[str, List[str]]

class Backend(BaseModel):
    """
    A domain together with every URL that can serve it.
    """
    type: str = BACKEND_TYPE
    domain: str
    list: List[str] = []
