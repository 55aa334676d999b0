"""Actor roles carried in the authenticated identity."""

from enum import Enum


class Role(str, Enum):
    CLIENT = "client"
    WORKER = "worker"
