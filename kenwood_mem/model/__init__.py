from kenwood_mem.errors import ValidateError

from . import _support
from .channels import Channel

__all__ = [
    "Channel",
    "ValidateError",
]


def enable_debug() -> None:
    _support.DEBUG = True
