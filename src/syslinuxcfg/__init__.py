"""Resolve syslinux/isolinux boot configurations into ordered boot images."""

from .errors import (
    ConfigNotFound,
    FetchError,
    MalformedReference,
    NotFound,
    TransportError,
    UnsupportedScheme,
)
from .parser import parse_config, parse_from_local_directory
from .schema import BootImage, BootMenu

__all__ = [
    "BootImage",
    "BootMenu",
    "ConfigNotFound",
    "FetchError",
    "MalformedReference",
    "NotFound",
    "TransportError",
    "UnsupportedScheme",
    "parse_config",
    "parse_from_local_directory",
]
