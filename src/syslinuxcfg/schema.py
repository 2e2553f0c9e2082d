"""
Boot configuration schema.

Typed contract between the directive parser and its callers: the parser
fills a ParserState and hands back BootImage records in resolved order.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_serializer


class BootImage(BaseModel):
    """One label from the config: a kernel, optional initrd and command line."""

    identifier: str
    display_name: str
    command_line: str = ""
    # Opaque lazy handles owned by this entry; never read by the parser.
    kernel_handle: Optional[Any] = None
    initrd_handle: Optional[Any] = None

    @field_serializer("kernel_handle", "initrd_handle")
    def _serialize_handle(self, handle: Optional[Any]) -> Optional[str]:
        return None if handle is None else str(handle)


class Scope(str, Enum):
    GLOBAL = "global"
    ENTRY = "entry"


class ParserState(BaseModel):
    """
    Mutable state for one top-level parse, shared by every included file.

    Empty strings mean "unset" for the label pointers.
    """

    entries: Dict[str, BootImage] = Field(default_factory=dict)
    emission_order: List[str] = Field(default_factory=list)  # duplicates allowed
    default_label: str = ""
    nerf_default_label: str = ""
    global_append: str = ""
    scope: Scope = Scope.GLOBAL
    current_label: str = ""
    working_directory: Optional[str] = None
    # Directory each label was declared in; its initrd= token resolves against it.
    entry_directories: Dict[str, Optional[str]] = Field(default_factory=dict)


class BootMenu(BaseModel):
    """Resolved images plus where they came from. Printed by the CLI as JSON."""

    meta: dict = Field(default_factory=dict)  # source, working_directory, timestamp
    images: List[BootImage] = Field(default_factory=list)

    model_config = {"extra": "forbid"}
