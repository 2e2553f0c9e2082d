"""Renderers turn a resolved BootMenu into human-readable output."""

from typing import Optional

from jinja2 import Environment

from ..schema import BootMenu
from .text import render as render_text


def make_environment() -> Environment:
    return Environment(trim_blocks=True, lstrip_blocks=True, keep_trailing_newline=True)


def render(menu: BootMenu, env: Optional[Environment] = None) -> str:
    """Plain-text boot menu listing."""
    return render_text(menu, env or make_environment())
