"""Plain-text boot menu: one block per image, first one marked as the boot choice."""

from jinja2 import Environment

from ..schema import BootMenu

TEMPLATE = """\
{% if menu.meta.get("source") %}
# {{ menu.meta["source"] }}
{% endif %}
{% if not menu.images %}
No bootable entries.
{% endif %}
{% for img in menu.images %}
{{ "*" if loop.first else " " }} {{ loop.index }}. {{ img.display_name }}{% if img.display_name != img.identifier %} [{{ img.identifier }}]{% endif %}

    kernel:  {{ img.kernel_handle if img.kernel_handle is not none else "-" }}
    initrd:  {{ img.initrd_handle if img.initrd_handle is not none else "-" }}
    cmdline: {{ img.command_line or "-" }}
{% endfor %}
"""


def render(menu: BootMenu, env: Environment) -> str:
    return env.from_string(TEMPLATE).render(menu=menu)
