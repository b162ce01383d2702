"""
NSX Client - Payload Rendering

Renders the XML request bodies sent to the NSX manager from the validated
object models. Values are XML-escaped by the template environment.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape
from pydantic import BaseModel

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

VIRTUALWIRE_TEMPLATE = "virtualwire.xml.j2"
INTERFACE_TEMPLATE = "interface.xml.j2"
RELAY_AGENT_TEMPLATE = "relay_agent.xml.j2"
DHCP_POOL_TEMPLATE = "dhcp_pool.xml.j2"


@lru_cache(maxsize=1)
def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["xml", "xml.j2"]),
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )


def render_template(template_name: str, obj: BaseModel) -> str:
    """Render ``template_name`` with the fields of ``obj``.

    Args:
        template_name: File name below the templates directory
        obj: Validated object model; enums are rendered by value

    Returns:
        Rendered XML payload
    """
    template = _get_env().get_template(template_name)
    return template.render(**obj.model_dump(mode="json"))
