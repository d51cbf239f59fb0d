# thumbgallery/templating.py
"""
HTML rendering for the browsable gallery pages.
"""

from pathlib import Path

from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"]),
)


def render(name: str, **ctx) -> HTMLResponse:
    """Render a template into an HTML response."""
    template = jinja_env.get_template(name)
    ctx.setdefault("title", "Gallery")
    return HTMLResponse(template.render(**ctx))
