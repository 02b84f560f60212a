from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


def _to_path(template_uri: str) -> Path:
    """Turn a filesystem path or file:// URI into a Path."""
    parsed = urlparse(template_uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    # Single letter schemes are Windows drive letters
    if parsed.scheme and len(parsed.scheme) > 1:
        raise ValueError(f"Unsupported template URI scheme: {parsed.scheme}")
    return Path(template_uri)


class JinjaViewRenderer:
    def __init__(self) -> None:
        self._environments: dict[Path, Environment] = {}

    def _environment(self, directory: Path) -> Environment:
        env = self._environments.get(directory)
        if env is None:
            env = Environment(
                loader=FileSystemLoader(str(directory)),
                autoescape=select_autoescape(["html", "htm", "xml"]),
                undefined=StrictUndefined,
            )
            env.filters["money"] = format_money
            self._environments[directory] = env
        return env

    def render(self, template_uri: str, model: Any) -> str:
        """
        Render a template file with the view model exposed as `model`.
        Raises jinja2.TemplateNotFound if the file does not exist.
        """
        path = _to_path(template_uri)
        template = self._environment(path.parent).get_template(path.name)
        return template.render(model=model)


def format_money(value: Any) -> str:
    """Format a decimal amount with thousands separators and two places."""
    return f"{value:,.2f}"
