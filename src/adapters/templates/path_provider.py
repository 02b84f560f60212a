from src.components.application_document.errors import UnknownTemplateError
from src.rules.models import TemplateRules


class RulesTemplatePathProvider:
    """Resolves logical template names from the templates section of the rules."""

    def __init__(self, rules: TemplateRules):
        self._paths = dict(rules.paths)

    def get(self, name: str) -> str:
        try:
            return self._paths[name]
        except KeyError:
            raise UnknownTemplateError(name) from None

    def names(self) -> list[str]:
        return sorted(self._paths)
