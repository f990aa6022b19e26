"""
Prompt templates for the news ranking call.

Templates are markdown files beside this module using `str.format`
placeholders; literal JSON braces are doubled ({{ and }}).
"""
import string
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger


PROMPTS_DIR = Path(__file__).parent

_FORMATTER = string.Formatter()


def template_fields(template: str) -> set[str]:
    """Placeholder names used by a template."""
    return {name for _, name, _, _ in _FORMATTER.parse(template) if name}


class PromptLoader:
    """
    Reads templates lazily from a directory and caches them per instance.

    Example:
        loader = PromptLoader()
        system = loader.get("news_ranking_system")
        prompt = loader.format("news_ranking", focus="...", articles_json="[...]", risk_categories="...")
    """

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = Path(prompts_dir or PROMPTS_DIR)
        self._cache: Dict[str, str] = {}

    def get(self, name: str) -> str:
        """
        Raw template text.

        Raises:
            FileNotFoundError: If no `<name>.md` exists in the prompts directory
        """
        template = self._cache.get(name)
        if template is not None:
            return template

        path = self.prompts_dir / f"{name}.md"
        if not path.is_file():
            available = ", ".join(self.list_prompts()) or "none"
            raise FileNotFoundError(f"Prompt {name!r} not found in {self.prompts_dir} (available: {available})")

        template = path.read_text(encoding="utf-8").strip()
        self._cache[name] = template
        logger.debug(f"[Prompts] Loaded {name} ({len(template)} chars)")
        return template

    def format(self, name: str, **variables: Any) -> str:
        """
        Template with all placeholders filled.

        Raises:
            ValueError: If any placeholder has no value
        """
        template = self.get(name)

        missing = template_fields(template) - variables.keys()
        if missing:
            raise ValueError(f"Prompt {name!r} is missing variables: {', '.join(sorted(missing))}")

        return template.format(**variables)

    def list_prompts(self) -> list[str]:
        return sorted(path.stem for path in self.prompts_dir.glob("*.md"))
