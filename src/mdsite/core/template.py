"""Page templates with a single body insertion point"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mdsite.core.errors import TemplateError


logger = logging.getLogger(__name__)

MARKER = "{{ content }}"

DEFAULT_TEMPLATE = f"""\
<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
</head>
<body>
{MARKER}
</body>
</html>
"""


@dataclass(frozen=True)
class Template:
    """Markup before and after the rendered body."""
    head: str = ""
    tail: str = ""

    @classmethod
    def from_text(cls, text: str) -> "Template":
        count = text.count(MARKER)
        if count != 1:
            raise TemplateError(f"Template must contain exactly one {MARKER} marker, found {count}")
        head, tail = text.split(MARKER)
        return cls(head=head, tail=tail)

    @classmethod
    def from_file(cls, path: Path) -> "Template":
        try:
            text = path.read_text(encoding='utf-8')
        except OSError as e:
            raise TemplateError(f"Cannot read template {path}: {e}") from e
        try:
            return cls.from_text(text)
        except TemplateError as e:
            raise TemplateError(f"{path}: {e}") from e

    @classmethod
    def from_parts(cls, header: str, footer: str) -> "Template":
        """Header/footer pair: the body goes between them."""
        return cls(head=header, tail=footer)

    def apply(self, body: str) -> str:
        return f"{self.head}{body}{self.tail}"


def _read_part(path: Path) -> str:
    if not path.exists():
        logger.warning("No %s found in %s", path.name, path.parent)
        return ""
    try:
        return path.read_text(encoding='utf-8')
    except OSError as e:
        raise TemplateError(f"Cannot read {path}: {e}") from e


def resolve_template(
    source_dir: Path,
    template_file: Optional[Path] = None,
    header_file: str = "header.html",
    footer_file: str = "footer.html",
    standalone: bool = True,
    ) -> Optional[Template]:
    """Pick the page template: explicit file, else header/footer in source_dir, else the default page.

    Returns None when nothing is found and standalone is off (output is a body fragment).
    """
    if template_file is not None:
        return Template.from_file(template_file)

    header, footer = source_dir / header_file, source_dir / footer_file
    if header.exists() or footer.exists():
        return Template.from_parts(_read_part(header), _read_part(footer))

    if standalone:
        return Template.from_text(DEFAULT_TEMPLATE)
    return None
