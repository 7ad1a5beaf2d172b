"""Document assembly from the carrier template.

The carrier template is a complete LaTeX preamble with three markers:
    - CONTENT_PLACEHOLDER: replaced by the editor content
    - EXERCISE_NUMBER_PLACEHOLDER: replaced by the sheet/exercise number
    - REVIEW_SWITCH: flipped to true in review mode (optional)

Starter documents for a fresh sheet are Jinja2 templates using
LaTeX-safe delimiters (``\\VAR{...}``, ``\\BLOCK{...}``).

Usage:
    from sheetwright.engine.templates import embed, load_carrier_template

    carrier = load_carrier_template(path)
    full = embed(carrier, content, number=3, review=False)
"""

from pathlib import Path
from typing import Optional

import jinja2

from sheetwright.core.exceptions import TemplateError
from sheetwright.core.logging import get_logger
from sheetwright.engine.segmenter import DocumentSegment

logger = get_logger(__name__)

CONTENT_PLACEHOLDER = "% Content will be inserted here by the editor"
EXERCISE_NUMBER_PLACEHOLDER = "\\newcommand{\\exercisenum}{X}"
REVIEW_SWITCH = "\\reviewmodefalse"
REVIEW_SWITCH_ON = "\\reviewmodetrue"

STARTER_DIR = Path(__file__).parent.parent / "templates" / "starters"

# Jinja2 environment (created once, reused)
_env: Optional[jinja2.Environment] = None


def _get_env() -> jinja2.Environment:
    """Get or create the Jinja2 environment for starter documents."""
    global _env
    if _env is None:
        _env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(STARTER_DIR)),
            block_start_string="\\BLOCK{",
            block_end_string="}",
            variable_start_string="\\VAR{",
            variable_end_string="}",
            comment_start_string="\\#{",
            comment_end_string="}",
            line_comment_prefix="%#",
            trim_blocks=True,
            autoescape=False,
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )
    return _env


def reset_env() -> None:
    """Reset the Jinja2 environment (for testing)."""
    global _env
    _env = None


def load_carrier_template(path: Path) -> str:
    """Read the carrier template.

    Raises:
        TemplateError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read carrier template {path}: {e}") from e


def validate_carrier_template(template: str) -> list[str]:
    """Validate a carrier template.

    Checks:
        - Content placeholder occurs exactly once
        - Exercise number placeholder occurs exactly once
        - Review switch occurs at most once

    Returns:
        List of issues (empty if valid)
    """
    issues: list[str] = []
    for name, marker in (
        ("content placeholder", CONTENT_PLACEHOLDER),
        ("exercise number placeholder", EXERCISE_NUMBER_PLACEHOLDER),
    ):
        count = template.count(marker)
        if count == 0:
            issues.append(f"Missing {name}: {marker}")
        elif count > 1:
            issues.append(f"Duplicate {name} ({count} occurrences): {marker}")

    if template.count(REVIEW_SWITCH) > 1:
        issues.append(f"Duplicate review switch: {REVIEW_SWITCH}")
    return issues


def embed(template: str, content: str, number: int | str, review: bool = False) -> str:
    """Build a compilable document from the carrier template.

    Each placeholder is substituted exactly once. The content is
    inserted last so that text inside it is never mistaken for a
    placeholder.

    Args:
        template: Carrier template text
        content: Editor content or a single segment's text
        number: Value for the exercise counter
        review: Switch the sheet into review mode

    Raises:
        TemplateError: If a required placeholder is missing
    """
    for marker in (CONTENT_PLACEHOLDER, EXERCISE_NUMBER_PLACEHOLDER):
        if marker not in template:
            raise TemplateError(f"Carrier template has no placeholder: {marker}")

    document = template.replace(
        EXERCISE_NUMBER_PLACEHOLDER, f"\\newcommand{{\\exercisenum}}{{{number}}}", 1
    )
    if review:
        document = document.replace(REVIEW_SWITCH, REVIEW_SWITCH_ON, 1)

    head, _, tail = document.partition(CONTENT_PLACEHOLDER)
    return head + content + tail


def embed_segment(template: str, segment: DocumentSegment, review: bool = False) -> str:
    """Build the stand-alone document for one segment."""
    return embed(template, segment.text, segment.label, review=review)


def render_starter(mode: str, **context) -> str:
    """Render the starter content for a fresh sheet.

    Args:
        mode: Document mode ("solution" or "review")
        **context: Template variables (exercise_number, title, ...)

    Raises:
        TemplateError: If no starter exists for the mode or a variable is missing
    """
    variables = {"exercise_number": 1, "title": "Your Title Here", **context}
    try:
        template = _get_env().get_template(f"{mode}.tex.j2")
        rendered: str = template.render(**variables)
    except jinja2.TemplateNotFound as e:
        raise TemplateError(f"No starter template for mode {mode!r}") from e
    except jinja2.UndefinedError as e:
        raise TemplateError(f"Starter template {mode!r}: {e}") from e

    logger.info(f"Rendered starter: {mode}", extra={"context": {"mode": mode}})
    return rendered


def is_starter_content(content: str) -> bool:
    """Whether ``content`` is still an untouched starter of any mode.

    Used to swap the starter when the document mode changes without
    overwriting the user's own text.
    """
    stripped = content.strip()
    for path in sorted(STARTER_DIR.glob("*.tex.j2")):
        mode = path.name.replace(".tex.j2", "")
        if render_starter(mode).strip() == stripped:
            return True
    return False


def list_starters() -> list[str]:
    """Available starter modes, sorted."""
    if not STARTER_DIR.exists():
        return []
    return sorted(p.name.replace(".tex.j2", "") for p in STARTER_DIR.glob("*.tex.j2"))
