from typing import List, Optional, Tuple
from jinja2 import Environment
from markupsafe import Markup, escape

from app.config import settings
from app.models.schema import DiffRun
from app.services.composer import DiffComposer, FieldDiff

REMOVED = "diff-removed"
ADDED = "diff-added"
UNCHANGED = "diff-unchanged"


def _nbsp(text: str) -> Markup:
    # keeps whitespace-only changes visible
    return escape(text).replace(" ", Markup("&nbsp;"))


_env = Environment(autoescape=True)
_env.filters["nbsp"] = _nbsp
_SPAN = _env.from_string('<span class="{{ css_class }}">{{ text | nbsp }}</span>')


def span(text: str, css_class: str) -> str:
    return _SPAN.render(css_class=css_class, text=text)


def css_class_for(run: DiffRun) -> str:
    if run.removed:
        return REMOVED
    if run.added:
        return ADDED
    return UNCHANGED


def render_runs(runs: List[DiffRun]) -> str:
    return "".join(span(run.value, css_class_for(run)) for run in runs)


class DiffRenderer:
    """HTML for phone value diffs and tag key renames."""

    def __init__(self, composer: Optional[DiffComposer] = None):
        self.composer = composer or DiffComposer()

    def render_field(self, original: Optional[str], suggested: Optional[str]) -> Tuple[FieldDiff, Optional[str], Optional[str]]:
        field = self.composer.compose(original, suggested)
        old_diff = render_runs(field.original_diff) if original else None
        new_diff = render_runs(field.suggested_diff) if suggested else None
        return field, old_diff, new_diff

    def get_diff_html(self, original: Optional[str], suggested: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        """
        (old_diff, new_diff) HTML for two field values. A missing side is None.
        The result is ready to be embedded as is and must not be escaped again.
        """
        _, old_diff, new_diff = self.render_field(original, suggested)
        return old_diff, new_diff

    @staticmethod
    def get_diff_tags_html(old_key: str, new_key: str) -> Tuple[str, str]:
        """
        Diff of a key rename. Only a shared 'contact:' namespace is kept as
        unchanged; phone and mobile sharing an 'e' is not worth showing.
        """
        namespace = settings.tag_namespace
        if namespace and old_key.startswith(namespace) and new_key.startswith(namespace):
            return (
                span(namespace, UNCHANGED) + span(old_key[len(namespace):], REMOVED),
                span(namespace, UNCHANGED) + span(new_key[len(namespace):], ADDED),
            )
        return span(old_key, REMOVED), span(new_key, ADDED)


_renderer = DiffRenderer()


def get_diff_html(original: Optional[str], suggested: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    return _renderer.get_diff_html(original, suggested)


def get_diff_tags_html(old_key: str, new_key: str) -> Tuple[str, str]:
    return DiffRenderer.get_diff_tags_html(old_key, new_key)
