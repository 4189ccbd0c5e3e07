"""
Jinja2 compiler hook: annotate templates as they are loaded.
"""

import logging
import os

from jinja2 import Environment
from jinja2.ext import Extension

from refine.config import Settings
from refine.core.instrument import Instrumenter
from refine.core.paths import to_template_id

logger = logging.getLogger(__name__)

JINJA_DEFAULTS = {"dialect": "jinja", "template_extension": ".html"}


class SourceTraceExtension(Extension):
    """Jinja2 extension that adds a source marker attribute to opening tags.

    Jinja hands ``preprocess`` the absolute file name of the template being
    compiled, which is all the engine needs besides the source itself.
    """

    def __init__(self, environment: Environment) -> None:
        super().__init__(environment)
        environment.extend(refine_settings=Settings(**JINJA_DEFAULTS), refine_instrumenter=None)

    @property
    def settings(self) -> Settings:
        return self.environment.refine_settings  # type: ignore[attr-defined,no-any-return]

    def _instrumenter(self) -> Instrumenter:
        instrumenter = self.environment.refine_instrumenter  # type: ignore[attr-defined]
        if instrumenter is None or instrumenter.settings is not self.settings:
            instrumenter = Instrumenter(self.settings)
            self.environment.refine_instrumenter = instrumenter  # type: ignore[attr-defined]
        return instrumenter  # type: ignore[no-any-return]

    def _roots(self) -> list[str]:
        if self.settings.template_roots:
            return list(self.settings.template_roots)
        searchpath = getattr(self.environment.loader, "searchpath", None) or []
        return [os.path.abspath(p) for p in searchpath]

    def preprocess(self, source: str, name: str | None, filename: str | None = None) -> str:
        if not self.settings.enabled or not filename:
            return source

        absolute = os.path.abspath(filename)
        template_id = to_template_id(absolute, self._roots(), self.settings.template_extension)

        try:
            with open(absolute, encoding="utf-8") as handle:
                original = handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read %s for line anchoring: %s", absolute, exc)
            original = None

        return self._instrumenter().instrument(source, template_id, original)


def configure(environment: Environment, settings: Settings) -> None:
    """Attach *settings* to an environment that has ``SourceTraceExtension`` loaded."""
    environment.refine_settings = settings  # type: ignore[attr-defined]
    environment.refine_instrumenter = None  # type: ignore[attr-defined]
