"""Translation: HTTP machine-translation backends (menuhub.application.interfaces.Translator)."""

from menuhub.infrastructure.external.translation.http_translator import (
    LANGUAGE_MAP,
    HttpTranslator,
)

__all__ = ["LANGUAGE_MAP", "HttpTranslator"]
