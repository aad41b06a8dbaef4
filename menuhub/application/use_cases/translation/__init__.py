"""Translation use cases: auto-translate missing texts and track provenance."""

from menuhub.application.use_cases.translation.auto_translate import (
    AutoTranslateService,
    TranslationResult,
)

__all__ = ["AutoTranslateService", "TranslationResult"]
