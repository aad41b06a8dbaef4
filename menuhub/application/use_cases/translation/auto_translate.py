"""Auto-translation of category and menu item texts, with provenance.

Only missing translations are filled: a ``name_<lang>`` that already holds
text (typed by staff or approved earlier) is never overwritten. Every
value written records who produced it in ``translation_metadata``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from menuhub.application.interfaces import ITenantDataStore, Translator
from menuhub.application.services.localization import field_value
from menuhub.core.constants import TRANSLATABLE_FIELDS
from menuhub.domain.enums import TranslatableKind, TranslationStatus
from menuhub.domain.exceptions import ValidationException
from menuhub.domain.value_objects import LocalizedFieldKey, TranslationMark, TranslationMetadata
from menuhub.shared.telemetry.tracing import traced
from menuhub.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

AUTO_TRANSLATE_SOURCE = "auto-translate"
MANUAL_SOURCE = "manual"


@dataclass
class TranslationResult:
    """Outcome of one translate_entity call."""

    entity_id: str
    kind: TranslatableKind
    translations: dict[str, str] = field(default_factory=dict)
    metadata: TranslationMetadata = field(default_factory=TranslationMetadata)
    updated_row: dict[str, Any] | None = None

    @property
    def changed(self) -> bool:
        return bool(self.translations)


def _entity_id(entity: Any) -> str:
    entity_id = field_value(entity, "id")
    if not isinstance(entity_id, str) or not entity_id:
        raise ValidationException("Entity has no id", field="id")
    return entity_id


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class AutoTranslateService:
    """Fills and annotates translations for categories and menu items."""

    def __init__(
        self,
        translator: Translator,
        source_lang: str = "en",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.translator = translator
        self.source_lang = source_lang
        self._clock = clock

    def _load_metadata(self, entity: Any, entity_id: str) -> TranslationMetadata:
        try:
            return TranslationMetadata.from_json(field_value(entity, "translation_metadata"))
        except ValidationException:
            logger.warning(
                "Discarding malformed translation_metadata on %s; starting fresh", entity_id
            )
            return TranslationMetadata()

    @traced("translation.translate_entity")
    async def translate_entity(
        self,
        connection: ITenantDataStore,
        kind: TranslatableKind,
        entity: Any,
        target_lang: str,
    ) -> TranslationResult:
        """Translate every missing ``<field>_<target_lang>`` and persist it.

        Args:
            connection: Tenant handle used for the PATCH.
            kind: Category or menu item (selects the table).
            entity: Row model or dict row with ``id`` and base texts.
            target_lang: Two-letter language code.

        Returns:
            TranslationResult; ``changed`` is False when nothing was missing.

        Raises:
            TranslationFailed: The translator could not translate a text.
            ValidationException: Invalid entity or language code.
        """
        entity_id = _entity_id(entity)
        metadata = self._load_metadata(entity, entity_id)
        result = TranslationResult(entity_id=entity_id, kind=kind, metadata=metadata)

        for base_field in TRANSLATABLE_FIELDS:
            key = LocalizedFieldKey(base_field, target_lang)
            base_text = field_value(entity, base_field)
            if not _has_text(base_text) or _has_text(field_value(entity, str(key))):
                continue
            translated = await self.translator.translate(
                base_text, self.source_lang, target_lang
            )
            result.translations[str(key)] = translated
            metadata.mark(
                key,
                TranslationMark(
                    status=TranslationStatus.AUTO_TRANSLATED,
                    timestamp=self._clock(),
                    source=AUTO_TRANSLATE_SOURCE,
                ),
            )

        if not result.changed:
            logger.debug("No translations needed for %s %s", kind.value, entity_id)
            return result

        rows = await connection.update(
            kind.table,
            {**result.translations, "translation_metadata": metadata.to_json()},
            {"id": entity_id},
        )
        result.updated_row = rows[0] if rows else None
        logger.info(
            "Auto-translated %s %s to %s (%s fields)",
            kind.value,
            entity_id,
            target_lang,
            len(result.translations),
        )
        return result

    async def mark_field(
        self,
        connection: ITenantDataStore,
        kind: TranslatableKind,
        entity: Any,
        field_name: str,
        lang: str,
        status: TranslationStatus,
        value: str | None = None,
    ) -> TranslationMetadata:
        """Record a manual edit or approval of one translated field.

        A manual edit must carry the new value, which is written together
        with the updated metadata. Approval only updates the metadata.
        """
        if field_name not in TRANSLATABLE_FIELDS:
            raise ValidationException(
                f"Field {field_name!r} is not translatable", field="field"
            )
        if status is TranslationStatus.AUTO_TRANSLATED:
            raise ValidationException(
                "Use translate_entity for automatic translations", field="status"
            )
        if status is TranslationStatus.MANUALLY_EDITED and value is None:
            raise ValidationException("A manual edit needs a value", field="value")

        entity_id = _entity_id(entity)
        key = LocalizedFieldKey(field_name, lang)
        metadata = self._load_metadata(entity, entity_id)
        metadata.mark(
            key,
            TranslationMark(status=status, timestamp=self._clock(), source=MANUAL_SOURCE),
        )
        values: dict[str, Any] = {"translation_metadata": metadata.to_json()}
        if value is not None:
            values[str(key)] = value
        await connection.update(kind.table, values, {"id": entity_id})
        return metadata
