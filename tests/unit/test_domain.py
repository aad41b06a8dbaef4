"""Domain exceptions, TenantRecord, NameCandidateSet and row entities."""

import pytest

from menuhub.domain.entities import MenuItem, TenantRecord
from menuhub.domain.enums import TranslatableKind, TranslationStatus
from menuhub.domain.exceptions import (
    ConnectionUnavailable,
    DirectoryUnavailable,
    MalformedSlug,
    MenuhubException,
    TenantNotFound,
    ValidationException,
)
from menuhub.domain.value_objects import NameCandidateSet
from tests.fakes import make_record


class TestExceptions:
    def test_default_error_code_is_class_name(self) -> None:
        assert MenuhubException("boom").error_code == "MenuhubException"

    def test_to_dict(self) -> None:
        exc = TenantNotFound(["The Blue Lagoon", "the-blue-lagoon"])
        assert exc.to_dict() == {
            "error": "TENANT_NOT_FOUND",
            "message": "Restaurant not found.",
            "details": {
                "candidates": ["The Blue Lagoon", "the-blue-lagoon"],
                "partial_matches": 0,
            },
        }

    def test_malformed_slug_escapes_raw_value(self) -> None:
        exc = MalformedSlug("bad\x00", "control characters")
        assert exc.details == {"slug": "'bad\\x00'", "reason": "control characters"}

    def test_directory_unavailable_is_connection_unavailable(self) -> None:
        exc = DirectoryUnavailable("https://dir.supabase.co", "ConnectError")
        assert isinstance(exc, ConnectionUnavailable)
        assert exc.error_code == "CONNECTION_UNAVAILABLE"
        assert exc.message == "Menu temporarily unavailable."

    def test_validation_field(self) -> None:
        assert ValidationException("bad", field="lang").details == {"field": "lang"}
        assert ValidationException("bad").details == {}


class TestTenantRecord:
    def test_repr_hides_access_key(self) -> None:
        assert "anon-key-blue" not in repr(make_record())

    @pytest.mark.parametrize("missing", ["id", "data_endpoint", "data_access_key"])
    def test_required_fields(self, missing: str) -> None:
        fields = make_record().to_cache()
        fields[missing] = ""
        with pytest.raises(ValidationException):
            TenantRecord.from_cache(fields)

    def test_cache_round_trip(self) -> None:
        record = make_record()
        assert TenantRecord.from_cache(record.to_cache()) == record


class TestNameCandidateSet:
    def test_from_iterable_dedups_and_drops_empty(self) -> None:
        candidates = NameCandidateSet.from_iterable(["A", "", "b", "A"])
        assert list(candidates) == ["A", "b"]
        assert candidates.first == "A"
        assert len(candidates) == 2

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError):
            NameCandidateSet(())
        with pytest.raises(ValueError):
            NameCandidateSet.from_iterable(["", ""])

    def test_duplicates_rejected(self) -> None:
        with pytest.raises(ValueError):
            NameCandidateSet(("a", "a"))


class TestEntities:
    def test_strict_scalars_not_coerced(self) -> None:
        with pytest.raises(ValueError):
            MenuItem(id="i1", is_available="true")
        with pytest.raises(ValueError):
            MenuItem(id="i1", display_order="3")

    def test_localized_extras_kept(self) -> None:
        item = MenuItem.model_validate({"id": "i1", "name": "Pizza", "name_sq": "Pica"})
        assert item.model_extra == {"name_sq": "Pica"}


class TestEnums:
    def test_translation_status_values(self) -> None:
        assert TranslationStatus.values() == ["auto_translated", "manually_edited", "approved"]

    def test_kind_tables(self) -> None:
        assert TranslatableKind.CATEGORY.table == "categories"
        assert TranslatableKind.MENU_ITEM.table == "menu_items"
