"""Localized text, sizes and language selection."""

from menuhub.application.services.localization import (
    localized_sizes,
    localized_text,
    resolve_language,
    supported_languages,
)
from menuhub.domain.entities import Category, LanguageSettings, MenuItem


class TestLocalizedText:
    def test_blank_translation_falls_back_to_base(self) -> None:
        item = MenuItem(id="i1", name="Pizza", name_sq="")
        assert localized_text(item, "name", "sq") == "Pizza"

    def test_whitespace_translation_falls_back_to_base(self) -> None:
        item = MenuItem(id="i1", name="Pizza", name_sq="   ")
        assert localized_text(item, "name", "sq") == "Pizza"

    def test_translation_used_when_present(self) -> None:
        item = MenuItem(id="i1", name="Pizza", name_sq="Piceri")
        assert localized_text(item, "name", "sq") == "Piceri"
        assert localized_text(item, "name", "it") == "Pizza"

    def test_missing_everything_is_empty(self) -> None:
        assert localized_text(Category(id="c1"), "description", "sq") == ""

    def test_dict_rows(self) -> None:
        row = {"id": "c1", "name": "Drinks", "name_it": "Bevande"}
        assert localized_text(row, "name", "it") == "Bevande"
        assert localized_text(row, "name", None) == "Drinks"

    def test_non_string_translation_ignored(self) -> None:
        row = {"name": "Drinks", "name_sq": 42}
        assert localized_text(row, "name", "sq") == "Drinks"


class TestLocalizedSizes:
    def test_translated_sizes(self) -> None:
        item = MenuItem(
            id="i1",
            sizes=[{"name": "Small", "price": 5}],
            sizes_sq=[{"name": "E vogël", "price": 5}],
        )
        assert [s.name for s in localized_sizes(item, "sq")] == ["E vogël"]
        assert [s.name for s in localized_sizes(item, "en")] == ["Small"]

    def test_empty_or_malformed_translation_falls_back(self) -> None:
        item = MenuItem(id="i1", sizes=[{"name": "Small", "price": 5}], sizes_sq=[])
        assert [s.name for s in localized_sizes(item, "sq")] == ["Small"]
        item = MenuItem(id="i2", sizes=[{"name": "Small", "price": 5}], sizes_it=[{"name": 1}])
        assert [s.name for s in localized_sizes(item, "it")] == ["Small"]

    def test_no_sizes(self) -> None:
        assert localized_sizes(MenuItem(id="i1"), "sq") == []


class TestLanguageSelection:
    def test_defaults(self) -> None:
        assert supported_languages(None) == ["sq", "en"]
        assert resolve_language(None, None, "sq") == "sq"

    def test_requested_supported_language(self) -> None:
        settings = LanguageSettings(supported_ui_languages=["sq", "en", "it"], main_ui_language="en")
        assert resolve_language("it", settings, "sq") == "it"

    def test_unsupported_request_uses_tenant_main_language(self) -> None:
        settings = LanguageSettings(supported_ui_languages=["sq", "en"], main_ui_language="en")
        assert resolve_language("de", settings, "sq") == "en"

    def test_unsupported_request_without_main_language(self) -> None:
        assert resolve_language("de", None, "sq") == "sq"
