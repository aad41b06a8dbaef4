"""Reward wheel, menu search, menu links and image storage URLs."""

import pytest

from menuhub.application.services.menu_links import build_menu_url
from menuhub.application.services.menu_search import search_menu
from menuhub.application.services.popup_wheel import normalized_chances, pick_wheel_reward
from menuhub.core.config import get_settings
from menuhub.domain.entities import Category, MenuItem, WheelReward
from menuhub.domain.exceptions import ValidationException
from menuhub.infrastructure.external.storage import ImageStorageFactory, SupabaseImageStorage


class TestWheel:
    REWARDS = [
        WheelReward(text="Coffee", chance=50),
        WheelReward(text="Dessert", chance=30),
        WheelReward(text="Nothing", chance=20),
    ]

    def test_chances_normalized_to_hundred(self) -> None:
        rewards = [WheelReward(text="a", chance=1), WheelReward(text="b", chance=3)]
        assert normalized_chances(rewards) == [25.0, 75.0]

    @pytest.mark.parametrize(
        ("roll", "expected"),
        [(0.0, "Coffee"), (0.4, "Coffee"), (0.51, "Dessert"), (0.75, "Dessert"), (0.99, "Nothing")],
    )
    def test_pick_by_cumulative_chance(self, roll: float, expected: str) -> None:
        assert pick_wheel_reward(self.REWARDS, rng=lambda: roll).text == expected

    def test_all_zero_chances_pick_first(self) -> None:
        rewards = [WheelReward(text="a", chance=0), WheelReward(text="b", chance=0)]
        assert pick_wheel_reward(rewards, rng=lambda: 0.7).text == "a"

    def test_empty_wheel_rejected(self) -> None:
        with pytest.raises(ValidationException):
            pick_wheel_reward([])


class TestSearch:
    CATEGORIES = [Category(id="c1", name="Drinks", name_sq="Pije")]
    ITEMS = [
        MenuItem(id="i1", category_id="c1", name="Espresso", description="Strong coffee"),
        MenuItem(id="i2", category_id="c2", name="Pizza", name_sq="Pica", description="Tomato"),
    ]

    def test_blank_term_returns_everything(self) -> None:
        assert [i.id for i in search_menu(self.ITEMS, "  ", "en")] == ["i1", "i2"]

    def test_matches_name_case_insensitively(self) -> None:
        assert [i.id for i in search_menu(self.ITEMS, "PIZ", "en")] == ["i2"]

    def test_matches_localized_name(self) -> None:
        assert [i.id for i in search_menu(self.ITEMS, "pica", "sq")] == ["i2"]
        assert search_menu(self.ITEMS, "pica", "en") == []

    def test_matches_description_and_category(self) -> None:
        assert [i.id for i in search_menu(self.ITEMS, "coffee", "en")] == ["i1"]
        assert [i.id for i in search_menu(self.ITEMS, "pije", "sq", self.CATEGORIES)] == ["i1"]


class TestMenuLinks:
    def test_default_layout(self) -> None:
        assert build_menu_url("https://menu.example.com/", "The Blue Lagoon") == (
            "https://menu.example.com/menu/the-blue-lagoon"
        )

    def test_all_items_layout(self) -> None:
        assert build_menu_url("https://menu.example.com", "Café Roma", "all-items") == (
            "https://menu.example.com/menu/caf%C3%A9-roma?layout=all-items"
        )

    def test_unknown_layout(self) -> None:
        with pytest.raises(ValueError):
            build_menu_url("https://menu.example.com", "Blue", "grid")


class TestImageStorage:
    def test_public_url(self) -> None:
        storage = SupabaseImageStorage("https://blue.supabase.co/", "menu-images")
        assert storage.get_public_url("/items/pizza margherita.jpg") == (
            "https://blue.supabase.co/storage/v1/object/public/menu-images/"
            "items/pizza%20margherita.jpg"
        )

    @pytest.mark.parametrize("path", ["", "  ", "../x.jpg", "items/../../x.jpg"])
    def test_rejected_paths(self, path: str) -> None:
        with pytest.raises(ValidationException):
            SupabaseImageStorage("https://blue.supabase.co", "menu-images").get_public_url(path)

    def test_factory_uses_configured_bucket(self) -> None:
        factory = ImageStorageFactory(get_settings().model_copy(update={"storage_bucket": "pics"}))
        assert factory("https://blue.supabase.co").get_public_url("a.png").endswith("/pics/a.png")
