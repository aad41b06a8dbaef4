"""MenuService pipeline and MenuSession navigation guard."""

import asyncio

import pytest

from menuhub.application.use_cases.menu import MenuSession
from menuhub.domain.exceptions import ConnectionUnavailable, MalformedSlug, TenantNotFound
from tests.fakes import (
    FakeTenantStore,
    InMemoryDirectoryStore,
    build_menu_service,
    make_record,
)


async def test_open_menu_returns_record_and_view(menu_service, blue_lagoon) -> None:
    record, view = await menu_service.open_menu("the-blue-lagoon")
    assert record.display_name == "The Blue Lagoon"
    assert view.profile.name == "The Blue Lagoon"
    assert view.categories == []
    assert blue_lagoon.pings == 1


async def test_malformed_slug_never_reaches_directory(menu_service, directory) -> None:
    with pytest.raises(MalformedSlug):
        await menu_service.open_menu("%FF")
    assert directory.exact_calls == []


async def test_unknown_restaurant_reads_no_menu_data(menu_service, blue_lagoon) -> None:
    with pytest.raises(TenantNotFound):
        await menu_service.open_menu("nowhere-cafe")
    assert blue_lagoon.select_calls == []


async def test_unreachable_tenant_reads_no_menu_data(directory) -> None:
    store = FakeTenantStore(unreachable=True)
    service = build_menu_service(directory, {store.endpoint: store})
    with pytest.raises(ConnectionUnavailable):
        await service.open_menu("the-blue-lagoon")
    assert store.pings == 1
    assert store.select_calls == []


async def test_category_filter_forwarded(menu_service, blue_lagoon) -> None:
    await menu_service.open_menu("the-blue-lagoon", category_id="c1")
    assert ("menu_items", {"is_available": True, "category_id": "c1"}) in blue_lagoon.select_calls


async def test_resolve_does_not_touch_tenant(menu_service, blue_lagoon) -> None:
    record = await menu_service.resolve("the-blue-lagoon")
    assert record.id == "r1"
    assert blue_lagoon.pings == 0


class TestMenuSession:
    async def test_newer_open_supersedes_in_flight_load(self) -> None:
        slow = FakeTenantStore(blocker=asyncio.Event())
        fast = FakeTenantStore(
            endpoint="https://sea.supabase.co",
            tables={"restaurant_profile": [{"name": "Sea Breeze"}]},
        )
        directory = InMemoryDirectoryStore(
            [
                make_record(),
                make_record(name="Sea Breeze", record_id="r2", endpoint=fast.endpoint),
            ]
        )
        stores = {slow.endpoint: slow, fast.endpoint: fast}
        session = MenuSession(build_menu_service(directory, stores))

        first = asyncio.create_task(session.open("the-blue-lagoon"))
        await asyncio.sleep(0.01)
        second = await session.open("sea-breeze")

        assert await first is None
        record, view = second
        assert record.display_name == "Sea Breeze"
        assert view.profile.name == "Sea Breeze"

    async def test_cancel_drops_in_flight_load(self) -> None:
        slow = FakeTenantStore(blocker=asyncio.Event())
        service = build_menu_service(InMemoryDirectoryStore([make_record()]), {slow.endpoint: slow})
        session = MenuSession(service)

        pending = asyncio.create_task(session.open("the-blue-lagoon"))
        await asyncio.sleep(0.01)
        session.cancel()

        assert await pending is None

    async def test_errors_of_latest_load_propagate(self, menu_service) -> None:
        with pytest.raises(TenantNotFound):
            await MenuSession(menu_service).open("nowhere-cafe")
