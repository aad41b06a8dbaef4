"""PostgREST helpers, TenantConnection and SupabaseDirectoryStore over httpx.MockTransport."""

import httpx
import pytest

from menuhub.domain.exceptions import ConnectionUnavailable, DirectoryUnavailable
from menuhub.infrastructure.supabase import (
    PostgrestError,
    SupabaseDirectoryStore,
    TenantConnection,
)
from menuhub.infrastructure.supabase._rest_client import (
    encode_filters,
    encode_order,
    escape_like,
    has_wildcard,
    rest_url,
)
from tests.fakes import make_record


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestEncoding:
    def test_rest_url_strips_trailing_slash(self) -> None:
        assert rest_url("https://x.supabase.co/", "categories") == (
            "https://x.supabase.co/rest/v1/categories"
        )
        assert rest_url("https://x.supabase.co") == "https://x.supabase.co/rest/v1/"

    def test_filters(self) -> None:
        assert encode_filters({"is_active": True, "category_id": "c1", "deleted_at": None}) == [
            ("is_active", "is.true"),
            ("category_id", "eq.c1"),
            ("deleted_at", "is.null"),
        ]
        assert encode_filters(None) == []

    def test_order_puts_nulls_last(self) -> None:
        assert encode_order([("display_order", True), ("created_at", False)]) == (
            "display_order.asc.nullslast,created_at.desc.nullslast"
        )
        assert encode_order(None) is None

    def test_escape_like(self) -> None:
        assert escape_like("100%_bar\\") == "100\\%\\_bar\\\\"

    def test_has_wildcard(self) -> None:
        assert has_wildcard("Blue*")
        assert not has_wildcard("100% Blue")


class TestTenantConnection:
    async def test_select_encodes_query_and_sends_key(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "c1"}])

        async with _client(handler) as http:
            conn = TenantConnection(make_record(), http)
            rows = await conn.select(
                "categories",
                filters={"is_active": True},
                order=[("display_order", True)],
                limit=5,
            )

        assert rows == [{"id": "c1"}]
        request = seen[0]
        assert request.url.path == "/rest/v1/categories"
        assert request.url.params["select"] == "*"
        assert request.url.params["is_active"] == "is.true"
        assert request.url.params["order"] == "display_order.asc.nullslast"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "anon-key-blue"
        assert request.headers["authorization"] == "Bearer anon-key-blue"

    async def test_select_error_status_raises(self) -> None:
        async with _client(lambda r: httpx.Response(404, text="relation missing")) as http:
            conn = TenantConnection(make_record(), http)
            with pytest.raises(PostgrestError) as exc_info:
                await conn.select("popup_settings")
        assert exc_info.value.status_code == 404
        assert exc_info.value.table == "popup_settings"

    async def test_select_rejects_non_array(self) -> None:
        async with _client(lambda r: httpx.Response(200, json={"id": "x"})) as http:
            with pytest.raises(PostgrestError):
                await TenantConnection(make_record(), http).select("categories")

    async def test_update_patches_with_representation(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"id": "c1", "name_sq": "Pije"}])

        async with _client(handler) as http:
            rows = await TenantConnection(make_record(), http).update(
                "categories", {"name_sq": "Pije"}, {"id": "c1"}
            )

        assert rows == [{"id": "c1", "name_sq": "Pije"}]
        assert seen[0].method == "PATCH"
        assert seen[0].url.params["id"] == "eq.c1"
        assert seen[0].headers["prefer"] == "return=representation"

    async def test_update_requires_filter(self) -> None:
        async with _client(lambda r: httpx.Response(200, json=[])) as http:
            with pytest.raises(ValueError):
                await TenantConnection(make_record(), http).update("categories", {"a": 1}, {})

    async def test_ping_tolerates_client_errors(self) -> None:
        async with _client(lambda r: httpx.Response(404)) as http:
            await TenantConnection(make_record(), http).ping()

    @pytest.mark.parametrize("status", [500, 503, 401, 403])
    async def test_ping_failure_statuses(self, status: int) -> None:
        async with _client(lambda r: httpx.Response(status)) as http:
            with pytest.raises(ConnectionUnavailable) as exc_info:
                await TenantConnection(make_record(), http).ping()
        assert exc_info.value.details["endpoint"] == "https://blue.supabase.co"

    async def test_ping_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as http:
            with pytest.raises(ConnectionUnavailable) as exc_info:
                await TenantConnection(make_record(), http).ping()
        assert exc_info.value.details["reason"] == "ConnectError"

    def test_repr_hides_key(self) -> None:
        conn = TenantConnection(make_record(), httpx.AsyncClient())
        assert "anon-key-blue" not in repr(conn)


_DIRECTORY_ROW = {
    "id": 7,
    "name": "The Blue Lagoon",
    "supabase_url": "https://blue.supabase.co",
    "supabase_anon_key": "anon-key-blue",
}

_BROKEN_ROW = {"id": "x", "name": "Broken Blue", "supabase_url": None, "supabase_anon_key": None}


class TestSupabaseDirectoryStore:
    async def test_exact_lookup(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[_DIRECTORY_ROW])

        async with _client(handler) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            record = await store.find_by_exact_name("The Blue Lagoon")

        assert record is not None
        assert record.id == "7"
        assert record.data_endpoint == "https://blue.supabase.co"
        assert seen[0].url.path == "/rest/v1/restaurants"
        assert seen[0].url.params["name"] == "eq.The Blue Lagoon"
        assert seen[0].url.params["limit"] == "1"

    async def test_exact_miss(self) -> None:
        async with _client(lambda r: httpx.Response(200, json=[])) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            assert await store.find_by_exact_name("Nobody") is None

    async def test_partial_lookup_escapes_pattern(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[_DIRECTORY_ROW])

        async with _client(handler) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            records = await store.find_by_partial_name("100% Blue")

        assert [r.display_name for r in records] == ["The Blue Lagoon"]
        assert seen[0].url.params["name"] == "ilike.*100\\% Blue*"
        assert seen[0].url.params["limit"] == "2"

    async def test_row_without_credentials_is_skipped(self) -> None:
        rows = [_BROKEN_ROW]
        async with _client(lambda r: httpx.Response(200, json=rows)) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            assert await store.find_by_exact_name("Broken") is None
            assert await store.find_by_partial_name("b") == []

    async def test_broken_row_still_makes_partial_match_ambiguous(self) -> None:
        rows = [_BROKEN_ROW, _DIRECTORY_ROW]
        async with _client(lambda r: httpx.Response(200, json=rows)) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            records = await store.find_by_partial_name("Blue")
        assert records == []

    @pytest.mark.parametrize("pattern", ["*", "Blue*Lagoon"])
    async def test_wildcard_pattern_is_never_sent(self, pattern: str) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[_DIRECTORY_ROW])

        async with _client(handler) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            assert await store.find_by_partial_name(pattern) == []
        assert seen == []

    async def test_server_error_is_unavailable(self) -> None:
        async with _client(lambda r: httpx.Response(503)) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            with pytest.raises(DirectoryUnavailable):
                await store.find_by_exact_name("The Blue Lagoon")

    async def test_transport_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with _client(handler) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            with pytest.raises(DirectoryUnavailable):
                await store.find_by_exact_name("The Blue Lagoon")

    async def test_client_error_propagates(self) -> None:
        async with _client(lambda r: httpx.Response(400, text="bad filter")) as http:
            store = SupabaseDirectoryStore("https://dir.supabase.co", "dir-key", http)
            with pytest.raises(PostgrestError):
                await store.find_by_exact_name("The Blue Lagoon")
