"""Tests for the PostgREST row store using httpx.MockTransport."""

import json
from unittest.mock import Mock

import httpx
import pytest

from medportal.application.ports import ChangeType, OrderBy
from medportal.domain.shared import (
    BackendUnavailableError,
    ErrorCode,
    MissingColumnError,
    RowStoreError,
)
from medportal.infrastructure import PostgrestRowStore

BASE_URL = "http://baas.test/rest/v1"


class Recorder:
    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def _store(recorder, **kwargs) -> PostgrestRowStore:
    return PostgrestRowStore(
        BASE_URL, "anon-key", transport=httpx.MockTransport(recorder), **kwargs
    )


class TestPostgrestSelect:
    @pytest.mark.asyncio
    async def test_query_syntax(self):
        recorder = Recorder(httpx.Response(200, json=[{"id": "h1"}]))
        store = _store(recorder)

        rows = await store.select(
            "help_requests",
            columns=["id", "status"],
            filters={"hospital_id": "mohammed-6", "archived": False},
            order_by=OrderBy("created_at", descending=True),
        )

        assert rows == [{"id": "h1"}]
        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/help_requests"
        assert request.url.params["select"] == "id,status"
        assert request.url.params["hospital_id"] == "eq.mohammed-6"
        assert request.url.params["archived"] == "eq.false"
        assert request.url.params["order"] == "created_at.desc"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"
        await store.close()

    @pytest.mark.asyncio
    async def test_user_token_used_when_available(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        store = _store(recorder, access_token=lambda: "user-token")

        await store.select("departments")

        assert recorder.requests[0].headers["Authorization"] == "Bearer user-token"
        assert recorder.requests[0].url.params["select"] == "*"

    @pytest.mark.asyncio
    async def test_postgres_missing_column(self):
        recorder = Recorder(
            httpx.Response(
                400,
                json={
                    "code": "42703",
                    "message": "column help_requests.hospital_id does not exist",
                },
            )
        )

        with pytest.raises(MissingColumnError) as exc_info:
            await _store(recorder).select("help_requests", filters={"hospital_id": "x"})

        assert exc_info.value.column == "hospital_id"
        assert exc_info.value.backend_code == "42703"
        assert exc_info.value.code == ErrorCode.MISSING_COLUMN

    @pytest.mark.asyncio
    async def test_schema_cache_missing_column(self):
        recorder = Recorder(
            httpx.Response(
                400,
                json={
                    "code": "PGRST204",
                    "message": "Could not find the 'hospital_id' column of "
                    "'help_requests' in the schema cache",
                },
            )
        )

        with pytest.raises(MissingColumnError) as exc_info:
            await _store(recorder).insert("help_requests", {"hospital_id": "x"})
        assert exc_info.value.column == "hospital_id"

    @pytest.mark.asyncio
    async def test_other_backend_error(self):
        recorder = Recorder(
            httpx.Response(
                401, json={"code": "42501", "message": "permission denied for table"}
            )
        )

        with pytest.raises(RowStoreError) as exc_info:
            await _store(recorder).select("blood_bank")

        assert not isinstance(exc_info.value, MissingColumnError)
        assert exc_info.value.backend_code == "42501"
        assert exc_info.value.details["status"] == 401

    @pytest.mark.asyncio
    async def test_timeout(self):
        def _slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        store = PostgrestRowStore(BASE_URL, "k", transport=httpx.MockTransport(_slow))

        with pytest.raises(BackendUnavailableError):
            await store.select("doctors")


class TestPostgrestWrites:
    @pytest.mark.asyncio
    async def test_insert_returns_representation_and_notifies(self):
        stored = {"id": "w1", "department_id": "dep-er", "status": "waiting"}
        recorder = Recorder(httpx.Response(201, json=[stored]))
        store = _store(recorder)
        callback = Mock()
        store.subscribe("waiting_list", callback)
        other_table = Mock()
        store.subscribe("reviews", other_table)

        row = await store.insert("waiting_list", {"department_id": "dep-er"})

        assert row == stored
        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        assert json.loads(request.content) == {"department_id": "dep-er"}
        change = callback.call_args[0][0]
        assert change.change_type == ChangeType.INSERT
        assert change.row == stored
        other_table.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_filters_and_notifies_each_row(self):
        recorder = Recorder(httpx.Response(200, json=[{"id": "h1", "status": "resolved"}]))
        store = _store(recorder)
        callback = Mock()
        store.subscribe("help_requests", callback)

        rows = await store.update("help_requests", {"status": "resolved"}, {"id": "h1"})

        assert rows == [{"id": "h1", "status": "resolved"}]
        request = recorder.requests[0]
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.h1"
        assert callback.call_args[0][0].change_type == ChangeType.UPDATE

    @pytest.mark.asyncio
    async def test_delete_without_matches_is_silent(self):
        recorder = Recorder(httpx.Response(200, json=[]))
        store = _store(recorder)
        callback = Mock()
        subscription = store.subscribe("help_requests", callback)

        assert await store.delete("help_requests", {"id": "nope"}) == []
        assert recorder.requests[0].method == "DELETE"
        callback.assert_not_called()
        subscription.unsubscribe()

    @pytest.mark.asyncio
    async def test_failed_write_does_not_notify(self):
        recorder = Recorder(httpx.Response(409, json={"code": "23505", "message": "dup"}))
        store = _store(recorder)
        callback = Mock()
        store.subscribe("reviews", callback)

        with pytest.raises(RowStoreError):
            await store.insert("reviews", {"id": "r1"})
        callback.assert_not_called()
