"""Unit tests for standings/storage/supabase_client.py against a fake client."""

import httpx
import pytest
from postgrest.exceptions import APIError

from standings.config.settings import settings
from standings.models.enums import GameResult
from standings.storage.supabase_client import (
    StoreError,
    fetch_feed,
    fetch_player_stats,
    fetch_teams,
    persist_record,
    subscribe_changes,
)
from tests.mocks import FakeSupabaseClient

V = GameResult.WIN
D = GameResult.LOSS


def api_error(message="relation does not exist"):
    return APIError({"message": message, "code": "42P01", "hint": None, "details": None})


class TestFetch:
    """Tests for the bulk read helpers."""

    @pytest.mark.asyncio
    async def test_fetch_teams(self):
        client = FakeSupabaseClient({settings.teams_table: [{"id": 1, "name": "Celtics"}]})
        assert await fetch_teams(client) == [{"id": 1, "name": "Celtics"}]

    @pytest.mark.asyncio
    async def test_empty_table_is_empty_list(self):
        assert await fetch_feed(FakeSupabaseClient()) == []

    @pytest.mark.asyncio
    async def test_players_ordered_by_points(self):
        client = FakeSupabaseClient({
            settings.players_table: [
                {"nome": "A", "pontos": 12.0},
                {"nome": "B", "pontos": 30.1},
                {"nome": "C", "pontos": 25.4},
            ]
        })
        rows = await fetch_player_stats(client)
        assert [r["nome"] for r in rows] == ["B", "C", "A"]

    @pytest.mark.asyncio
    async def test_api_error_becomes_store_error(self):
        client = FakeSupabaseClient()
        client.errors[settings.teams_table] = api_error()
        with pytest.raises(StoreError):
            await fetch_teams(client)
        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_after_retries(self, monkeypatch):
        monkeypatch.setattr(settings, "fetch_retry_attempts", 1)
        client = FakeSupabaseClient()
        client.errors[settings.feed_table] = httpx.ConnectError("connection refused")
        with pytest.raises(StoreError):
            await fetch_feed(client)


class TestPersistRecord:
    """Tests for the record write-back."""

    @pytest.mark.asyncio
    async def test_upserts_id_and_letters(self):
        client = FakeSupabaseClient()
        assert await persist_record(client, 7, [D, D, V, V, V]) is True
        assert client.upserts == [(settings.teams_table, [{"id": 7, "record": ["D", "D", "V", "V", "V"]}])]

    @pytest.mark.asyncio
    async def test_failure_returns_false(self):
        client = FakeSupabaseClient()
        client.errors[settings.teams_table] = api_error("permission denied")
        assert await persist_record(client, 7, [V] * 5) is False

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_false(self):
        client = FakeSupabaseClient()
        client.errors[settings.teams_table] = RuntimeError("socket closed")
        assert await persist_record(client, 7, [V] * 5) is False


class TestSubscribeChanges:
    """Tests for realtime change subscriptions."""

    @pytest.mark.asyncio
    async def test_callback_receives_table(self):
        client = FakeSupabaseClient()
        seen = []

        channel = await subscribe_changes(client, ["teams", "classificacao_nba"], seen.append)
        channel.emit("classificacao_nba")
        channel.emit("teams", "INSERT")

        assert channel.name == settings.realtime_channel
        assert channel.subscribed
        assert seen == ["classificacao_nba", "teams"]
