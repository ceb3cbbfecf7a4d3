# standings/storage/supabase_client.py
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx
from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from standings.config.settings import settings
from standings.models.enums import GameResult

# Module-level storage for the async client instance
_async_supabase_client: Optional[AsyncClient] = None


class StoreError(Exception):
    """Raised when a read from the backend fails for good."""

    pass


async def initialize_supabase() -> Optional[AsyncClient]:
    """Initializes the global ASYNC Supabase client and returns it."""
    global _async_supabase_client
    if _async_supabase_client:
        logger.debug("Async Supabase client already initialized.")
        return _async_supabase_client

    if not settings.supabase_url or not settings.supabase_key:
        logger.critical("Supabase URL or Key not configured in settings.")
        raise SystemExit("Supabase configuration missing.")

    logger.debug(
        f"Attempting to initialize Async Supabase client with URL: {settings.supabase_url}"
    )

    try:
        client: AsyncClient = await create_async_client(
            settings.supabase_url, settings.supabase_key
        )
        _async_supabase_client = client
        logger.success("Async Supabase client initialized successfully.")
        return client
    except Exception as e:
        logger.exception(f"Failed to initialize Async Supabase client: {e}")
        return None


async def _fetch_rows(
    client: AsyncClient,
    table_name: str,
    order_by: Optional[str] = None,
    descending: bool = False,
) -> List[Dict[str, Any]]:
    """Selects every row of `table_name`, retrying network failures."""
    try:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(settings.fetch_retry_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=False,
        ):
            with attempt:
                query = client.table(table_name).select("*")
                if order_by:
                    query = query.order(order_by, desc=descending)
                response: APIResponse = await query.execute()
    except RetryError as e:
        logger.error(
            f"Max retries exceeded fetching {table_name}. Last exception: {e.last_attempt.exception()}"
        )
        raise StoreError(f"Failed to fetch {table_name} after retries") from e
    except APIError as e:
        logger.error(f"Supabase API error fetching {table_name}: {e.message}")
        logger.debug(f"Full APIError details: {e}")
        raise StoreError(f"API error fetching {table_name}") from e

    rows = response.data or []
    logger.debug(f"Fetched {len(rows)} rows from {table_name}.")
    return rows


async def fetch_teams(client: AsyncClient) -> List[Dict[str, Any]]:
    return await _fetch_rows(client, settings.teams_table)


async def fetch_feed(client: AsyncClient) -> List[Dict[str, Any]]:
    return await _fetch_rows(client, settings.feed_table)


async def fetch_player_stats(client: AsyncClient) -> List[Dict[str, Any]]:
    """Player averages, top scorers first."""
    return await _fetch_rows(
        client, settings.players_table, order_by="pontos", descending=True
    )


async def fetch_unavailable_players(client: AsyncClient) -> List[Dict[str, Any]]:
    return await _fetch_rows(client, settings.injuries_table)


async def _handle_upsert(
    client: AsyncClient, table_name: str, data: List[Dict[str, Any]]
) -> bool:
    """Handles the upsert operation for a given table using the ASYNC client."""
    if not client:
        logger.error("Async Supabase client not available for upsert.")
        return False

    if not data:
        logger.debug(f"No data provided for upsert to table {table_name}. Skipping.")
        return True

    try:
        await client.table(table_name).upsert(data).execute()
        logger.success(
            f"Successfully upserted {len(data)} records to {table_name} (async)."
        )
        return True
    except APIError as e:
        logger.error(f"Error during async upsert to {table_name}: {e.message}")
        logger.debug(f"Full APIError details: {e}")
        return False
    except Exception as e:
        logger.error(
            f"An unexpected error occurred during async upsert to {table_name}: {e}"
        )
        logger.exception("Traceback:")
        return False


async def persist_record(
    client: AsyncClient, team_id: int, record: Sequence[GameResult]
) -> bool:
    """Writes a team's last-five record back to the teams table."""
    payload = {"id": team_id, "record": [GameResult(r).value for r in record]}
    return await _handle_upsert(client, settings.teams_table, [payload])


async def subscribe_changes(
    client: AsyncClient,
    tables: Sequence[str],
    callback: Callable[[str], Any],
):
    """Calls `callback(table)` whenever a row in one of `tables` changes."""

    def _handler_for(table: str) -> Callable[[Dict[str, Any]], None]:
        def _on_change(payload: Dict[str, Any]) -> None:
            logger.debug(f"Change notification for {table}: {payload.get('eventType', '?')}")
            callback(table)

        return _on_change

    channel = client.channel(settings.realtime_channel)
    for table in tables:
        channel = channel.on_postgres_changes(
            event="*", schema="public", table=table, callback=_handler_for(table)
        )
    await channel.subscribe()
    logger.info(f"Subscribed to changes on {list(tables)} via {settings.realtime_channel}.")
    return channel
