"""Fake Supabase client for exercising the storage and dashboard layers."""

from typing import Any, Dict, List, Optional


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, client: "FakeSupabaseClient", table_name: str):
        self.client = client
        self.table_name = table_name
        self._order: Optional[tuple] = None
        self._upsert: Optional[List[Dict[str, Any]]] = None

    def select(self, columns: str = "*"):
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def upsert(self, data):
        self._upsert = data if isinstance(data, list) else [data]
        return self

    async def execute(self):
        self.client.calls.append((self.table_name, "upsert" if self._upsert else "select"))
        error = self.client.errors.get(self.table_name)
        if error is not None:
            raise error
        if self._upsert is not None:
            self.client.upserts.append((self.table_name, self._upsert))
            return FakeResponse(self._upsert)
        rows = [
            dict(row) if isinstance(row, dict) else row
            for row in self.client.tables.get(self.table_name, [])
        ]
        if self._order:
            column, desc = self._order
            rows.sort(key=lambda r: r.get(column) or 0, reverse=desc)
        return FakeResponse(rows)


class FakeSupabaseClient:
    """Serves rows from in-memory tables and records every write."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables = tables or {}
        self.errors: Dict[str, Exception] = {}
        self.upserts: List[tuple] = []
        self.calls: List[tuple] = []
        self.channels: List["FakeChannel"] = []

    def table(self, table_name: str) -> FakeQuery:
        return FakeQuery(self, table_name)

    def channel(self, name: str, params=None) -> "FakeChannel":
        self.channels.append(FakeChannel(name))
        return self.channels[-1]


class FakeChannel:
    """Realtime channel that lets tests fire change events by hand."""

    def __init__(self, name: str):
        self.name = name
        self.handlers: Dict[str, Any] = {}
        self.subscribed = False

    def on_postgres_changes(self, event, callback, table="*", schema="public", filter=None):
        self.handlers[table] = callback
        return self

    async def subscribe(self, callback=None):
        self.subscribed = True
        return self

    def emit(self, table: str, event_type: str = "UPDATE") -> None:
        self.handlers[table]({"eventType": event_type, "table": table})

