# batepapo/server/runtime/store/dao/messages_dao.py
from __future__ import annotations

from typing import Any

from batepapo.server.runtime.limits import MAX_SQL_LIMIT

from ..engines.engine import Engine

_COLUMNS = "seq, sender, recipient, text, type, time"


class MessagesDAO:
    def __init__(self, engine: Engine):
        self.e = engine

    def append(self, row: dict[str, Any]) -> int:
        placeholders = self.e.placeholders(5)
        out = self.e.query_one(
            f"""
            INSERT INTO messages(sender, recipient, text, type, time)
            VALUES {placeholders}
            RETURNING seq;
            """,
            (row["sender"], row["recipient"], row["text"], row["type"], row["time"]),
        )
        assert out is not None
        return int(out["seq"])

    def load_visible(self, viewer: str | None, limit: int | None) -> list[dict]:
        """Newest first. Private messages only when `viewer` is the sender or recipient."""
        params: list[Any] = []
        if viewer is None:
            where = "type <> 'private_message'"
        else:
            where = "(type <> 'private_message' OR sender=%s OR recipient=%s)"
            params.extend([viewer, viewer])
        sql = f"SELECT {_COLUMNS} FROM messages WHERE {where} ORDER BY seq DESC"
        if limit is not None:
            sql += " LIMIT %s"
            params.append(min(limit, MAX_SQL_LIMIT))
        return self.e.query_all(sql + ";", params)
