# batepapo/server/runtime/store/dao/participants_dao.py
from __future__ import annotations

from ..engines.engine import Engine


class ParticipantsDAO:
    def __init__(self, engine: Engine):
        self.e = engine

    def insert_if_absent(self, name: str, last_seen_at: int) -> bool:
        n = self.e.execute(
            """
            INSERT INTO participants(name, last_seen_at) VALUES (%s, %s)
            ON CONFLICT (name) DO NOTHING;
            """,
            (name, last_seen_at),
        )
        return n == 1

    def get(self, name: str) -> dict | None:
        return self.e.query_one(
            "SELECT name, last_seen_at FROM participants WHERE name=%s;",
            (name,),
        )

    def list_all(self) -> list[dict]:
        return self.e.query_all("SELECT name, last_seen_at FROM participants ORDER BY name ASC;")

    def touch(self, name: str, last_seen_at: int) -> bool:
        n = self.e.execute(
            "UPDATE participants SET last_seen_at=%s WHERE name=%s;",
            (last_seen_at, name),
        )
        return n > 0

    def list_stale(self, cutoff: int) -> list[dict]:
        return self.e.query_all(
            """
            SELECT name, last_seen_at FROM participants
             WHERE last_seen_at < %s
             ORDER BY last_seen_at ASC, name ASC;
            """,
            (cutoff,),
        )

    def delete_if_stale(self, name: str, cutoff: int) -> bool:
        # the predicate is re-checked at delete time; a concurrent touch keeps the row
        n = self.e.execute(
            "DELETE FROM participants WHERE name=%s AND last_seen_at < %s;",
            (name, cutoff),
        )
        return n > 0
