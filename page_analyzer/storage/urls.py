import logging

from psycopg.rows import dict_row

from page_analyzer.common.db import Database
from page_analyzer.models import Url, UrlSummary

logger = logging.getLogger(__name__)


def _to_url(row: dict) -> Url:
    return Url(id=row["id"], name=row["name"], created_at=row["created_at"])


class UrlRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    def save(self, name: str) -> Url:
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    "INSERT INTO urls(name) VALUES (%s) RETURNING id, name, created_at",
                    (name,),
                )
                url = _to_url(cur.fetchone())
        logger.info("saved url id=%s name=%s", url.id, url.name)
        return url

    def find_by_name(self, name: str) -> Url | None:
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT id, name, created_at FROM urls WHERE name = %s", (name,))
                row = cur.fetchone()
        return _to_url(row) if row else None

    def find_by_id(self, url_id: int) -> Url | None:
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT id, name, created_at FROM urls WHERE id = %s", (url_id,))
                row = cur.fetchone()
        return _to_url(row) if row else None

    def list_all(self) -> list[UrlSummary]:
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT u.id, u.name, u.created_at,
                           c.status_code AS last_status_code,
                           c.created_at AS last_checked_at
                    FROM urls u
                    LEFT JOIN LATERAL (
                      SELECT status_code, created_at
                      FROM url_checks
                      WHERE url_id = u.id
                      ORDER BY created_at DESC, id DESC
                      LIMIT 1
                    ) c ON TRUE
                    ORDER BY u.id ASC
                    """
                )
                rows = cur.fetchall()
        return [
            UrlSummary(
                url=_to_url(r),
                last_status_code=r["last_status_code"],
                last_checked_at=r["last_checked_at"],
            )
            for r in rows
        ]

    def count(self) -> int:
        with self.db.connection() as conn:
            cur = conn.execute("SELECT count(*) FROM urls")
            return cur.fetchone()[0]
