import logging

from psycopg.rows import dict_row

from page_analyzer.common.db import Database
from page_analyzer.models import PageMarkup, UrlCheck

logger = logging.getLogger(__name__)

CHECK_COLUMNS = "id, url_id, status_code, title, h1, description, created_at"


def _to_check(row: dict) -> UrlCheck:
    return UrlCheck(
        id=row["id"],
        url_id=row["url_id"],
        status_code=row["status_code"],
        title=row["title"],
        h1=row["h1"],
        description=row["description"],
        created_at=row["created_at"],
    )


class CheckRepository:
    def __init__(self, db: Database) -> None:
        self.db = db

    def save(self, url_id: int, status_code: int, markup: PageMarkup) -> UrlCheck:
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO url_checks(url_id, status_code, title, h1, description)
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING {CHECK_COLUMNS}
                    """,
                    (url_id, status_code, markup.title, markup.h1, markup.description),
                )
                check = _to_check(cur.fetchone())
        logger.info("saved check id=%s url_id=%s status_code=%s", check.id, url_id, status_code)
        return check

    def list_by_url_id(self, url_id: int) -> list[UrlCheck]:
        # id breaks ties between checks stamped within the same clock tick
        with self.db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {CHECK_COLUMNS}
                    FROM url_checks
                    WHERE url_id = %s
                    ORDER BY created_at DESC, id DESC
                    """,
                    (url_id,),
                )
                return [_to_check(r) for r in cur.fetchall()]

    def count_by_url_id(self, url_id: int) -> int:
        with self.db.connection() as conn:
            cur = conn.execute("SELECT count(*) FROM url_checks WHERE url_id = %s", (url_id,))
            return cur.fetchone()[0]
