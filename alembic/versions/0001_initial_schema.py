"""initial schema

Revision ID: 0001_initial_schema
Revises: 
Create Date: 2026-10-18 00:00:00
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute(
        """
        CREATE TABLE IF NOT EXISTS urls (
          id BIGSERIAL PRIMARY KEY,
          name TEXT UNIQUE NOT NULL,
          created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        """
    )

    op.execute(
        """
        CREATE TABLE IF NOT EXISTS url_checks (
          id BIGSERIAL PRIMARY KEY,
          url_id BIGINT NOT NULL REFERENCES urls(id),
          status_code INT NOT NULL,
          title TEXT NOT NULL DEFAULT '',
          h1 TEXT NOT NULL DEFAULT '',
          description TEXT NOT NULL DEFAULT '',
          created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
        CREATE INDEX IF NOT EXISTS idx_url_checks_url_recent
          ON url_checks(url_id, created_at DESC, id DESC);
        """
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS url_checks;")
    op.execute("DROP TABLE IF EXISTS urls;")
