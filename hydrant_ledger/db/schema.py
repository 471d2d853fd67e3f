"""Table definitions for the hydrant table and the history ledger.

``ensure_schema`` only creates what is missing; it never alters existing
tables. The trigger is replaced in place, which needs PostgreSQL 14 or later.
"""

import structlog

from hydrant_ledger.db.pool import PostgresPool

logger = structlog.get_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS history (
    id BIGSERIAL PRIMARY KEY,
    action VARCHAR(16) NOT NULL
        CHECK (action IN ('create', 'update', 'delete')),
    previous_event_id BIGINT REFERENCES history (id) UNIQUE,
    hydrant VARCHAR(255),
    location VARCHAR(255),
    inspection_date DATE,
    defects TEXT,
    checked_by VARCHAR(255),
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    CONSTRAINT history_lineage_root
        CHECK ((action = 'create') = (previous_event_id IS NULL))
);

CREATE TABLE IF NOT EXISTS hydrants (
    id BIGSERIAL PRIMARY KEY,
    history_id BIGINT NOT NULL REFERENCES history (id),
    hydrant VARCHAR(255) NOT NULL,
    location VARCHAR(255) NOT NULL,
    inspection_date DATE,
    defects TEXT,
    checked_by VARCHAR(255)
);

CREATE OR REPLACE FUNCTION history_reject_mutation()
RETURNS trigger
LANGUAGE plpgsql
AS $$
BEGIN
    RAISE EXCEPTION 'history is append-only; % is not allowed', TG_OP;
END;
$$;

CREATE OR REPLACE TRIGGER history_append_only
BEFORE UPDATE OR DELETE ON history
FOR EACH ROW
EXECUTE FUNCTION history_reject_mutation();
"""

TABLES = ("hydrants", "history")


async def ensure_schema(pool: PostgresPool) -> None:
    """Create the hydrant and history tables if they do not exist."""
    async with pool.transaction() as conn:
        await conn.execute(SCHEMA_SQL)
    logger.info("schema_ensured", tables=list(TABLES))
