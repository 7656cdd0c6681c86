"""Alembic round-trip smoke test for PostgreSQL.

Validates that the migrations *upgrade to head* and *downgrade to base*
cleanly on a real PostgreSQL 17 instance provisioned by Testcontainers:

  1) `alembic upgrade head`,
  2) both tables exist and a typed insert adapts the JSON value to JSONB,
  3) `alembic downgrade base`,
  4) both tables are gone.
"""

from alembic import command
from sqlalchemy import insert, select, text

from schoolbus import config
from schoolbus.adapters.db.engine import make_engine
from schoolbus.adapters.keyed_store.schema import keyed_records

# mypy: disable-error-code=no-untyped-def


def _exists(conn, table: str) -> bool:
    return conn.execute(
        text("SELECT to_regclass(:t) IS NOT NULL"), {"t": f"public.{table}"}
    ).scalar()


def test_alembic_downgrade_upgrade_roundtrip_postgres(pg_url_base: str):
    """Upgrade → assert → Downgrade → assert on a fresh Postgres database."""
    command.upgrade(config.build_alembic_config(pg_url_base), "head")

    eng = make_engine(pg_url_base)
    try:
        with eng.begin() as c:
            assert _exists(c, "keyed_records")
            assert _exists(c, "counters")
            c.execute(
                insert(keyed_records).values(
                    map_name="drivers",
                    record_key='{"driver_id":1}',
                    value={"name": "Ada", "qualifications": ["CDL-B"]},
                )
            )
            value = c.execute(select(keyed_records.c.value)).scalar_one()
            assert value == {"name": "Ada", "qualifications": ["CDL-B"]}

        command.downgrade(config.build_alembic_config(pg_url_base), "base")

        with eng.begin() as c:
            assert not _exists(c, "keyed_records")
            assert not _exists(c, "counters")
    finally:
        eng.dispose()
