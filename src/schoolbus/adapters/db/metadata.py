"""The one `MetaData` every SCHOOLBUS table attaches to.

A naming convention gives constraints stable names (``pk_counters``,
``ck_counters_positive_value``, ...), which keeps Alembic autogenerate from
proposing spurious drop/create pairs.
"""

from sqlalchemy import MetaData

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_N_label)s",
    "uq": "uq_%(table_name)s_%(column_0_N_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_N_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)
