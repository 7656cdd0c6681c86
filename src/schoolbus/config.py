"""SCHOOLBUS settings.

Everything is read from ``SCHOOLBUS_*`` environment variables; there is no
config file.
"""

import os
import sys
from collections.abc import Mapping
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

DB_URL_ENVVAR = "SCHOOLBUS_DB_URL"

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate
ALEMBIC_SCRIPTS_PACKAGE = "schoolbus.adapters.db.alembic"


class DatabaseUrlNotSetError(Exception):
    """No registry database URL in the environment."""

    def __init__(self, envvar: str = DB_URL_ENVVAR):
        super().__init__(f"{envvar} is not set")
        self.envvar = envvar


def get_db_url(environ: Mapping[str, str] | None = None) -> str:
    """Return the registry database URL.

    ``environ`` defaults to ``os.environ``. A value that is blank once
    surrounding whitespace is stripped counts as unset.
    """
    env = os.environ if environ is None else environ
    if not (url := env.get(DB_URL_ENVVAR, "").strip()):
        raise DatabaseUrlNotSetError
    return url


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Alembic config for the migrations shipped in `ALEMBIC_SCRIPTS_PACKAGE`.

    ``db_url`` may be left out for commands that never connect, like ``heads``.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY, str(files(ALEMBIC_SCRIPTS_PACKAGE))
    )
    return cfg
