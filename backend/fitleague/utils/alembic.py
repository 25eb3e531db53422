import fcntl
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from alembic.config import Config

from alembic import command
from fitleague.config import config
from fitleague.utils.logging import logger

_MIGRATION_LOCK_PATH = "/tmp/fitleague-alembic.lock"
_BACKEND_DIR = Path(__file__).resolve().parents[2]


@contextmanager
def _migration_lock() -> Iterator[None]:
    # Several uvicorn workers may boot at once; only one may upgrade the schema.
    with open(_MIGRATION_LOCK_PATH, "w", encoding="utf-8") as lock_file:
        fcntl.flock(lock_file, fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file, fcntl.LOCK_UN)


def get_alembic_config() -> Config:
    alembic_config = Config(str(_BACKEND_DIR / "alembic.ini"))
    alembic_config.set_main_option("script_location", str(_BACKEND_DIR / "alembic"))
    alembic_config.set_main_option("sqlalchemy.url", str(config.pg_dsn))
    return alembic_config


def alembic_run_migrations() -> None:
    with _migration_lock():
        logger.info("Running migrations up to head")
        command.upgrade(get_alembic_config(), "head")
