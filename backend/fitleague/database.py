from databases import Database

from fitleague.config import config

database = Database(str(config.pg_dsn))
