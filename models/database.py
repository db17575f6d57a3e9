import logging

import pymysql
from pydantic import BaseModel, ConfigDict
from pymysql.connections import Connection

import config
from models.errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


class Database(BaseModel):
    """Connection settings for the WordPress database.

    pymysql connections are not safe to share between threads, so every
    caller gets its own connection from connect() and closes it."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    name: str = "wordpress"
    charset: str = "utf8mb4"

    @classmethod
    def from_config(cls) -> "Database":
        return cls(
            host=config.DB_HOST,
            port=config.DB_PORT,
            user=config.DB_USER,
            password=config.DB_PASSWORD,
            name=config.DB_NAME,
            charset=config.DB_CHARSET,
        )

    def connect(self) -> Connection:
        try:
            return pymysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.name,
                charset=self.charset,
            )
        except pymysql.MySQLError as e:
            raise DatabaseConnectionError(
                f"Failed to connect to database {self.name} at {self.host}:{self.port}"
            ) from e

    def ping(self) -> None:
        db = self.connect()
        try:
            db.ping(reconnect=False)
        except pymysql.MySQLError as e:
            raise DatabaseConnectionError("Failed to ping database") from e
        finally:
            db.close()
        logger.debug("Pinged %s at %s:%s", self.name, self.host, self.port)
