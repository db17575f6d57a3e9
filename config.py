import os
import re


def getenv(key: str, default: str) -> str:
    # Empty values count as unset
    return os.environ.get(key) or default


LOGLEVEL = getenv("LOGLEVEL", "INFO").upper()
PORT = int(getenv("PORT", "8080"))

# Database
DB_HOST = getenv("DB_HOST", "localhost")
DB_PORT = int(getenv("DB_PORT", "3306"))
DB_USER = getenv("DB_USER", "root")
DB_PASSWORD = getenv("DB_PASSWORD", "")
DB_NAME = getenv("DB_NAME", "wordpress")
DB_CHARSET = getenv("DB_CHARSET", "utf8mb4")
TABLE_PREFIX = getenv("DB_TABLE_PREFIX", "wp_")

# Constants
PUBLISHED_STATUS = "publish"
POST_TYPE = "post"
TABLE_PREFIX_PATTERN = re.compile(r"[A-Za-z0-9_]*")
