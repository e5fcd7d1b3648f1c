from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Union

from .connection import DBConfig, DatabaseConnection

logger = logging.getLogger(__name__)

# Seed data for onboarding types: (name, color, description, duration_days)
DEFAULT_ONBOARDING_TYPES: tuple[tuple[str, str, str, int], ...] = (
    ("Journey to Cloud", "#E31937", "Onboarding para desarrolladores Cloud", 3),
    ("Capítulo Data", "#FFD100", "Onboarding para analistas de datos", 2),
    ("Capítulo Frontend", "#00448D", "Onboarding para desarrolladores Frontend", 2),
    ("Capítulo Backend", "#FF6B35", "Onboarding para desarrolladores Backend", 2),
)


def _connect(db_config: dict, *, with_database: bool = True):
    return DatabaseConnection(DBConfig.from_mapping(db_config)).connect(with_database=with_database)


def strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed file on ';' outside of quoted strings."""
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
            buf.append(ch)
            continue

        if ch == ";" and not quote:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: Union[str, Path]) -> None:
    ensure_database_exists(db_config)
    sql = strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def ensure_default_onboarding_types(db_config: dict) -> int:
    """Insert the default onboarding types that are missing. Returns how many were created."""
    conn = _connect(db_config)
    created = 0
    try:
        cur = conn.cursor(dictionary=True)
        for name, color, description, duration_days in DEFAULT_ONBOARDING_TYPES:
            cur.execute("SELECT type_id FROM onboarding_types WHERE name=%s", (name,))
            if cur.fetchone():
                continue
            cur.execute(
                """
                INSERT INTO onboarding_types (name, color, description, duration_days)
                VALUES (%s, %s, %s, %s)
                """,
                (name, color, description, duration_days),
            )
            created += 1
            logger.info("Tipo de onboarding creado: %s", name)
        conn.commit()
    finally:
        conn.close()
    return created


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
