from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector

from .connection import DBConfig

_logger = logging.getLogger(__name__)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes and '--' comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    in_comment = False
    escape = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if escape:
            buf.append(ch)
            escape = False
            prev = ch
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            prev = ch
            continue

        if ch == "-" and prev == "-" and not in_single and not in_double:
            buf.pop()
            in_comment = True
            prev = ""
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            prev = ch
            if stmt:
                yield stmt
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> int:
    count = 0
    for stmt in iter_sql_statements(sql):
        cur.execute(stmt)
        count += 1
    return count


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def _apply_file(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_mapping(db_config)
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        count = _exec_sql(cur, sql)
        conn.commit()
        return count
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _apply_file(db_config, schema_path)
    _logger.info("Applied %s (%d statements)", schema_path, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _apply_file(db_config, seed_path)
    _logger.info("Applied %s (%d statements)", seed_path, count)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
