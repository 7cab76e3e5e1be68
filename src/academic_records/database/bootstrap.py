from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"
SEED_PATH = Path(__file__).resolve().parent / "seed.sql"


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


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path = SEED_PATH) -> None:
    sql = _strip_create_db_and_use(Path(seed_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()
    logger.info("Seed data applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert one identity per role with its profile, and hand the demo courses to the teacher."""
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_identity(identity_id: str, name: str, email: str, password: str, role: str) -> None:
            cur.execute(
                """
                INSERT INTO identities (identity_id, name, email, password_hash, role)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), password_hash=VALUES(password_hash), role=VALUES(role)
                """,
                (identity_id, name, email, generate_password_hash(password), role),
            )

        upsert_identity("usr-admin", "Admin Demo", "admin@academic-records.local", "admin123", "ADMIN")
        upsert_identity("usr-teacher", "Teacher Demo", "teacher@academic-records.local", "teacher123", "TEACHER")
        upsert_identity("usr-student", "Student Demo", "student@academic-records.local", "student123", "STUDENT")

        cur.execute(
            """
            INSERT IGNORE INTO teachers (teacher_id, identity_id, specialization, contact)
            VALUES ('tch-demo', 'usr-teacher', 'Mathematics', '+000000000')
            """
        )
        cur.execute(
            """
            INSERT IGNORE INTO students (student_id, identity_id, enrollment_no, semester, section)
            VALUES ('stu-demo', 'usr-student', 'ENR-0001', 1, 'A')
            """
        )
        cur.execute("UPDATE courses SET teacher_id='tch-demo' WHERE course_id IN ('crs-math101', 'crs-cs101')")

        conn.commit()
    finally:
        conn.close()
    logger.info("Demo identities ready")


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
