from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

import mysql.connector

from ..common.datetime_utils import now_local
from ..core.exceptions import EmailTakenError, StorageUnavailableError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json_column, fetchone, load_json_column
from .model import Account, Session
from .repository import AccountRepository, SessionRepository

_ACCOUNT_COLUMNS = "account_id, email, password_hash, roster, attendance_data, created_at, updated_at"


def _row_to_account(row: dict) -> Account:
    return Account(
        account_id=str(row["account_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        roster=load_json_column(row.get("roster"), []),
        attendance=load_json_column(row.get("attendance_data"), {}),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, account_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE account_id=%s", (account_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_email(self, email: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE email=%s", (email.lower(),))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create_account(self, *, email: str, password_hash: str) -> Account:
        account_id = str(uuid.uuid4())
        now = now_local().replace(microsecond=0)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO accounts(account_id, email, password_hash, roster, attendance_data, created_at, updated_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (account_id, email.lower(), password_hash, dump_json_column([]), dump_json_column({}), now, now),
                )
        except StorageUnavailableError as e:
            # Lost a race with a concurrent sign-up on the unique email key.
            if isinstance(e.__cause__, mysql.connector.IntegrityError):
                raise EmailTakenError("Email already registered") from e
            raise
        return Account(
            account_id=account_id,
            email=email.lower(),
            password_hash=password_hash,
            roster=[],
            attendance={},
            created_at=now,
            updated_at=now,
        )

    def replace_document(self, account_id: str, *, roster: list, attendance: dict, updated_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE accounts
                SET roster=%s, attendance_data=%s, updated_at=%s
                WHERE account_id=%s
                """,
                (dump_json_column(roster), dump_json_column(attendance), updated_at, account_id),
            )
            if cur.rowcount > 0:
                return True
            # rowcount is 0 both for a missing row and for an unchanged one.
            cur.execute("SELECT 1 AS found FROM accounts WHERE account_id=%s", (account_id,))
            return fetchone(cur) is not None


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_session(self, *, session_id: str, account_id: str, created_at: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO sessions(session_id, account_id, created_at) VALUES(%s,%s,%s)",
                (session_id, account_id, created_at),
            )

    def get_session(self, session_id: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT session_id, account_id, created_at FROM sessions WHERE session_id=%s",
                (session_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Session(
                session_id=row["session_id"],
                account_id=str(row["account_id"]),
                created_at=row["created_at"],
            )

    def delete_session(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (session_id,))
            return cur.rowcount > 0
