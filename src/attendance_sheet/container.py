from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mysql_account_repository import MySQLAccountRepository, MySQLSessionRepository
from .accounts.repository import AccountRepository, SessionRepository
from .accounts.service import AccountService, SessionService
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_SESSION_DAYS, PASSWORD_HASH_METHOD
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    accounts_repo: AccountRepository
    sessions_repo: SessionRepository

    account_service: AccountService
    session_service: SessionService
    attendance_service: AttendanceService

    conn: Optional[DatabaseConnection] = None


def build_services(
    accounts_repo: AccountRepository,
    sessions_repo: SessionRepository,
    *,
    conn: Optional[DatabaseConnection] = None,
    session_days: int = DEFAULT_SESSION_DAYS,
    hash_method: str = PASSWORD_HASH_METHOD,
) -> Container:
    return Container(
        accounts_repo=accounts_repo,
        sessions_repo=sessions_repo,
        account_service=AccountService(accounts_repo, hash_method=hash_method),
        session_service=SessionService(sessions_repo, lifetime_days=session_days),
        attendance_service=AttendanceService(accounts_repo),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    session_days: int = DEFAULT_SESSION_DAYS,
    hash_method: str = PASSWORD_HASH_METHOD,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        MySQLAccountRepository(conn),
        MySQLSessionRepository(conn),
        conn=conn,
        session_days=session_days,
        hash_method=hash_method,
    )
