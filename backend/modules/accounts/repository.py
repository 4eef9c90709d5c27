"""
User account repositories.

Accounts are stored as one flat row per user in the ``user_accounts`` table:

    id, email, name, plan, email_verified_at,
    messages_used, message_limit, usage_reset_at,
    verification_code_hash, verification_expires_at, verification_last_sent_at,
    created_at, updated_at

Provides an in-memory implementation (tests, local development) and a
Supabase-backed one (production). Both normalize legacy rows on read.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

from supabase import Client

from shared.clock import Clock, utc_now
from shared.repository import BaseRepository
from modules.usage.window import open_window

from .models import Plan, UserAccount, UsageWindow, VerificationState

logger = logging.getLogger(__name__)

TABLE = "user_accounts"
USAGE_COLUMNS = ("messages_used", "message_limit", "usage_reset_at")
VERIFICATION_COLUMNS = (
    "verification_code_hash",
    "verification_expires_at",
    "verification_last_sent_at",
)

_parse = BaseRepository._parse_timestamp
_format = BaseRepository._format_timestamp


def backfill_updates(row: dict[str, Any], now: datetime) -> dict[str, Any]:
    """
    Compute the column updates a legacy row needs.

    Rows written before plans, usage windows or verification existed are
    completed here, once, instead of being null-checked by every gate. An
    existing ``messages_used`` count is carried into the synthesized window.

    Args:
        row: Stored row
        now: Current time, used to open a window when one is missing

    Returns:
        Column updates to persist (empty if the row is complete)
    """
    updates: dict[str, Any] = {}

    if not row.get("plan"):
        updates["plan"] = Plan.FREE.value

    if row.get("message_limit") is None or row.get("usage_reset_at") is None:
        window = open_window(
            updates.get("plan", row.get("plan")),
            now,
            messages_used=row.get("messages_used") or 0,
        )
        updates["messages_used"] = window.messages_used
        updates["message_limit"] = window.message_limit
        updates["usage_reset_at"] = window.reset_at
    elif row.get("messages_used") is None:
        updates["messages_used"] = 0

    for column in VERIFICATION_COLUMNS:
        if column not in row:
            updates[column] = None

    # A hash without an expiry (or the reverse) can never be confirmed
    has_hash = row.get("verification_code_hash") is not None
    has_expiry = row.get("verification_expires_at") is not None
    if has_hash != has_expiry:
        updates["verification_code_hash"] = None
        updates["verification_expires_at"] = None

    return updates


def row_to_window(row: dict[str, Any]) -> UsageWindow:
    """Map usage columns to a UsageWindow."""
    return UsageWindow(
        messages_used=row["messages_used"],
        message_limit=row["message_limit"],
        reset_at=_parse(row["usage_reset_at"]),
    )


def row_to_account(row: dict[str, Any]) -> UserAccount:
    """Map a complete (backfilled) row to a UserAccount."""
    return UserAccount(
        id=str(row["id"]),
        email=row.get("email") or "",
        name=row.get("name"),
        plan=row.get("plan"),
        email_verified_at=_parse(row.get("email_verified_at")),
        usage=row_to_window(row),
        verification=VerificationState(
            code_hash=row.get("verification_code_hash"),
            expires_at=_parse(row.get("verification_expires_at")),
            last_sent_at=_parse(row.get("verification_last_sent_at")),
        ),
        created_at=_parse(row.get("created_at")),
        updated_at=_parse(row.get("updated_at")),
    )


def new_account_row(
    user_id: str,
    email: str,
    name: Optional[str],
    now: datetime,
) -> dict[str, Any]:
    """Row for a newly created account."""
    window = open_window(Plan.FREE, now)
    return {
        "id": user_id,
        "email": email,
        "name": name,
        "plan": Plan.FREE.value,
        "email_verified_at": None,
        "messages_used": window.messages_used,
        "message_limit": window.message_limit,
        "usage_reset_at": window.reset_at,
        "verification_code_hash": None,
        "verification_expires_at": None,
        "verification_last_sent_at": None,
        "created_at": now,
        "updated_at": now,
    }


class InMemoryUserRepository:
    """
    Account store backed by a dict.

    For testing and development. Each operation yields to the event loop
    before touching the row, like a network round-trip would, and then
    reads and writes without another suspension point, so single-row
    updates are atomic with respect to other tasks.
    """

    def __init__(self, clock: Clock = utc_now):
        self._rows: dict[str, dict[str, Any]] = {}
        self._clock = clock

    def insert_row(self, row: dict[str, Any]) -> None:
        """Store a raw row as-is (used to seed legacy records)."""
        self._rows[str(row["id"])] = dict(row)

    def get_row(self, user_id: str) -> Optional[dict[str, Any]]:
        """Return a copy of the raw stored row."""
        row = self._rows.get(user_id)
        return dict(row) if row is not None else None

    async def get(self, user_id: str) -> Optional[UserAccount]:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        if row is None:
            return None

        now = self._clock()
        updates = backfill_updates(row, now)
        if updates:
            logger.info(f"Backfilled legacy account {user_id}: {sorted(updates)}")
            row.update(updates)
            row["updated_at"] = now

        return row_to_account(row)

    async def create(
        self,
        user_id: str,
        email: str,
        name: Optional[str] = None,
    ) -> UserAccount:
        await asyncio.sleep(0)
        if user_id in self._rows:
            raise ValueError(f"Account already exists: {user_id}")
        row = new_account_row(user_id, email, name, self._clock())
        self._rows[user_id] = row
        return row_to_account(row)

    async def get_usage_window(self, user_id: str) -> Optional[UsageWindow]:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        return row_to_window(row) if row is not None else None

    async def replace_expired_window(
        self,
        user_id: str,
        window: UsageWindow,
        now: datetime,
    ) -> bool:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        if row is None or _parse(row["usage_reset_at"]) > now:
            return False
        row["messages_used"] = window.messages_used
        row["message_limit"] = window.message_limit
        row["usage_reset_at"] = window.reset_at
        row["updated_at"] = self._clock()
        return True

    async def increment_usage(self, user_id: str, amount: int = 1) -> Optional[UsageWindow]:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        if row is None:
            return None
        row["messages_used"] = row["messages_used"] + amount
        row["updated_at"] = self._clock()
        return row_to_window(row)

    async def set_verification(self, user_id: str, state: VerificationState) -> None:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        if row is None:
            return
        row["verification_code_hash"] = state.code_hash
        row["verification_expires_at"] = state.expires_at
        row["verification_last_sent_at"] = state.last_sent_at
        row["updated_at"] = self._clock()

    async def mark_email_verified(self, user_id: str, verified_at: datetime) -> None:
        await asyncio.sleep(0)
        row = self._rows.get(user_id)
        if row is None:
            return
        row["email_verified_at"] = verified_at
        for column in VERIFICATION_COLUMNS:
            row[column] = None
        row["updated_at"] = self._clock()


class SupabaseUserRepository(BaseRepository[UserAccount]):
    """
    Account store backed by the Supabase ``user_accounts`` table.

    The counter increment goes through the ``increment_message_usage``
    Postgres function (see migrations/001_user_accounts.sql), which updates
    the row in a single statement, so concurrent increments are never lost.
    """

    def __init__(self, db: Client, clock: Clock = utc_now) -> None:
        super().__init__(db)
        self._clock = clock

    async def get(self, user_id: str) -> Optional[UserAccount]:
        result = self._db.table(TABLE).select("*").eq("id", user_id).execute()
        if not result.data:
            return None

        row = dict(result.data[0])
        now = self._clock()
        updates = backfill_updates(row, now)
        if updates:
            logger.info(f"Backfilled legacy account {user_id}: {sorted(updates)}")
            payload = {
                key: _format(value) if isinstance(value, datetime) else value
                for key, value in updates.items()
            }
            payload["updated_at"] = _format(now)
            self._db.table(TABLE).update(payload).eq("id", user_id).execute()
            row.update(updates)

        return row_to_account(row)

    async def create(
        self,
        user_id: str,
        email: str,
        name: Optional[str] = None,
    ) -> UserAccount:
        row = new_account_row(user_id, email, name, self._clock())
        payload = {
            key: _format(value) if isinstance(value, datetime) else value
            for key, value in row.items()
        }
        result = self._db.table(TABLE).insert(payload).execute()
        return row_to_account(result.data[0])

    async def get_usage_window(self, user_id: str) -> Optional[UsageWindow]:
        result = (
            self._db.table(TABLE)
            .select(", ".join(USAGE_COLUMNS))
            .eq("id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return row_to_window(result.data[0])

    async def replace_expired_window(
        self,
        user_id: str,
        window: UsageWindow,
        now: datetime,
    ) -> bool:
        result = (
            self._db.table(TABLE)
            .update({
                "messages_used": window.messages_used,
                "message_limit": window.message_limit,
                "usage_reset_at": _format(window.reset_at),
                "updated_at": _format(self._clock()),
            })
            .eq("id", user_id)
            .lte("usage_reset_at", _format(now))
            .execute()
        )
        return bool(result.data)

    async def increment_usage(self, user_id: str, amount: int = 1) -> Optional[UsageWindow]:
        result = self._db.rpc("increment_message_usage", {
            "p_user_id": user_id,
            "p_amount": amount,
        }).execute()
        if not result.data:
            return None
        return row_to_window(result.data[0])

    async def set_verification(self, user_id: str, state: VerificationState) -> None:
        self._db.table(TABLE).update({
            "verification_code_hash": state.code_hash,
            "verification_expires_at": _format(state.expires_at),
            "verification_last_sent_at": _format(state.last_sent_at),
            "updated_at": _format(self._clock()),
        }).eq("id", user_id).execute()

    async def mark_email_verified(self, user_id: str, verified_at: datetime) -> None:
        self._db.table(TABLE).update({
            "email_verified_at": _format(verified_at),
            "verification_code_hash": None,
            "verification_expires_at": None,
            "verification_last_sent_at": None,
            "updated_at": _format(self._clock()),
        }).eq("id", user_id).execute()
