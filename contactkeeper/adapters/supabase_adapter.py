"""
SupabaseAdapter - Implements ICrmRepository.
Uses the supabase-py client to read contacts and write verification fields
back via PostgREST. The client is synchronous, so each request runs in a
worker thread to keep concurrent writes within a chunk actually concurrent.
"""

import asyncio
import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from supabase import create_client, Client

from ..domain.entities.contact import DAYS_PER_MONTH, Contact
from ..domain.entities.verification_result import VerificationStatus
from ..domain.interfaces.i_crm_repository import CrmConnectionError, ICrmRepository

logger = logging.getLogger(__name__)

CONTACTS_TABLE = "contacts"
CONTACT_COLUMNS = "id,name,organization,title,email,last_verified,last_modified"


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"[CRM] Unparseable timestamp {value!r}")
        return None


def _parse_date(value: Optional[str]) -> Optional[date]:
    parsed = _parse_iso(value)
    return parsed.date() if parsed else None


def _row_to_contact(row: dict) -> Contact:
    return Contact(
        id=str(row["id"]),
        name=row.get("name") or "",
        organization=row.get("organization"),
        title=row.get("title"),
        email=row.get("email"),
        last_verified=_parse_date(row.get("last_verified")),
        last_modified=_parse_iso(row.get("last_modified")),
    )


def _verification_row(
    status: VerificationStatus,
    notes: str,
    verified_on: date,
    source_url: Optional[str],
) -> dict:
    row = {
        "verification_status": status.value,
        "verification_notes": notes,
        "last_verified": verified_on.isoformat(),
    }
    if source_url:
        row["source_url"] = source_url
    return row


def _stale_cutoff(months: int, today: Optional[date] = None) -> date:
    today = today or date.today()
    return today - timedelta(days=DAYS_PER_MONTH * months)


class SupabaseAdapter(ICrmRepository):
    """
    CRM adapter over a Supabase `contacts` table.
    Use the service role key for backend operations.
    """

    def __init__(self, url: str, key: str):
        self.client: Client = create_client(url, key)

    async def check_connection(self) -> None:
        try:
            await asyncio.to_thread(
                self.client.table(CONTACTS_TABLE).select("id").limit(1).execute
            )
        except Exception as e:
            logger.error(f"[CRM] Connection check failed: {e}")
            raise CrmConnectionError(f"Failed to connect to CRM: {e}") from e
        logger.info("[CRM] Connected")

    async def get_contacts_for_verification(
        self, limit: int = 10, months: int = 6
    ) -> List[Contact]:
        cutoff = _stale_cutoff(months).isoformat()
        query = (
            self.client.table(CONTACTS_TABLE)
            .select(CONTACT_COLUMNS)
            .or_(f"last_verified.is.null,last_verified.lt.{cutoff}")
            .not_.is_("name", "null")
            .order("last_modified", desc=True)
            .limit(limit)
        )
        try:
            response = await asyncio.to_thread(query.execute)
        except Exception as e:
            logger.error(f"[CRM] Contact query failed: {e}")
            raise CrmConnectionError(f"Failed to query contacts: {e}") from e

        contacts = [_row_to_contact(r) for r in response.data]
        logger.info(
            f"[CRM] {len(contacts)} contact(s) unverified since {cutoff} (limit={limit})"
        )
        return contacts

    async def update_verification(
        self,
        contact_id: str,
        status: VerificationStatus,
        notes: str,
        verified_on: date,
        source_url: Optional[str] = None,
    ) -> None:
        row = _verification_row(status, notes, verified_on, source_url)
        await asyncio.to_thread(
            self.client.table(CONTACTS_TABLE).update(row).eq("id", contact_id).execute
        )

    async def get_verification_stats(self) -> Dict[str, int]:
        query = (
            self.client.table(CONTACTS_TABLE)
            .select("verification_status")
            .not_.is_("verification_status", "null")
        )
        try:
            response = await asyncio.to_thread(query.execute)
        except Exception as e:
            logger.error(f"[CRM] Stats query failed: {e}")
            raise CrmConnectionError(f"Failed to query verification stats: {e}") from e
        counts = Counter(
            r["verification_status"] for r in response.data if r.get("verification_status")
        )
        return dict(sorted(counts.items()))
