# =============================================================================
# core/services/reel_service.py - Reel Store
# =============================================================================
# Persists uploaded reel metadata and lists it newest first.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from core.models.reel import ReelCreate, ReelResponse

logger = logging.getLogger(__name__)


class ReelService:
    """Service for the reels table."""

    def __init__(self, client: SupabaseClient, table: str = "reels"):
        self._client = client
        self.table = table

    def create(self, reel: ReelCreate) -> ReelResponse:
        """
        Record a stored upload. `created` is filled in by the store.

        Raises:
            SupabaseClientError: If the insert fails
        """
        row = self._client.insert(self.table, reel.model_dump())
        logger.info(f"Created reel: {row.get('id')} ({reel.filename})")
        return ReelResponse.from_row(row)

    def list_reels(self) -> list[ReelResponse]:
        """
        List every reel, newest first.

        Not paginated: the whole table is returned.
        """
        rows = self._client.fetch_all(self.table, order_by="created", desc=True)
        return [ReelResponse.from_row(row) for row in rows]
