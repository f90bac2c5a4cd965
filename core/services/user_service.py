# =============================================================================
# core/services/user_service.py - Credential Store
# =============================================================================
# Persists registered users. Supports lookup by email and creation only;
# users are never updated or deleted.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.user import UserRecord
from app.exceptions import DuplicateUserError

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for the users table.

    Provides a clean interface between API routes and the store.
    """

    def __init__(self, client: SupabaseClient, table: str = "users"):
        self._client = client
        self.table = table

    def find_by_email(self, email: str) -> UserRecord | None:
        """
        Look up a user by email.

        Returns:
            The user, or None if no account uses this email

        Raises:
            SupabaseClientError: If the query fails
        """
        row = self._client.fetch_one(self.table, "email", email)
        return UserRecord.from_row(row) if row else None

    def create(self, email: str, password_hash: str) -> UserRecord:
        """
        Create a user.

        The pre-check gives a clean 409 in the common case; the store's
        unique constraint on email catches concurrent registrations.

        Raises:
            DuplicateUserError: If the email is already registered
            SupabaseClientError: If the insert fails for another reason
        """
        if self.find_by_email(email) is not None:
            raise DuplicateUserError(email)

        try:
            row = self._client.insert(
                self.table,
                {"email": email, "password_hash": password_hash},
            )
        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.info(f"Concurrent registration rejected by store: {email}")
                raise DuplicateUserError(email)
            raise

        logger.info(f"Created user: {row.get('id')} ({email})")
        return UserRecord.from_row(row)
