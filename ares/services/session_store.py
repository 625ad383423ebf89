"""
Session store: persists TopicState per chat session and reads the profile fields
the engine needs. Writes are conditional on the version that was read, so two
devices answering in the same session cannot silently overwrite each other.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ares.models import DialogueSession, UserProfile
from ares.schemas.topic import TopicState

logger = logging.getLogger("ares")


class StaleSessionError(Exception):
    """Raised when the stored session moved on since it was loaded."""

    def __init__(self, session_id: str, expected_version: int):
        super().__init__(f"session {session_id} is no longer at version {expected_version}")
        self.session_id = session_id
        self.expected_version = expected_version


class SessionStore:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load(self, session_id: str) -> Tuple[TopicState, int]:
        """Stored state and its version; a fresh state at version 0 for new sessions."""
        res = await self.db.execute(
            select(DialogueSession)
            .where(DialogueSession.session_id == session_id)
            .execution_options(populate_existing=True)
        )
        row = res.scalar_one_or_none()
        if row is None:
            return TopicState(), 0
        return TopicState.model_validate(row.topic_state or {}), row.version

    async def save(self, session_id: str, user_id: int, state: TopicState, expected_version: int) -> int:
        """Write the state if nobody else did since `expected_version`. Returns the new version."""
        payload = state.model_dump(mode="json")
        now = datetime.now(timezone.utc)

        if expected_version == 0:
            try:
                await self.db.execute(
                    insert(DialogueSession).values(
                        session_id=session_id,
                        user_id=user_id,
                        topic_state=payload,
                        version=1,
                        updated_at=now,
                    )
                )
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning("stale_session_write", extra={"session_id": session_id, "expected_version": 0})
                raise StaleSessionError(session_id, expected_version)
            return 1

        res = await self.db.execute(
            update(DialogueSession)
            .where(DialogueSession.session_id == session_id)
            .where(DialogueSession.version == expected_version)
            .values(topic_state=payload, version=expected_version + 1, updated_at=now)
        )
        if res.rowcount != 1:
            await self.db.rollback()
            logger.warning("stale_session_write", extra={"session_id": session_id, "expected_version": expected_version})
            raise StaleSessionError(session_id, expected_version)

        await self.db.commit()
        return expected_version + 1

    async def _fetch_profile(self, user_id: int) -> Optional[UserProfile]:
        # savepoint: a failed read must not abort the transaction the save runs in
        async with self.db.begin_nested():
            return await self.db.get(UserProfile, user_id, populate_existing=True)

    async def fetch_protocol_mode(self, user_id: int) -> Optional[str]:
        profile = await self._fetch_profile(user_id)
        return profile.protocol_mode if profile else None

    async def fetch_goal_keywords(self, user_id: int) -> List[str]:
        profile = await self._fetch_profile(user_id)
        return list(profile.goal_keywords or []) if profile else []
