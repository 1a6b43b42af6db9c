"""CalmCircle community groups: membership and anonymous posts."""

from __future__ import annotations

import structlog

from mincare.errors import AlreadyMemberError, MembershipRequiredError, NotFoundError
from mincare.models import CircleGroup, CirclePost
from mincare.storage.repository import CircleRepository

logger = structlog.get_logger(__name__)


class CommunityService:
    """Group membership and posting rules on top of :class:`CircleRepository`.

    Only members may post to a group.  Listings return approved posts only;
    moderation itself happens elsewhere.
    """

    def __init__(self, circles: CircleRepository | None = None, post_limit: int = 20) -> None:
        self._circles = circles or CircleRepository()
        self._post_limit = post_limit

    async def list_groups(self) -> list[CircleGroup]:
        return await self._circles.list_groups()

    async def memberships(self, user_id: str) -> list[str]:
        return await self._circles.memberships(user_id)

    async def join(self, user_id: str, group_id: str) -> CircleGroup:
        await self._require_group(group_id)
        if await self._circles.is_member(user_id, group_id):
            raise AlreadyMemberError(group_id)
        await self._circles.join(user_id, group_id)
        logger.info("community.joined", user_id=user_id, group_id=group_id)
        return await self._require_group(group_id)

    async def post(self, user_id: str, group_id: str, content: str) -> CirclePost:
        await self._require_group(group_id)
        if not await self._circles.is_member(user_id, group_id):
            raise MembershipRequiredError(group_id)
        post = CirclePost(user_id=user_id, group_id=group_id, content=content.strip())
        await self._circles.save_post(post)
        logger.info("community.posted", group_id=group_id, post_id=post.id)
        return post

    async def posts(self, group_id: str) -> list[CirclePost]:
        await self._require_group(group_id)
        return await self._circles.list_posts(group_id, limit=self._post_limit)

    async def _require_group(self, group_id: str) -> CircleGroup:
        group = await self._circles.get_group(group_id)
        if group is None:
            raise NotFoundError("Group", group_id)
        return group
