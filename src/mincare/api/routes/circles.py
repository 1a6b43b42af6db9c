"""CalmCircle community routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from mincare.api.schemas import JoinRequest, PostRequest, PostResponse
from mincare.models import CircleGroup
from mincare.tracking.community import CommunityService

router = APIRouter(prefix="/circles", tags=["community"])


def _service() -> CommunityService:
    from mincare.api.server import _community

    if _community is None:
        raise HTTPException(503, "Community service not ready.")
    return _community


@router.get("", response_model=list[CircleGroup])
async def list_groups():
    return await _service().list_groups()


@router.get("/memberships/{user_id}")
async def list_memberships(user_id: str):
    return {"user_id": user_id, "group_ids": await _service().memberships(user_id)}


@router.post("/{group_id}/join", status_code=201, response_model=CircleGroup)
async def join_group(group_id: str, req: JoinRequest):
    return await _service().join(req.user_id, group_id)


@router.get("/{group_id}/posts", response_model=list[PostResponse])
async def list_posts(group_id: str):
    """Approved posts, newest first, without author ids."""
    return [PostResponse.from_post(p) for p in await _service().posts(group_id)]


@router.post("/{group_id}/posts", status_code=201, response_model=PostResponse)
async def create_post(group_id: str, req: PostRequest):
    post = await _service().post(req.user_id, group_id, req.content)
    return PostResponse.from_post(post)
