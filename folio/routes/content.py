"""Post and project endpoints.

Both content kinds expose the same routes; :func:`build_content_router`
builds them for one kind.
"""

from typing import Type

from fastapi import APIRouter, Request
from pydantic import BaseModel

from folio.models.content_kinds import POST, PROJECT, ContentKind
from folio.models.request_models import CommentCreateRequest, PostCreateRequest, ProjectCreateRequest
from folio.models.response_models import DataResponse, ErrorResponse, MessageResponse
from folio.services.auth_gate import CurrentUser
from folio.services.content import ContentService
from folio.utils.serialization import public

ERROR_RESPONSES = {
    401: {"description": "Missing or invalid token", "model": ErrorResponse},
    404: {"description": "Item not found", "model": ErrorResponse},
}


def build_content_router(kind: ContentKind, prefix: str, create_model: Type[BaseModel]) -> APIRouter:
    """
    Build the routes for one content kind.

    Args:
        kind: Content kind served by the router
        prefix: URL prefix, e.g. ``/api/posts``
        create_model: Request model for creating an item

    Returns:
        APIRouter: Router with create, list, get, delete, like and comment routes
    """
    router = APIRouter(prefix=prefix, tags=[kind.collection], responses=ERROR_RESPONSES)
    noun = kind.label.lower()

    def service(request: Request) -> ContentService:
        return request.app.state.content[kind.collection]

    @router.post("", response_model=DataResponse, summary=f"Create a {noun}")
    async def create_item(payload: create_model, request: Request, caller_id: CurrentUser):
        item = await service(request).create(caller_id, payload.model_dump())
        return DataResponse(data=public(item))

    @router.get("", response_model=DataResponse, summary=f"List {noun}s, newest first")
    async def list_items(request: Request, caller_id: CurrentUser):
        return DataResponse(data=public(await service(request).list()))

    @router.get("/{item_id}", response_model=DataResponse, summary=f"Get a {noun}")
    async def get_item(item_id: str, request: Request, caller_id: CurrentUser):
        return DataResponse(data=public(await service(request).get(item_id)))

    @router.delete("/{item_id}", response_model=MessageResponse, summary=f"Delete own {noun}")
    async def delete_item(item_id: str, request: Request, caller_id: CurrentUser):
        await service(request).delete(item_id, caller_id)
        return MessageResponse(msg=f"{kind.label} removed")

    @router.put("/like/{item_id}", response_model=DataResponse, summary=f"Like a {noun}")
    async def like_item(item_id: str, request: Request, caller_id: CurrentUser):
        return DataResponse(data=await service(request).like(item_id, caller_id))

    @router.put("/unlike/{item_id}", response_model=DataResponse, summary=f"Unlike a {noun}")
    async def unlike_item(item_id: str, request: Request, caller_id: CurrentUser):
        return DataResponse(data=await service(request).unlike(item_id, caller_id))

    @router.post("/comment/{item_id}", response_model=DataResponse, summary=f"Comment on a {noun}")
    async def add_comment(
        item_id: str,
        payload: CommentCreateRequest,
        request: Request,
        caller_id: CurrentUser
    ):
        comments = await service(request).add_comment(item_id, caller_id, payload.text)
        return DataResponse(data=comments)

    @router.delete(
        "/comment/{item_id}/{comment_id}",
        response_model=DataResponse,
        summary="Delete own comment",
    )
    async def delete_comment(item_id: str, comment_id: str, request: Request, caller_id: CurrentUser):
        comments = await service(request).delete_comment(item_id, comment_id, caller_id)
        return DataResponse(data=comments)

    return router


posts_router = build_content_router(POST, "/api/posts", PostCreateRequest)
projects_router = build_content_router(PROJECT, "/api/projects", ProjectCreateRequest)
