from fastapi import APIRouter, Depends, HTTPException
from hms.core.security import Principal, get_principal, require_scopes
from hms.modules.community.models import Post
from hms.modules.community.schemas import CommentCreate, PostCreate
from hms.modules.community.service import CommunityService
from hms.store.entity_store import EntityStore
from hms.store.provider import get_store

router = APIRouter()

def svc(store: EntityStore = Depends(get_store)) -> CommunityService:
    return CommunityService(store)

@router.post("", response_model=Post, status_code=201, dependencies=[Depends(require_scopes("posts:write"))])
async def create_post(payload: PostCreate, principal: Principal = Depends(get_principal), service: CommunityService = Depends(svc)):
    return service.create_post(payload, principal)

@router.get("", response_model=list[Post], dependencies=[Depends(require_scopes("posts:read"))])
async def list_posts(q: str | None = None, category: str | None = None, service: CommunityService = Depends(svc)):
    return service.list_posts(q, category)

@router.get("/{post_id}", response_model=Post, dependencies=[Depends(require_scopes("posts:read"))])
async def get_post(post_id: str, service: CommunityService = Depends(svc)):
    obj = service.get(post_id)
    if not obj:
        raise HTTPException(404, "Post not found")
    return obj

@router.post("/{post_id}/like", response_model=Post, dependencies=[Depends(require_scopes("posts:write"))])
async def like_post(post_id: str, service: CommunityService = Depends(svc)):
    obj = service.like(post_id)
    if not obj:
        raise HTTPException(404, "Post not found")
    return obj

@router.post("/{post_id}/comments", response_model=Post, status_code=201, dependencies=[Depends(require_scopes("posts:write"))])
async def add_comment(post_id: str, payload: CommentCreate, principal: Principal = Depends(get_principal), service: CommunityService = Depends(svc)):
    obj = service.add_comment(post_id, payload, principal)
    if not obj:
        raise HTTPException(404, "Post not found")
    return obj

@router.delete("/{post_id}/comments/{comment_id}", response_model=Post, dependencies=[Depends(require_scopes("posts:write"))])
async def delete_comment(post_id: str, comment_id: str, principal: Principal = Depends(get_principal), service: CommunityService = Depends(svc)):
    obj = service.delete_comment(post_id, comment_id, principal)
    if not obj:
        raise HTTPException(404, "Post not found")
    return obj
