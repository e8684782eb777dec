import logging
from hms.core.base import gen_id
from hms.core.exceptions import NotFound
from hms.core.security import Principal
from hms.core.validation import optional_text, require_text
from hms.modules.community.models import Comment, Post
from hms.modules.community.schemas import CommentCreate, PostCreate
from hms.store.entity_store import EntityStore

log = logging.getLogger(__name__)

class CommunityService:
    """Posts are append-only; likes and comments are the only changes after publishing."""

    def __init__(self, store: EntityStore):
        self.store = store

    def create_post(self, payload: PostCreate, author: Principal) -> Post:
        post = Post(
            title=require_text(payload.title, "Title"),
            content=require_text(payload.content, "Content"),
            category=optional_text(payload.category),
            author_id=author.user_id,
            author_name=author.name or author.email,
        )
        obj = self.store.posts.add(post)
        log.info(f"Post {obj.id} published by {author.user_id}")
        return obj

    def list_posts(self, q: str | None = None, category: str | None = None) -> list[Post]:
        needle = (q or "").lower()
        cat = (category or "").lower()
        posts = self.store.posts.where(
            lambda p: (not needle or needle in p.title.lower() or needle in p.content.lower())
            and (not cat or (p.category or "").lower() == cat)
        )
        return sorted(posts, key=lambda p: p.created_at, reverse=True)

    def get(self, post_id: str) -> Post | None:
        return self.store.posts.get(post_id)

    def like(self, post_id: str) -> Post | None:
        post = self.store.posts.get(post_id)
        if not post:
            return None
        post.likes += 1
        return self.store.posts.edit(post)

    def add_comment(self, post_id: str, payload: CommentCreate, author: Principal) -> Post | None:
        post = self.store.posts.get(post_id)
        if not post:
            return None
        taken = {c.id for c in post.comments}
        comment_id = gen_id("C")
        while comment_id in taken:
            comment_id = gen_id("C")
        post.comments = post.comments + [Comment(
            id=comment_id,
            text=require_text(payload.text, "Comment"),
            author_id=author.user_id,
            author_name=author.name or author.email,
            author_role=author.role,
        )]
        return self.store.posts.edit(post)

    def delete_comment(self, post_id: str, comment_id: str, actor: Principal) -> Post | None:
        post = self.store.posts.get(post_id)
        if not post:
            return None
        target = next((c for c in post.comments if c.id == comment_id), None)
        # admins moderate; everyone else may only remove their own comments
        if target is None or (actor.role != "admin" and target.author_id != actor.user_id):
            raise NotFound("Comment", comment_id)
        post.comments = [c for c in post.comments if c.id != comment_id]
        return self.store.posts.edit(post)
