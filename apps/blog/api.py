"""
Blog API endpoints: posts, comments and comment votes.
"""

import logging
import math
import re
from typing import Any

from django.conf import settings
from django.db import IntegrityError, connection, transaction
from django.db.models import Count, F, Q, Sum
from django.http import HttpRequest
from ninja import Router
from ninja.errors import HttpError

from utils.ids import is_object_id
from utils.payload import read_payload
from utils.uploads import UploadRejected, save_image
from .models import (
    COMMENT_MAX_LENGTH,
    CONTENT_MAX_LENGTH,
    EXCERPT_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Comment,
    Post,
    PostCategory,
    PostStatus,
    estimate_read_time,
)
from .normalizers import (
    empty_seo,
    normalize_author,
    normalize_sections,
    normalize_seo,
    normalize_string_array,
    parse_bool,
)
from .schemas import (
    BlogStatsOut,
    CommentMessageOut,
    CommentOut,
    LikesMessageOut,
    LikeToggleIn,
    LikeToggleOut,
    MessageOut,
    PostListOut,
    PostMessageOut,
    PostOut,
    VoteIn,
    VoteOut,
    comment_to_out,
)
from .slugs import generate_slug
from .votes import CommentNotFound, VoteAction, toggle_comment_like, vote_on_comment

logger = logging.getLogger(__name__)

router = Router()

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

SLUG_SAVE_ATTEMPTS = 3
MAX_PAGE_SIZE = 100


def require_object_id(value: str, label: str = "blog") -> str:
    if not is_object_id(value):
        raise HttpError(400, f"Invalid {label} id")
    return value


def get_published_post(slug: str) -> Post:
    post = Post.objects.filter(slug=slug, status=PostStatus.PUBLISHED).first()
    if not post:
        raise HttpError(404, "Blog post not found")
    return post


def check_length(value: str, limit: int, label: str) -> None:
    if len(value) > limit:
        raise HttpError(400, f"{label} must be at most {limit} characters")


def clean_category(raw: Any) -> str:
    category = str(raw).strip()
    if category not in PostCategory.values:
        raise HttpError(400, f"Invalid category. Must be one of: {', '.join(PostCategory.values)}")
    return category


def clean_status(raw: Any) -> str:
    status = str(raw).strip().lower()
    if status not in PostStatus.values:
        raise HttpError(400, f"Invalid status. Must be one of: {', '.join(PostStatus.values)}")
    return status


def store_image(files, field: str, folder: str, prefix: str, max_bytes: int) -> str | None:
    upload = files.get(field)
    if not upload:
        return None
    try:
        return save_image(upload, folder, prefix, max_bytes)
    except UploadRejected as e:
        raise HttpError(400, str(e))


def apply_search(queryset, search: str):
    """Full-text search on PostgreSQL, substring match elsewhere."""
    if connection.vendor == "postgresql":
        from django.contrib.postgres.search import SearchQuery, SearchVector

        vector = SearchVector("title", "excerpt", "content")
        return queryset.annotate(search=vector).filter(search=SearchQuery(search))

    return queryset.filter(
        Q(title__icontains=search) | Q(excerpt__icontains=search) | Q(content__icontains=search)
    )


def save_with_unique_slug(post: Post, regenerate_slug: bool, **save_kwargs) -> None:
    """Save, regenerating the slug if a concurrent writer took it first."""
    for attempt in range(1, SLUG_SAVE_ATTEMPTS + 1):
        if regenerate_slug:
            post.slug = generate_slug(post.title, exclude_id=post.pk)
        try:
            with transaction.atomic():
                post.save(**save_kwargs)
            return
        except IntegrityError:
            if not regenerate_slug or attempt == SLUG_SAVE_ATTEMPTS:
                raise
            logger.warning(f"[Blog] Slug collision on '{post.slug}', retrying ({attempt}/{SLUG_SAVE_ATTEMPTS})")


# IMPORTANT: fixed paths MUST be registered before /{slug_or_id}


@router.get("/", response=PostListOut)
def list_posts(
    request: HttpRequest,
    page: int = 1,
    limit: int = 10,
    category: str | None = None,
    search: str | None = None,
    featured: str | None = None,
    author: str | None = None,
):
    """List published posts with filters and pagination."""
    page = max(page, 1)
    limit = min(limit, MAX_PAGE_SIZE) if limit > 0 else 10

    queryset = Post.objects.filter(status=PostStatus.PUBLISHED)

    if category and category != "All":
        queryset = queryset.filter(category=category)

    featured_flag = parse_bool(featured)
    if featured_flag is not None:
        queryset = queryset.filter(featured=featured_flag)

    if author:
        queryset = queryset.filter(author_name__icontains=author)

    if search and search.strip():
        queryset = apply_search(queryset, search.strip())

    total = queryset.count()
    total_pages = math.ceil(total / limit)
    offset = (page - 1) * limit
    posts = list(queryset.order_by("-published_at", "-created_at")[offset : offset + limit])

    return {
        "success": True,
        "data": [PostOut.from_orm(p) for p in posts],
        "pagination": {
            "currentPage": page,
            "totalPages": total_pages,
            "totalBlogs": total,
            "hasNext": page < total_pages,
            "hasPrev": page > 1,
        },
    }


@router.get("/categories", response=list[str])
def list_categories(request: HttpRequest):
    """Distinct categories among published posts."""
    return list(
        Post.objects.filter(status=PostStatus.PUBLISHED)
        .order_by("category")
        .values_list("category", flat=True)
        .distinct()
    )


@router.get("/featured", response=list[PostOut])
def list_featured(request: HttpRequest, limit: int = 3):
    """Featured published posts, newest first."""
    limit = min(limit, MAX_PAGE_SIZE) if limit > 0 else 3
    posts = Post.objects.filter(status=PostStatus.PUBLISHED, featured=True).order_by("-published_at")[:limit]
    return [PostOut.from_orm(p) for p in posts]


@router.get("/stats", response=BlogStatsOut)
def blog_stats(request: HttpRequest):
    """Aggregate counts over published posts."""
    published = Post.objects.filter(status=PostStatus.PUBLISHED)

    total_views = published.aggregate(total=Sum("views"))["total"] or 0
    category_stats = (
        published.order_by()
        .values("category")
        .annotate(count=Count("id"))
        .order_by("-count", "category")
    )

    return BlogStatsOut(
        totalBlogs=published.count(),
        totalViews=total_views,
        categoryStats=[{"category": row["category"], "count": row["count"]} for row in category_stats],
    )


@router.post("/", response={201: PostMessageOut})
def create_post(request: HttpRequest):
    """Create a post from a JSON or multipart payload."""
    data, files = read_payload(request)

    title = str(data.get("title") or "").strip()
    excerpt = str(data.get("excerpt") or "").strip()
    content = str(data.get("content") or "")

    if not title or not excerpt or not content.strip():
        raise HttpError(400, "Title, excerpt, and content are required")

    check_length(title, TITLE_MAX_LENGTH, "Title")
    check_length(excerpt, EXCERPT_MAX_LENGTH, "Excerpt")
    check_length(content, CONTENT_MAX_LENGTH, "Content")

    category = clean_category(data["category"]) if data.get("category") else PostCategory.TECHNOLOGY
    status = clean_status(data["status"]) if data.get("status") else PostStatus.PUBLISHED

    image_url = store_image(files, "image", "blog-images", "blog", settings.BLOG_IMAGE_MAX_SIZE)
    image_url = image_url or str(data.get("image") or "").strip() or settings.BLOG_PLACEHOLDER_IMAGE

    try:
        sections = normalize_sections(data.get("sections"))
    except ValueError:
        sections = []

    author = normalize_author(data.get("author"))

    post = Post(
        title=title,
        excerpt=excerpt,
        content=content,
        sections=sections,
        image=image_url,
        category=category,
        tags=normalize_string_array(data.get("tags")),
        author_name=author["name"],
        author_email=author["email"],
        author_image=author["image"],
        read_time=estimate_read_time(content),
        status=status,
        featured=parse_bool(data.get("featured")) or False,
        seo=normalize_seo(data.get("seo")) or empty_seo(),
    )
    post.full_clean(exclude=["slug"])

    try:
        save_with_unique_slug(post, regenerate_slug=True, force_insert=True)
    except IntegrityError:
        raise HttpError(409, "Could not allocate a unique slug, please retry")

    logger.info(f"[Blog] Created post {post.pk} with slug '{post.slug}'")
    return 201, {
        "success": True,
        "message": "Blog post created successfully",
        "data": PostOut.from_orm(post),
    }


@router.get("/{slug_or_id}", response=PostOut)
def get_post(request: HttpRequest, slug_or_id: str):
    """Get a published post by slug. Each fetch counts one view."""
    post = get_published_post(slug_or_id)

    Post.objects.filter(pk=post.pk).update(views=F("views") + 1)
    post.refresh_from_db(fields=["views"])

    return PostOut.from_orm(post)


@router.put("/{slug_or_id}", response=PostMessageOut)
def update_post(request: HttpRequest, slug_or_id: str):
    """Update the fields present in the payload."""
    post_id = require_object_id(slug_or_id)
    data, files = read_payload(request)

    post = Post.objects.filter(pk=post_id).first()
    if not post:
        raise HttpError(404, "Blog post not found")

    title_changed = False
    title = str(data.get("title") or "").strip()
    if title:
        check_length(title, TITLE_MAX_LENGTH, "Title")
        if title != post.title:
            post.title = title
            title_changed = True

    excerpt = str(data.get("excerpt") or "").strip()
    if excerpt:
        check_length(excerpt, EXCERPT_MAX_LENGTH, "Excerpt")
        post.excerpt = excerpt

    content = data.get("content")
    if content is not None and str(content).strip():
        content = str(content)
        check_length(content, CONTENT_MAX_LENGTH, "Content")
        post.content = content
        post.read_time = estimate_read_time(content)

    if data.get("category"):
        post.category = clean_category(data["category"])

    if data.get("status"):
        post.status = clean_status(data["status"])

    featured = parse_bool(data.get("featured"))
    if featured is not None:
        post.featured = featured

    # tags and seo may be sent empty to clear them
    if "tags" in data:
        post.tags = normalize_string_array(data["tags"])

    if "seo" in data:
        raw_seo = data["seo"]
        if raw_seo is None or (isinstance(raw_seo, str) and not raw_seo.strip()):
            post.seo = empty_seo()
        else:
            seo = normalize_seo(raw_seo)
            if seo is not None:
                post.seo = seo

    if data.get("author"):
        author = normalize_author(data["author"], base=post.author)
        post.author_name = author["name"]
        post.author_email = author["email"]
        post.author_image = author["image"]

    if data.get("sections"):
        try:
            post.sections = normalize_sections(data["sections"])
        except ValueError as e:
            raise HttpError(400, str(e))

    image_url = store_image(files, "image", "blog-images", "blog", settings.BLOG_IMAGE_MAX_SIZE)
    if image_url:
        post.image = image_url
    elif data.get("image") and str(data["image"]).strip():
        post.image = str(data["image"]).strip()

    post.full_clean(exclude=["slug"])
    try:
        save_with_unique_slug(post, regenerate_slug=title_changed)
    except IntegrityError:
        raise HttpError(409, "Could not allocate a unique slug, please retry")

    logger.info(f"[Blog] Updated post {post.pk}")
    return {
        "success": True,
        "message": "Blog post updated successfully",
        "data": PostOut.from_orm(post),
    }


@router.delete("/{slug_or_id}", response=MessageOut)
def delete_post(request: HttpRequest, slug_or_id: str):
    """Delete a post and its comments."""
    post_id = require_object_id(slug_or_id)

    deleted, _ = Post.objects.filter(pk=post_id).delete()
    if not deleted:
        raise HttpError(404, "Blog post not found")

    logger.info(f"[Blog] Deleted post {post_id}")
    return {"success": True, "message": "Blog post deleted successfully"}


@router.post("/{blog_id}/like", response=LikesMessageOut)
def like_post(request: HttpRequest, blog_id: str):
    """Increment the post's like counter."""
    require_object_id(blog_id)

    if not Post.objects.filter(pk=blog_id).update(likes=F("likes") + 1):
        raise HttpError(404, "Blog post not found")

    likes = Post.objects.values_list("likes", flat=True).get(pk=blog_id)
    return {"success": True, "message": "Blog liked successfully", "data": {"likes": likes}}


@router.get("/{slug_or_id}/comments", response=list[CommentOut])
def list_comments(request: HttpRequest, slug_or_id: str):
    """Approved comments of a published post, newest first."""
    post = get_published_post(slug_or_id)

    comments = (
        Comment.objects.filter(post=post, approved=True)
        .prefetch_related("votes")
        .order_by("-created_at")
    )
    return [comment_to_out(c) for c in comments]


@router.post("/{slug_or_id}/comments", response={201: CommentMessageOut})
def add_comment(request: HttpRequest, slug_or_id: str):
    """Add a comment to a published post, with an optional avatar image."""
    post_id = require_object_id(slug_or_id)
    data, files = read_payload(request)

    name = str(data.get("name") or "").strip()
    email = str(data.get("email") or "").strip().lower()
    body = str(data.get("comment") or "").strip()

    if not name or not email or not body:
        raise HttpError(400, "Name, email, and comment are required")
    if not EMAIL_REGEX.match(email):
        raise HttpError(400, "Please provide a valid email address")
    check_length(body, COMMENT_MAX_LENGTH, "Comment")

    post = Post.objects.filter(pk=post_id, status=PostStatus.PUBLISHED).first()
    if not post:
        raise HttpError(404, "Blog post not found")

    avatar = store_image(files, "avatar", "comment-avatars", "avatar", settings.COMMENT_AVATAR_MAX_SIZE)
    author_id = str(data.get("authorId") or "").strip() or None

    comment = Comment.objects.create(
        post=post,
        name=name,
        email=email,
        comment=body,
        avatar=avatar,
        author_id=author_id,
    )

    logger.info(f"[Blog] Comment {comment.pk} added to post {post.pk}")
    return 201, {
        "success": True,
        "message": "Comment added successfully",
        "data": comment_to_out(comment),
    }


@router.post("/{blog_id}/comments/{comment_id}/vote", response=VoteOut)
def vote_comment(request: HttpRequest, blog_id: str, comment_id: str, data: VoteIn):
    """Like, dislike, undo or switch a voter's vote on a comment."""
    require_object_id(blog_id)
    require_object_id(comment_id, "comment")

    if data.action not in VoteAction.values:
        raise HttpError(400, f"Invalid action. Must be one of: {', '.join(VoteAction.values)}")

    voter_id = (data.voterId or "").strip()
    if not voter_id:
        raise HttpError(400, "voterId is required")

    try:
        result = vote_on_comment(blog_id, comment_id, voter_id, data.action)
    except CommentNotFound:
        raise HttpError(404, "Comment not found")

    return VoteOut(
        likeCount=result.like_count,
        dislikeCount=result.dislike_count,
        hasLiked=result.has_liked,
        hasDisliked=result.has_disliked,
    )


@router.post("/{blog_id}/comments/{comment_id}/like", response=LikeToggleOut)
def toggle_like_comment(request: HttpRequest, blog_id: str, comment_id: str, data: LikeToggleIn):
    """Flip a voter's like on a comment."""
    require_object_id(blog_id)
    require_object_id(comment_id, "comment")

    user_id = (data.userId or "").strip()
    if not user_id:
        raise HttpError(400, "userId is required")

    try:
        result = toggle_comment_like(blog_id, comment_id, user_id)
    except CommentNotFound:
        raise HttpError(404, "Comment not found")

    return LikeToggleOut(
        likeCount=result.like_count,
        dislikeCount=result.dislike_count,
        liked=result.has_liked,
    )
