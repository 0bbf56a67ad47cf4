"""
Blog schemas for API.
"""

from datetime import datetime
from typing import Any

from ninja import Schema
from pydantic import ConfigDict, Field


class AuthorOut(Schema):
    """Author info embedded in post."""

    name: str
    email: str
    image: str | None = None


class SectionOut(Schema):
    heading: str = ""
    content: str = ""
    image: str = ""


class SeoOut(Schema):
    metaTitle: str = ""
    metaDescription: str = ""
    keywords: list[str] = []


class PostOut(Schema):
    """Post output - camelCase for frontend."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    sections: list[SectionOut] = []
    image: str
    category: str
    tags: list[str] = []
    author: AuthorOut
    readTime: str = Field(validation_alias="read_time", default="1 min read")
    status: str
    views: int = 0
    likes: int = 0
    featured: bool = False
    publishedAt: datetime | None = Field(validation_alias="published_at", default=None)
    seo: SeoOut = SeoOut()
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")


class PaginationOut(Schema):
    """Pagination info."""

    currentPage: int
    totalPages: int
    totalBlogs: int
    hasNext: bool
    hasPrev: bool


class PostListOut(Schema):
    """Paginated posts list response."""

    success: bool = True
    data: list[PostOut]
    pagination: PaginationOut


class PostMessageOut(Schema):
    success: bool = True
    message: str
    data: PostOut


class MessageOut(Schema):
    success: bool = True
    message: str


class LikesOut(Schema):
    likes: int


class LikesMessageOut(Schema):
    success: bool = True
    message: str
    data: LikesOut


class CategoryStatOut(Schema):
    category: str
    count: int


class BlogStatsOut(Schema):
    totalBlogs: int
    totalViews: int
    categoryStats: list[CategoryStatOut]


class CommentOut(Schema):
    """Comment output with voter sets."""

    id: str
    name: str
    email: str
    comment: str
    avatar: str | None = None
    authorId: str | None = None
    approved: bool = True
    likeCount: int = 0
    dislikeCount: int = 0
    likedBy: list[str] = []
    dislikedBy: list[str] = []
    createdAt: datetime


class CommentMessageOut(Schema):
    success: bool = True
    message: str
    data: CommentOut


class VoteIn(Schema):
    action: str | None = None
    voterId: str | None = None


class VoteOut(Schema):
    likeCount: int
    dislikeCount: int
    hasLiked: bool
    hasDisliked: bool


class LikeToggleIn(Schema):
    userId: str | None = None


class LikeToggleOut(Schema):
    likeCount: int
    dislikeCount: int
    liked: bool


def comment_to_out(comment: Any) -> CommentOut:
    """Convert Comment model to CommentOut, deriving voter sets from its votes."""
    votes = list(comment.votes.all())
    return CommentOut(
        id=comment.id,
        name=comment.name,
        email=comment.email,
        comment=comment.comment,
        avatar=comment.avatar,
        authorId=comment.author_id,
        approved=comment.approved,
        likeCount=comment.like_count,
        dislikeCount=comment.dislike_count,
        likedBy=[v.voter_id for v in votes if v.kind == "like"],
        dislikedBy=[v.voter_id for v in votes if v.kind == "dislike"],
        createdAt=comment.created_at,
    )
