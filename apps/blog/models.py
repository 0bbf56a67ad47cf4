"""
Blog post, comment and comment vote models.
"""

import math

from django.db import models
from django.utils import timezone

from utils.ids import generate_object_id

TITLE_MAX_LENGTH = 500
EXCERPT_MAX_LENGTH = 1000
CONTENT_MAX_LENGTH = 10_000_000
COMMENT_MAX_LENGTH = 5000


class PostStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    PUBLISHED = "published", "Published"
    ARCHIVED = "archived", "Archived"


class PostCategory(models.TextChoices):
    TECHNOLOGY = "Technology", "Technology"
    DESIGN = "Design", "Design"
    MOBILE_DEVELOPMENT = "Mobile Development", "Mobile Development"
    WEB_DEVELOPMENT = "Web Development", "Web Development"
    AI_ML = "AI/ML", "AI/ML"
    CYBERSECURITY = "Cybersecurity", "Cybersecurity"
    BUSINESS = "Business", "Business"
    TUTORIAL = "Tutorial", "Tutorial"


def estimate_read_time(content: str | None) -> str:
    """Read time at 200 words per minute, at least one minute."""
    word_count = len((content or "").split())
    minutes = max(1, math.ceil(word_count / 200))
    return f"{minutes} min read"


class Post(models.Model):
    """Blog post."""

    id = models.CharField(primary_key=True, max_length=24, default=generate_object_id, editable=False)
    title = models.CharField(max_length=TITLE_MAX_LENGTH)
    slug = models.CharField(max_length=600, unique=True)
    excerpt = models.TextField(max_length=EXCERPT_MAX_LENGTH)
    content = models.TextField(max_length=CONTENT_MAX_LENGTH)
    sections = models.JSONField(default=list, blank=True)
    image = models.CharField(max_length=1000)
    category = models.CharField(max_length=50, choices=PostCategory.choices, default=PostCategory.TECHNOLOGY)
    tags = models.JSONField(default=list, blank=True)
    author_name = models.CharField(max_length=255, db_column="authorName")
    author_email = models.CharField(max_length=255, db_column="authorEmail")
    author_image = models.CharField(max_length=1000, blank=True, default="", db_column="authorImage")
    read_time = models.CharField(max_length=20, default="1 min read", db_column="readTime")
    status = models.CharField(max_length=20, choices=PostStatus.choices, default=PostStatus.DRAFT)
    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    featured = models.BooleanField(default=False)
    published_at = models.DateTimeField(null=True, blank=True, db_column="publishedAt")
    seo = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "blog_posts"
        ordering = ["-published_at"]
        indexes = [
            models.Index(fields=["category", "status"]),
            models.Index(fields=["-published_at"]),
        ]

    def __str__(self) -> str:
        return self.title

    @property
    def author(self) -> dict:
        return {"name": self.author_name, "email": self.author_email, "image": self.author_image}

    def save(self, *args, **kwargs):
        # publishedAt is stamped once, the first time the post is published
        if self.status == PostStatus.PUBLISHED and self.published_at is None:
            self.published_at = timezone.now()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None:
                kwargs["update_fields"] = {*update_fields, "published_at"}
        super().save(*args, **kwargs)


class Comment(models.Model):
    """Reader comment on a blog post."""

    id = models.CharField(primary_key=True, max_length=24, default=generate_object_id, editable=False)
    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name="comments", db_column="postId")
    name = models.CharField(max_length=255)
    email = models.CharField(max_length=255)
    comment = models.TextField(max_length=COMMENT_MAX_LENGTH)
    avatar = models.CharField(max_length=1000, null=True, blank=True)
    author_id = models.CharField(max_length=255, null=True, blank=True, db_column="authorId")
    approved = models.BooleanField(default=True)
    like_count = models.PositiveIntegerField(default=0, db_column="likeCount")
    dislike_count = models.PositiveIntegerField(default=0, db_column="dislikeCount")
    created_at = models.DateTimeField(default=timezone.now, editable=False, db_column="createdAt")

    class Meta:
        db_table = "blog_comments"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} on {self.post_id}"


class VoteKind(models.TextChoices):
    LIKE = "like", "Like"
    DISLIKE = "dislike", "Dislike"


class CommentVote(models.Model):
    """One voter's current vote on a comment. A voter holds at most one row per comment."""

    comment = models.ForeignKey(Comment, on_delete=models.CASCADE, related_name="votes", db_column="commentId")
    voter_id = models.CharField(max_length=255, db_column="voterId")
    kind = models.CharField(max_length=10, choices=VoteKind.choices)
    created_at = models.DateTimeField(auto_now_add=True, db_column="createdAt")
    updated_at = models.DateTimeField(auto_now=True, db_column="updatedAt")

    class Meta:
        db_table = "blog_comment_votes"
        constraints = [
            models.UniqueConstraint(fields=["comment", "voter_id"], name="uq_comment_voter"),
        ]

    def __str__(self) -> str:
        return f"{self.voter_id} {self.kind} {self.comment_id}"
