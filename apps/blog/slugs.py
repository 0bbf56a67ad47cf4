"""
Slug generation for blog posts.
"""

import re
import unicodedata

from .models import Post

FALLBACK_SLUG = "post"


def slugify_title(title: str) -> str:
    """Lowercase, keep ASCII letters/digits/whitespace, join words with hyphens."""
    text = unicodedata.normalize("NFKD", title or "").encode("ascii", "ignore").decode("ascii")
    text = text.lower()
    text = re.sub(r"[^a-z0-9\s]", "", text)
    text = re.sub(r"\s+", "-", text.strip())
    return text.strip("-")


def generate_slug(title: str, exclude_id: str | None = None) -> str:
    """Return a slug for `title` that no other post uses.

    Collisions get `-1`, `-2`, ... appended. `exclude_id` skips the post being
    renamed. The unique index on Post.slug remains the final guard.
    """
    base_slug = slugify_title(title) or FALLBACK_SLUG

    queryset = Post.objects.all()
    if exclude_id:
        queryset = queryset.exclude(pk=exclude_id)

    slug = base_slug
    counter = 1
    while queryset.filter(slug=slug).exists():
        slug = f"{base_slug}-{counter}"
        counter += 1
    return slug
