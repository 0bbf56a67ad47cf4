"""
Pytest configuration and fixtures.
"""

import json

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client

from apps.blog.models import Comment, Post, PostStatus


class APIClient:
    """Wrapper around Django test client for API testing."""

    def __init__(self):
        self.client = Client()

    def _make_request(self, method, path, data=None, headers=None):
        """Make HTTP request."""
        kwargs = {"content_type": "application/json"}

        if headers:
            kwargs.update(headers)

        if data is not None:
            kwargs["data"] = json.dumps(data)

        # Prepend /api if not present
        if not path.startswith("/api"):
            path = f"/api{path}"

        response = getattr(self.client, method.lower())(path, **kwargs)
        return APIResponse(response)

    def get(self, path, headers=None, **kwargs):
        return self._make_request("GET", path, headers=headers)

    def post(self, path, json=None, headers=None, **kwargs):
        return self._make_request("POST", path, data=json, headers=headers)

    def put(self, path, json=None, headers=None, **kwargs):
        return self._make_request("PUT", path, data=json, headers=headers)

    def patch(self, path, json=None, headers=None, **kwargs):
        return self._make_request("PATCH", path, data=json, headers=headers)

    def delete(self, path, headers=None, **kwargs):
        return self._make_request("DELETE", path, headers=headers)

    def post_form(self, path, data):
        """POST multipart/form-data (files as SimpleUploadedFile values)."""
        if not path.startswith("/api"):
            path = f"/api{path}"
        return APIResponse(self.client.post(path, data=data))


class APIResponse:
    """Wrapper around Django response for easier testing."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.content = response.content
        self.headers = response.headers

    def json(self):
        return json.loads(self._response.content)


@pytest.fixture
def api_client():
    """API test client."""
    return APIClient()


@pytest.fixture
def make_post(db):
    """Factory for blog posts, published by default."""
    counter = {"n": 0}

    def _make_post(**overrides):
        counter["n"] += 1
        fields = {
            "title": f"Post {counter['n']}",
            "slug": f"post-{counter['n']}",
            "excerpt": "An excerpt",
            "content": "Some content for the post",
            "image": "https://example.com/image.png",
            "category": "Technology",
            "author_name": "Jane Writer",
            "author_email": "jane@example.com",
            "status": PostStatus.PUBLISHED,
        }
        fields.update(overrides)
        return Post.objects.create(**fields)

    return _make_post


@pytest.fixture
def make_comment(db):
    """Factory for comments on a given post."""

    def _make_comment(post, **overrides):
        fields = {
            "post": post,
            "name": "Reader",
            "email": "reader@example.com",
            "comment": "Great post!",
        }
        fields.update(overrides)
        return Comment.objects.create(**fields)

    return _make_comment


@pytest.fixture
def png_file():
    """Small fake PNG upload."""

    def _png_file(name="image.png", size=128):
        return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\n" + b"0" * size, content_type="image/png")

    return _png_file
