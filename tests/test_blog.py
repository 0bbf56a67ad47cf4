"""
Tests for Blog API endpoints.
"""

from unittest.mock import patch

import pytest
from django.db import IntegrityError
from django.test.client import BOUNDARY, MULTIPART_CONTENT, encode_multipart

from apps.blog.models import CONTENT_MAX_LENGTH, EXCERPT_MAX_LENGTH, Post, PostStatus

NEW_POST = {
    "title": "Hello, World! 2025",
    "excerpt": "A short excerpt",
    "content": "Some words for the body of the post",
}


@pytest.mark.django_db
class TestBlogList:
    """Blog listing test cases."""

    def test_list_published_posts_only(self, api_client, make_post):
        make_post(title="Published Post")
        make_post(title="Draft Post", status=PostStatus.DRAFT)

        response = api_client.get("/blogs/")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [p["title"] for p in data["data"]] == ["Published Post"]
        assert data["pagination"]["totalBlogs"] == 1

    def test_pagination(self, api_client, make_post):
        for _ in range(12):
            make_post()

        response = api_client.get("/blogs/?page=3&limit=5")

        data = response.json()
        assert len(data["data"]) == 2
        assert data["pagination"] == {
            "currentPage": 3,
            "totalPages": 3,
            "totalBlogs": 12,
            "hasNext": False,
            "hasPrev": True,
        }

    def test_filter_by_category(self, api_client, make_post):
        make_post(title="Tech Post", category="Technology")
        make_post(title="Design Post", category="Design")

        response = api_client.get("/blogs/?category=Design")

        assert [p["title"] for p in response.json()["data"]] == ["Design Post"]

    def test_category_all_is_unfiltered(self, api_client, make_post):
        make_post(category="Technology")
        make_post(category="Design")

        response = api_client.get("/blogs/?category=All")

        assert len(response.json()["data"]) == 2

    def test_filter_featured(self, api_client, make_post):
        make_post(title="Featured", featured=True)
        make_post(title="Regular")

        response = api_client.get("/blogs/?featured=true")

        assert [p["title"] for p in response.json()["data"]] == ["Featured"]

    def test_search(self, api_client, make_post):
        make_post(title="Django tips", content="About the ORM")
        make_post(title="Other", content="Unrelated text")

        response = api_client.get("/blogs/?search=orm")

        assert [p["title"] for p in response.json()["data"]] == ["Django tips"]

    def test_filter_by_author(self, api_client, make_post):
        make_post(title="Mine", author_name="Alice Smith")
        make_post(title="Theirs", author_name="Bob Jones")

        response = api_client.get("/blogs/?author=alice")

        assert [p["title"] for p in response.json()["data"]] == ["Mine"]

    def test_post_shape(self, api_client, make_post):
        make_post(title="Shape", tags=["a", "b"])

        post = api_client.get("/blogs/").json()["data"][0]

        assert len(post["id"]) == 24
        assert post["author"]["name"] == "Jane Writer"
        assert post["tags"] == ["a", "b"]
        assert post["readTime"] == "1 min read"
        assert post["publishedAt"] is not None
        assert post["seo"] == {"metaTitle": "", "metaDescription": "", "keywords": []}


@pytest.mark.django_db
class TestBlogAggregates:
    """Categories, featured and stats test cases."""

    def test_categories(self, api_client, make_post):
        make_post(category="Design")
        make_post(category="Technology")
        make_post(category="Design")
        make_post(category="Business", status=PostStatus.DRAFT)

        response = api_client.get("/blogs/categories")

        assert response.status_code == 200
        assert response.json()["data"] == ["Design", "Technology"]

    def test_featured_limit(self, api_client, make_post):
        for _ in range(4):
            make_post(featured=True)
        make_post(featured=False)

        response = api_client.get("/blogs/featured")

        data = response.json()["data"]
        assert len(data) == 3
        assert all(p["featured"] for p in data)

    def test_stats(self, api_client, make_post):
        make_post(category="Design", views=10)
        make_post(category="Design", views=5)
        make_post(category="Technology", views=1)
        make_post(category="Technology", views=100, status=PostStatus.DRAFT)

        response = api_client.get("/blogs/stats")

        data = response.json()["data"]
        assert data["totalBlogs"] == 3
        assert data["totalViews"] == 16
        assert data["categoryStats"] == [
            {"category": "Design", "count": 2},
            {"category": "Technology", "count": 1},
        ]


@pytest.mark.django_db
class TestBlogCreate:
    """Blog creation test cases."""

    def test_create_post(self, api_client):
        response = api_client.post("/blogs/", json=NEW_POST)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Blog post created successfully"
        post = body["data"]
        assert post["slug"] == "hello-world-2025"
        assert post["status"] == "published"
        assert post["category"] == "Technology"
        assert post["author"]["name"] == "Admin User"
        assert post["publishedAt"] is not None

    def test_same_title_gets_suffixed_slug(self, api_client):
        first = api_client.post("/blogs/", json=NEW_POST).json()["data"]
        second = api_client.post("/blogs/", json=NEW_POST).json()["data"]

        assert first["slug"] == "hello-world-2025"
        assert second["slug"] == "hello-world-2025-1"

    def test_required_fields(self, api_client):
        response = api_client.post("/blogs/", json={"title": "Only a title"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Title, excerpt, and content are required",
        }

    def test_title_too_long(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "title": "x" * 501})

        assert response.status_code == 400
        assert Post.objects.count() == 0

    def test_invalid_category(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "category": "Cooking"})

        assert response.status_code == 400

    def test_tags_from_csv(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "tags": "a, b, ,c"})

        assert response.json()["data"]["tags"] == ["a", "b", "c"]

    def test_draft_has_no_published_at(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "status": "draft"})

        assert response.json()["data"]["publishedAt"] is None

    def test_placeholder_image(self, api_client, settings):
        response = api_client.post("/blogs/", json=NEW_POST)

        assert response.json()["data"]["image"] == settings.BLOG_PLACEHOLDER_IMAGE

    def test_multipart_with_image(self, api_client, png_file):
        response = api_client.post_form(
            "/blogs/",
            {
                **NEW_POST,
                "tags": '["x", "y", "x"]',
                "author": '{"name": "Form Author", "email": "form@example.com"}',
                "seo": '{"metaTitle": "Meta", "keywords": "k1, k2"}',
                "featured": "true",
                "image": png_file(),
            },
        )

        assert response.status_code == 201
        post = response.json()["data"]
        assert post["image"].startswith("/uploads/blog-images/blog-")
        assert post["image"].endswith(".png")
        assert post["tags"] == ["x", "y"]
        assert post["author"]["name"] == "Form Author"
        assert post["author"]["email"] == "form@example.com"
        assert post["seo"]["keywords"] == ["k1", "k2"]
        assert post["featured"] is True

    def test_rejects_non_image_upload(self, api_client):
        from django.core.files.uploadedfile import SimpleUploadedFile

        upload = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        response = api_client.post_form("/blogs/", {**NEW_POST, "image": upload})

        assert response.status_code == 400
        assert Post.objects.count() == 0

    def test_malformed_json(self, api_client):
        response = api_client.client.post("/api/blogs/", data="{bad", content_type="application/json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestBlogDetail:
    """Single post retrieval test cases."""

    def test_get_post_by_slug_counts_views(self, api_client, make_post):
        make_post(slug="view-test")

        first = api_client.get("/blogs/view-test").json()["data"]
        second = api_client.get("/blogs/view-test").json()["data"]

        assert first["views"] == 1
        assert second["views"] == 2

    def test_draft_not_found(self, api_client, make_post):
        make_post(slug="draft", status=PostStatus.DRAFT)

        response = api_client.get("/blogs/draft")

        assert response.status_code == 404
        assert response.json()["message"] == "Blog post not found"

    def test_missing_post(self, api_client):
        response = api_client.get("/blogs/nonexistent-slug")

        assert response.status_code == 404


@pytest.mark.django_db
class TestBlogUpdate:
    """Blog update test cases."""

    def test_update_keeps_absent_fields(self, api_client, make_post):
        post = make_post(featured=True, tags=["keep"])

        response = api_client.put(f"/blogs/{post.pk}", json={"excerpt": "New excerpt"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["excerpt"] == "New excerpt"
        assert data["featured"] is True
        assert data["tags"] == ["keep"]
        assert data["slug"] == post.slug

    def test_update_featured_from_string(self, api_client, make_post):
        post = make_post(featured=False)

        response = api_client.put(f"/blogs/{post.pk}", json={"featured": "true"})

        assert response.json()["data"]["featured"] is True

    def test_title_change_regenerates_slug(self, api_client, make_post):
        post = make_post(title="Old title", slug="old-title")
        make_post(slug="new-title")

        same = api_client.put(f"/blogs/{post.pk}", json={"title": "Old title"}).json()["data"]
        renamed = api_client.put(f"/blogs/{post.pk}", json={"title": "New title"}).json()["data"]

        assert same["slug"] == "old-title"
        assert renamed["slug"] == "new-title-1"

    def test_published_at_set_once(self, api_client, make_post):
        post = make_post(status=PostStatus.DRAFT)
        assert post.published_at is None

        published = api_client.put(f"/blogs/{post.pk}", json={"status": "published"}).json()["data"]
        api_client.put(f"/blogs/{post.pk}", json={"status": "draft"})
        republished = api_client.put(f"/blogs/{post.pk}", json={"status": "published"}).json()["data"]

        assert published["publishedAt"] is not None
        assert republished["publishedAt"] == published["publishedAt"]

    def test_clear_tags_and_seo(self, api_client, make_post):
        post = make_post(tags=["a"], seo={"metaTitle": "T", "metaDescription": "", "keywords": []})

        data = api_client.put(f"/blogs/{post.pk}", json={"tags": [], "seo": None}).json()["data"]

        assert data["tags"] == []
        assert data["seo"] == {"metaTitle": "", "metaDescription": "", "keywords": []}

    def test_author_merges_with_existing(self, api_client, make_post):
        post = make_post()

        data = api_client.put(f"/blogs/{post.pk}", json={"author": {"name": "New Name"}}).json()["data"]

        assert data["author"]["name"] == "New Name"
        assert data["author"]["email"] == "jane@example.com"

    def test_invalid_sections(self, api_client, make_post):
        post = make_post()

        response = api_client.put(f"/blogs/{post.pk}", json={"sections": "not json"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid sections format"

    def test_update_content_recomputes_read_time(self, api_client, make_post):
        post = make_post()

        data = api_client.put(f"/blogs/{post.pk}", json={"content": "word " * 450}).json()["data"]

        assert data["readTime"] == "3 min read"

    def test_multipart_update_with_image(self, api_client, make_post, png_file):
        post = make_post()
        body = encode_multipart(BOUNDARY, {"title": "Form Title", "image": png_file()})

        response = api_client.client.put(f"/api/blogs/{post.pk}", data=body, content_type=MULTIPART_CONTENT)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Form Title"
        assert data["slug"] == "form-title"
        assert data["image"].startswith("/uploads/blog-images/")

    def test_invalid_id(self, api_client):
        response = api_client.put("/blogs/not-an-id", json={"title": "x"})

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid blog id"

    def test_unknown_id(self, api_client):
        response = api_client.put("/blogs/" + "a" * 24, json={"title": "x"})

        assert response.status_code == 404


@pytest.mark.django_db
class TestBlogDeleteAndLike:
    """Delete and like test cases."""

    def test_delete_post_and_comments(self, api_client, make_post, make_comment):
        post = make_post()
        make_comment(post)

        response = api_client.delete(f"/blogs/{post.pk}")

        assert response.status_code == 200
        assert response.json()["message"] == "Blog post deleted successfully"
        assert not Post.objects.filter(pk=post.pk).exists()

    def test_delete_invalid_id(self, api_client):
        response = api_client.delete("/blogs/xyz")

        assert response.status_code == 400

    def test_delete_unknown(self, api_client):
        response = api_client.delete("/blogs/" + "b" * 24)

        assert response.status_code == 404

    def test_like_post(self, api_client, make_post):
        post = make_post()

        api_client.post(f"/blogs/{post.pk}/like")
        response = api_client.post(f"/blogs/{post.pk}/like")

        assert response.status_code == 200
        assert response.json()["data"] == {"likes": 2}

    def test_like_unknown_post(self, api_client):
        response = api_client.post("/blogs/" + "c" * 24 + "/like")

        assert response.status_code == 404


@pytest.mark.django_db
class TestBlogLengthCaps:
    """Field length limits on create and update."""

    def test_content_at_cap_accepted(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "content": "a" * CONTENT_MAX_LENGTH})

        assert response.status_code == 201

    def test_content_over_cap_rejected(self, api_client):
        response = api_client.post("/blogs/", json={**NEW_POST, "content": "a" * (CONTENT_MAX_LENGTH + 1)})

        assert response.status_code == 400
        assert response.json()["message"] == f"Content must be at most {CONTENT_MAX_LENGTH} characters"
        assert Post.objects.count() == 0

    def test_multibyte_content_under_cap_accepted(self, api_client):
        # Each character is escaped to six bytes in the JSON body
        content = "é" * 3_000_000

        response = api_client.post("/blogs/", json={**NEW_POST, "content": content})

        assert response.status_code == 201
        assert len(Post.objects.get().content) == 3_000_000

    def test_multipart_content_over_cap_rejected(self, api_client):
        response = api_client.post_form("/blogs/", {**NEW_POST, "content": "a" * (CONTENT_MAX_LENGTH + 1)})

        assert response.status_code == 400
        assert Post.objects.count() == 0

    def test_excerpt_cap(self, api_client):
        at_cap = api_client.post("/blogs/", json={**NEW_POST, "excerpt": "e" * EXCERPT_MAX_LENGTH})
        over_cap = api_client.post("/blogs/", json={**NEW_POST, "excerpt": "e" * (EXCERPT_MAX_LENGTH + 1)})

        assert at_cap.status_code == 201
        assert over_cap.status_code == 400

    def test_update_content_over_cap_rejected(self, api_client, make_post):
        post = make_post(content="original")

        response = api_client.put(f"/blogs/{post.pk}", json={"content": "a" * (CONTENT_MAX_LENGTH + 1)})

        assert response.status_code == 400
        post.refresh_from_db()
        assert post.content == "original"

    def test_update_excerpt_over_cap_rejected(self, api_client, make_post):
        post = make_post()

        response = api_client.put(f"/blogs/{post.pk}", json={"excerpt": "e" * (EXCERPT_MAX_LENGTH + 1)})

        assert response.status_code == 400

    def test_oversized_body_is_client_error(self, api_client, settings):
        settings.DATA_UPLOAD_MAX_MEMORY_SIZE = 1024

        response = api_client.post("/blogs/", json={**NEW_POST, "content": "a" * 4096})

        assert response.status_code == 413
        assert response.json() == {"success": False, "message": "Request body too large"}


@pytest.mark.django_db
class TestSlugConflicts:
    """Slug allocation failures surface as conflicts."""

    def test_update_losing_slug_race(self, api_client, make_post):
        post = make_post(title="Before")

        with patch("apps.blog.api.save_with_unique_slug", side_effect=IntegrityError("slug taken")):
            response = api_client.put(f"/blogs/{post.pk}", json={"title": "After"})

        assert response.status_code == 409
        post.refresh_from_db()
        assert post.title == "Before"

    def test_create_losing_slug_race(self, api_client):
        with patch("apps.blog.api.save_with_unique_slug", side_effect=IntegrityError("slug taken")):
            response = api_client.post("/blogs/", json=NEW_POST)

        assert response.status_code == 409
