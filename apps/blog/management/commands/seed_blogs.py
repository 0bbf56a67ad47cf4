"""
Seed the database with sample published blog posts.
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.blog.models import Post, PostCategory, PostStatus, estimate_read_time
from apps.blog.slugs import generate_slug

SAMPLE_POSTS = [
    {
        "title": "The Future of Web Development: Trends to Watch in 2025",
        "excerpt": "Explore the latest trends shaping the future of web development, from AI integration "
        "to new frameworks and tools that are changing how we build applications.",
        "content": (
            "<h2>Web development is evolving at a breathtaking pace</h2>"
            "<p>AI-assisted tooling, WebAssembly, headless architectures and edge computing are "
            "reshaping how teams ship software for the web.</p>"
        ),
        "image": "https://images.pexels.com/photos/270408/pexels-photo-270408.jpeg?auto=compress&cs=tinysrgb&w=800&h=400&dpr=1",
        "author": ("Akash Raikwar", "akash@sosapient.com"),
        "category": PostCategory.TECHNOLOGY,
        "tags": ["Web Development", "AI", "WebAssembly", "JAMstack", "Serverless"],
        "featured": True,
    },
    {
        "title": "Building Scalable Mobile Apps: Best Practices and Strategies",
        "excerpt": "Learn the strategies for building mobile applications that scale with a growing "
        "user base.",
        "content": (
            "<h2>Mobile app scalability is crucial for success</h2>"
            "<p>Pick an architecture that scales per component, index and cache aggressively, and "
            "put static assets behind a CDN.</p>"
        ),
        "image": "https://images.pexels.com/photos/699122/pexels-photo-699122.jpeg?auto=compress&cs=tinysrgb&w=800&h=400&dpr=1",
        "author": ("Sarah Johnson", "sarah@sosapient.com"),
        "category": PostCategory.MOBILE_DEVELOPMENT,
        "tags": ["Mobile", "Scalability", "Architecture"],
        "featured": True,
    },
    {
        "title": "Essential Cybersecurity Practices for Modern Applications",
        "excerpt": "A practical checklist of security measures every application team should adopt.",
        "content": (
            "<h2>Security is an ongoing process</h2>"
            "<p>Use strong authentication, encrypt data in transit and at rest, and run regular "
            "security audits and code reviews.</p>"
        ),
        "image": "https://images.pexels.com/photos/60504/security-protection-anti-virus-software-60504.jpeg?auto=compress&cs=tinysrgb&w=800&h=400&dpr=1",
        "author": ("David Rodriguez", "david@sosapient.com"),
        "category": PostCategory.CYBERSECURITY,
        "tags": ["Security", "Cybersecurity", "Authentication", "Encryption"],
        "featured": False,
    },
]


class Command(BaseCommand):
    help = "Replace all blog posts with sample published posts"

    def add_arguments(self, parser):
        parser.add_argument("--keep", action="store_true", help="Keep existing posts")

    @transaction.atomic
    def handle(self, *args, **options):
        if not options["keep"]:
            deleted, _ = Post.objects.all().delete()
            self.stdout.write(f"Cleared {deleted} existing rows")

        for sample in SAMPLE_POSTS:
            name, email = sample["author"]
            post = Post(
                title=sample["title"],
                slug=generate_slug(sample["title"]),
                excerpt=sample["excerpt"],
                content=sample["content"],
                image=sample["image"],
                category=sample["category"],
                tags=sample["tags"],
                author_name=name,
                author_email=email,
                read_time=estimate_read_time(sample["content"]),
                status=PostStatus.PUBLISHED,
                featured=sample["featured"],
            )
            post.save()

        self.stdout.write(self.style.SUCCESS(f"Inserted {len(SAMPLE_POSTS)} sample blogs"))
