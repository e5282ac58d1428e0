"""Shared fixtures: in-memory database, authenticated admin, fake AI client."""

from datetime import datetime
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_generator
from app.core.security import create_access_token
from app.crud import crud_category, crud_post, crud_user
from app.database import Base, get_db
from app.main import app
from app.models.post import PostStatus
from app.schemas.post import PostCreate
from app.services.content_generator import ContentGenerator
from app.services.gemini_client import GenerationResult
from app.utils.text import create_slug


class FakeGenerationClient:
    """Stands in for GeminiClient; returns canned text and records prompts."""

    model_name = "fake-model"

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[dict] = []

    async def generate(self, prompt: str, **kwargs) -> GenerationResult:
        self.calls.append({"prompt": prompt, **kwargs})
        if self.error is not None:
            raise self.error
        return GenerationResult(
            text=self.text,
            prompt_tokens=120,
            completion_tokens=480,
            usage_reported=True,
        )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_ai():
    return FakeGenerationClient()


@pytest.fixture
def client(db, fake_ai):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generator] = lambda: ContentGenerator(fake_ai)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(db):
    return crud_user.create_user(
        db,
        email="admin@example.com",
        password="secret123",
        name="Admin User",
        role="admin",
    )


@pytest.fixture
def auth_headers(admin_user):
    token = create_access_token(data={"sub": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def category(db):
    return crud_category.create(db, obj_in={"name": "Web Development", "slug": "web-development"})


@pytest.fixture
def make_post(db, admin_user, category):
    """Factory for posts created directly through the CRUD layer."""

    def _make(
        title: str,
        *,
        status: PostStatus = PostStatus.PUBLISHED,
        content: str = "<p>Some body text for the post.</p>",
        category_id: Optional[int] = None,
        tags: Optional[List[str]] = None,
        views: int = 0,
        published_at: Optional[datetime] = None,
    ):
        post = crud_post.create_post(
            db,
            obj_in=PostCreate(
                title=title,
                content=content,
                category_id=category_id or category.id,
                status=status,
                tags=tags,
            ),
            slug=create_slug(title),
            author_id=admin_user.id,
        )
        if views or published_at:
            post.views = views
            if published_at:
                post.published_at = published_at
            db.commit()
            db.refresh(post)
        return post

    return _make
