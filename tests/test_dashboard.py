"""Dashboard statistics."""

from datetime import date, timedelta

from app.crud import crud_ai_usage
from app.models.analytics import SiteAnalytics
from app.models.post import PostStatus
from app.api.endpoints.dashboard import percentage_change


def test_percentage_change():
    assert percentage_change(150, 100) == 50.0
    assert percentage_change(50, 100) == -50.0
    assert percentage_change(10, 0) == 0.0
    assert percentage_change(10, None) == 0.0


def test_stats(client, auth_headers, make_post, db):
    make_post("Published A", views=10)
    make_post("Published B", views=30)
    make_post("Draft", status=PostStatus.DRAFT)
    make_post("Later", status=PostStatus.SCHEDULED)

    today = date.today()
    db.add(SiteAnalytics(date=today, total_views=300, total_revenue=20.0))
    db.add(SiteAnalytics(date=today - timedelta(days=1), total_views=200, total_revenue=0.0))
    db.commit()
    crud_ai_usage.log(db, model="fake-model", purpose="post_generation", prompt_tokens=10, completion_tokens=20, cost=0.25)

    response = client.get("/api/dashboard/stats", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()["data"]

    stats = data["stats"]
    assert stats["totalPosts"] == 4
    assert stats["publishedPosts"] == 2
    assert stats["draftPosts"] == 1
    assert stats["scheduledPosts"] == 1
    assert stats["totalViews"] == 40
    assert stats["todayViews"] == 300
    assert stats["viewsChange"] == 50.0
    assert stats["revenueChange"] == 0.0

    assert len(data["recentPosts"]) == 4
    assert [p["title"] for p in data["topPosts"]] == ["Published B", "Published A"]
    assert data["topPosts"][0]["categoryName"] == "Web Development"
    assert data["aiUsage"]["requests"] == 1


def test_stats_without_analytics(client, auth_headers):
    stats = client.get("/api/dashboard/stats", headers=auth_headers).json()["data"]["stats"]
    assert stats["totalPosts"] == 0
    assert stats["todayViews"] == 0
    assert stats["viewsChange"] == 0.0


def test_stats_requires_admin(client):
    assert client.get("/api/dashboard/stats").status_code == 401
