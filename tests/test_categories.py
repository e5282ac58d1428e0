"""Category endpoints."""

from app.crud import crud_category
from app.models.post import PostStatus


def test_create_category_derives_slug(client, auth_headers):
    response = client.post(
        "/api/categories",
        json={"name": "Web Geliştirme", "description": "Modern web", "color": "#10B981"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["slug"] == "web-gelistirme"
    assert data["color"] == "#10B981"
    assert data["isActive"] is True
    assert data["postCount"] == 0


def test_create_category_uses_default_color(client, auth_headers):
    data = client.post("/api/categories", json={"name": "Misc"}, headers=auth_headers).json()["data"]
    assert data["color"] == "#3B82F6"


def test_duplicate_category_slug_is_rejected(client, auth_headers, category):
    response = client.post("/api/categories", json={"name": "Web Development"}, headers=auth_headers)
    assert response.status_code == 400


def test_invalid_color_is_rejected(client, auth_headers):
    response = client.post("/api/categories", json={"name": "Bad", "color": "blue"}, headers=auth_headers)
    assert response.status_code == 400


def test_create_requires_admin(client):
    assert client.post("/api/categories", json={"name": "Open"}).status_code == 401


def test_list_is_public_and_ordered_by_name(client, db):
    crud_category.create(db, obj_in={"name": "Zeta", "slug": "zeta"})
    crud_category.create(db, obj_in={"name": "Alpha", "slug": "alpha"})
    data = client.get("/api/categories").json()["data"]
    assert [c["name"] for c in data] == ["Alpha", "Zeta"]
    assert data[0]["postCount"] is None


def test_list_with_counts(client, make_post, category):
    make_post("One")
    make_post("Two", status=PostStatus.DRAFT)
    data = client.get("/api/categories", params={"includeCount": "true"}).json()["data"]
    assert data[0]["postCount"] == 2


def test_list_active_only(client, db, category):
    crud_category.create(db, obj_in={"name": "Hidden", "slug": "hidden", "is_active": False})
    data = client.get("/api/categories", params={"activeOnly": "true"}).json()["data"]
    assert [c["slug"] for c in data] == [category.slug]


def test_get_category_with_count(client, make_post, category):
    make_post("One")
    data = client.get(f"/api/categories/{category.id}").json()["data"]
    assert data["postCount"] == 1


def test_get_missing_category(client):
    assert client.get("/api/categories/404").status_code == 404


def test_update_category_rederives_slug(client, auth_headers, category):
    response = client.put(f"/api/categories/{category.id}", json={"name": "Frontend"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["data"]["slug"] == "frontend"


def test_update_category_slug_collision(client, auth_headers, db, category):
    other = crud_category.create(db, obj_in={"name": "Backend", "slug": "backend"})
    response = client.put(f"/api/categories/{other.id}", json={"slug": category.slug}, headers=auth_headers)
    assert response.status_code == 400


def test_delete_empty_category(client, auth_headers, db, category):
    response = client.delete(f"/api/categories/{category.id}", headers=auth_headers)
    assert response.status_code == 200
    assert crud_category.get(db, category.id) is None


def test_delete_category_with_posts_is_rejected(client, auth_headers, make_post, db, category):
    make_post("Keeps the category alive")
    response = client.delete(f"/api/categories/{category.id}", headers=auth_headers)

    assert response.status_code == 400
    assert "1 post" in response.json()["error"]
    db.expire_all()
    remaining = crud_category.get(db, category.id)
    assert remaining is not None
    assert remaining.name == "Web Development"


def test_delete_missing_category(client, auth_headers):
    assert client.delete("/api/categories/999", headers=auth_headers).status_code == 404
