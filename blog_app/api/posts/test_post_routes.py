# blog_app/api/posts/test_post_routes.py
from blog_app.core.errors import StorageError
from blog_app.services.kv_store import POST_IDS_KEY


def _create(client, **overrides):
    body = {"title": "A", "content": "B", "category": "SAT"}
    body.update(overrides)
    return client.post('/api/posts', json=body)


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}

def test_create_post_returns_201_with_defaults(client):
    response = _create(client)
    assert response.status_code == 201

    post = response.get_json()["post"]
    assert post["id"]
    assert (post["title"], post["content"], post["category"]) == ("A", "B", "SAT")
    assert post["createdAt"].endswith("Z")
    assert post["comments"] == []
    assert post["mediaUrl"] is None
    assert post["mediaType"] is None
    assert "mediaPath" not in post and "media_path" not in post

def test_create_post_missing_fields(client):
    response = client.post('/api/posts', json={"title": "A"})
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "MISSING_FIELDS"

def test_create_post_invalid_category(client):
    response = _create(client, category="GRE")
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "INVALID_CATEGORY"

def test_create_post_invalid_media_payload(client, services):
    response = _create(client, mediaData="definitely not base64", mediaType="image")
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "INVALID_PAYLOAD"
    assert services['kv_store'].keys() == []
    assert services['object_store'].paths() == []

def test_create_post_rejects_unknown_media_type(client, image_data_uri):
    response = _create(client, mediaData=image_data_uri, mediaType="gif")
    assert response.status_code == 400
    assert response.get_json()["error_code"] == "VALIDATION_ERROR"

def test_create_post_with_media_returns_signed_url(client, services, image_data_uri):
    response = _create(client, mediaData=image_data_uri, mediaType="image")
    post = response.get_json()["post"]

    assert response.status_code == 201
    assert post["mediaType"] == "image"
    assert post["mediaUrl"].startswith("memory://")
    assert services['object_store'].paths() == [f"posts/{post['id']}/media.jpg"]

def test_signed_url_is_regenerated_not_persisted(client, services, image_data_uri):
    post_id = _create(client, mediaData=image_data_uri, mediaType="image").get_json()["post"]["id"]
    record = services['kv_store'].get(f"blog:post:{post_id}")
    assert "media_url" not in record
    assert client.get(f'/api/posts/{post_id}').get_json()["post"]["mediaUrl"].startswith("memory://")

def test_list_posts_newest_first(client):
    first = _create(client, title="first").get_json()["post"]["id"]
    second = _create(client, title="second").get_json()["post"]["id"]

    response = client.get('/api/posts')
    assert response.status_code == 200
    assert [p["id"] for p in response.get_json()["posts"]] == [second, first]

def test_list_posts_tolerates_stale_index(client, services):
    post_id = _create(client).get_json()["post"]["id"]
    services['kv_store'].update(POST_IDS_KEY, lambda ids: ["ghost"] + ids)

    response = client.get('/api/posts')
    assert response.status_code == 200
    assert [p["id"] for p in response.get_json()["posts"]] == [post_id]

def test_get_post_not_found(client):
    response = client.get('/api/posts/unknown')
    assert response.status_code == 404
    assert response.get_json()["error_code"] == "POST_NOT_FOUND"

def test_delete_post(client, services, image_data_uri):
    post_id = _create(client, mediaData=image_data_uri, mediaType="image").get_json()["post"]["id"]

    response = client.delete(f'/api/posts/{post_id}')
    assert response.status_code == 200
    assert response.get_json() == {"ok": True}

    assert client.get(f'/api/posts/{post_id}').status_code == 404
    assert post_id not in [p["id"] for p in client.get('/api/posts').get_json()["posts"]]
    assert services['object_store'].paths() == []

def test_delete_missing_post_is_ok(client):
    assert client.delete('/api/posts/unknown').get_json() == {"ok": True}

def test_store_failure_returns_500_with_detail(client, services, monkeypatch):
    def _broken_get(key):
        raise StorageError("KV 조회 실패: connection reset")

    monkeypatch.setattr(services['kv_store'], 'get', _broken_get)

    response = client.get('/api/posts')
    assert response.status_code == 500
    assert "connection reset" in response.get_json()["message"]

def test_bucket_is_prepared_at_startup(services):
    assert services['object_store'].bucket_ready is True
