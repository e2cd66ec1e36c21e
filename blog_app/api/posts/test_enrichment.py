# blog_app/api/posts/test_enrichment.py
from blog_app.api.posts.enrichment import PostEnricher
from blog_app.models.post import Post
from blog_app.services.media_service import MediaService
from blog_app.services.storage_service import InMemoryObjectStore


def _post(media_path=None):
    return Post(post_id="1", title="A", content="B", category="SAT",
                created_at="2024-01-15T10:30:00.000Z", media_path=media_path,
                media_type="image" if media_path else None)

def test_enrich_sets_signed_url_without_mutating_original():
    store = InMemoryObjectStore()
    store.put("posts/1/media.jpg", b"img", "image/jpeg")
    enricher = PostEnricher(MediaService(store))
    post = _post("posts/1/media.jpg")

    enriched = enricher.enrich(post)

    assert enriched.media_url.startswith("memory://")
    assert post.media_url is None
    assert "media_url" not in enriched.to_record()

def test_enrich_missing_blob_gives_null_url():
    enricher = PostEnricher(MediaService(InMemoryObjectStore()))
    assert enricher.enrich(_post("posts/1/media.jpg")).media_url is None

def test_enrich_without_media():
    enricher = PostEnricher(MediaService(InMemoryObjectStore()))
    assert enricher.enrich(_post()).media_url is None

def test_enrich_many_keeps_order():
    enricher = PostEnricher(MediaService(InMemoryObjectStore()))
    posts = [_post(), _post()]
    posts[1].post_id = "2"
    assert [p.post_id for p in enricher.enrich_many(posts)] == ["1", "2"]
