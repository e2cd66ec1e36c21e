# blog_client/test_cache.py
import pytest

from blog_client.api import BlogApiError
from blog_client.cache import BlogCache
from blog_client.models import Post, Comment, Reply


def _post(post_id, comments=None):
    return Post(post_id=post_id, title=f"t{post_id}", content="c", category="SAT",
                created_at="2024-01-01T00:00:00.000Z", comments=comments or [])

def _comment(comment_id, replies=None):
    return Comment(comment_id=comment_id, author="익명", content="hi",
                   created_at="2024-01-01T00:00:00.000Z", replies=replies or [])

def _reply(reply_id):
    return Reply(reply_id=reply_id, author="관리자", content="r", created_at="2024-01-01T00:00:00.000Z")


class FakeApi:
    """호출을 기록하고, fail에 등록된 작업은 BlogApiError를 발생시키는 가짜 API."""

    def __init__(self, posts=None, qr=None):
        self.posts = posts or []
        self.qr = qr
        self.fail = set()
        self.calls = []

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise BlogApiError(500, f"{name} failed")

    def fetch_posts(self):
        self._call("fetch_posts")
        return list(self.posts)

    def fetch_post(self, post_id):
        self._call("fetch_post", post_id)
        return next((p for p in self.posts if p.post_id == post_id), None)

    def fetch_qr_image(self):
        self._call("fetch_qr_image")
        return self.qr

    def create_post(self, title, content, category, media_data=None, media_type=None):
        self._call("create_post", title)
        return Post(post_id="new", title=title, content=content, category=category, created_at="now")

    def delete_post(self, post_id):
        self._call("delete_post", post_id)

    def add_comment(self, post_id, author, content):
        self._call("add_comment", post_id)
        return Comment(comment_id="c-new", author=author or "익명", content=content, created_at="now")

    def delete_comment(self, post_id, comment_id):
        self._call("delete_comment", post_id, comment_id)

    def add_reply(self, post_id, comment_id, author, content):
        self._call("add_reply", post_id, comment_id)
        return Reply(reply_id="r-new", author=author or "관리자", content=content, created_at="now")

    def delete_reply(self, post_id, comment_id, reply_id):
        self._call("delete_reply", post_id, comment_id, reply_id)

    def upload_qr_image(self, data_uri):
        self._call("upload_qr_image")
        return "https://signed/qr"

    def delete_qr_image(self):
        self._call("delete_qr_image")


@pytest.fixture
def api():
    return FakeApi(posts=[_post("2", [_comment("c1", [_reply("r1")])]), _post("1")], qr="https://signed/old")

@pytest.fixture
def cache(api):
    c = BlogCache(api)
    c.load()
    return c


def test_load(cache):
    assert cache.loading is False
    assert [p.post_id for p in cache.posts] == ["2", "1"]
    assert cache.qr_image_url == "https://signed/old"

def test_load_failure_ends_loading(api):
    api.fail.add("fetch_posts")
    c = BlogCache(api)
    assert c.loading is True

    c.load()

    assert c.loading is False
    assert c.posts == []

def test_get_post(cache):
    assert cache.get_post("1").post_id == "1"
    assert cache.get_post("missing") is None

def test_add_post_prepends_server_result(cache):
    new_id = cache.add_post("new title", "body", "SAT")
    assert new_id == "new"
    assert [p.post_id for p in cache.posts] == ["new", "2", "1"]

def test_add_post_failure_leaves_state(cache, api):
    api.fail.add("create_post")
    with pytest.raises(BlogApiError):
        cache.add_post("t", "c", "SAT")
    assert [p.post_id for p in cache.posts] == ["2", "1"]

def test_delete_post_is_optimistic(cache, api):
    cache.delete_post("2")
    assert [p.post_id for p in cache.posts] == ["1"]
    assert ("delete_post", "2") in api.calls

def test_delete_post_failure_refetches(cache, api):
    api.fail.add("delete_post")
    cache.delete_post("2")

    assert [p.post_id for p in cache.posts] == ["2", "1"]
    assert api.calls[-1] == ("fetch_posts",)

def test_delete_post_failure_and_refetch_failure(cache, api):
    api.fail.update({"delete_post", "fetch_posts"})
    cache.delete_post("2")
    assert [p.post_id for p in cache.posts] == ["1"]

def test_refresh_post_replaces_in_place(cache, api):
    api.posts[1] = _post("1", [_comment("c9")])
    cache.refresh_post("1")
    assert [p.post_id for p in cache.posts] == ["2", "1"]
    assert cache.get_post("1").comments[0].comment_id == "c9"

def test_refresh_post_prepends_unknown(api):
    c = BlogCache(api)
    c.posts = [_post("1")]
    c.refresh_post("2")
    assert [p.post_id for p in c.posts] == ["2", "1"]

def test_refresh_post_missing_or_failing(cache, api):
    before = list(cache.posts)
    cache.refresh_post("missing")
    api.fail.add("fetch_post")
    cache.refresh_post("1")
    assert cache.posts == before

def test_add_comment_applies_after_confirm(cache):
    cache.add_comment("2", "", "hi")
    comments = cache.get_post("2").comments
    assert [c.comment_id for c in comments] == ["c1", "c-new"]
    assert comments[-1].author == "익명"

def test_add_comment_failure_leaves_state(cache, api):
    api.fail.add("add_comment")
    with pytest.raises(BlogApiError):
        cache.add_comment("2", "", "hi")
    assert [c.comment_id for c in cache.get_post("2").comments] == ["c1"]

def test_delete_comment_failure_is_not_rolled_back(cache, api):
    api.fail.add("delete_comment")
    cache.delete_comment("2", "c1")
    assert cache.get_post("2").comments == []

def test_add_and_delete_reply(cache):
    cache.add_reply("2", "c1", "", "thanks")
    replies = cache.get_post("2").comments[0].replies
    assert [r.reply_id for r in replies] == ["r1", "r-new"]
    assert replies[-1].author == "관리자"

    cache.delete_reply("2", "c1", "r1")
    assert [r.reply_id for r in cache.get_post("2").comments[0].replies] == ["r-new"]

def test_delete_reply_failure_is_not_rolled_back(cache, api):
    api.fail.add("delete_reply")
    cache.delete_reply("2", "c1", "r1")
    assert cache.get_post("2").comments[0].replies == []

def test_mutations_replace_post_list(cache):
    before = cache.posts
    cache.delete_comment("2", "c1")
    assert cache.posts is not before
    assert before[0].comments[0].comment_id == "c1"

def test_set_qr_image(cache, api):
    cache.set_qr_image("data:image/png;base64,AAAA")
    assert cache.qr_image_url == "https://signed/qr"

    cache.set_qr_image(None)
    assert cache.qr_image_url is None
    assert api.calls[-1] == ("delete_qr_image",)

def test_set_qr_image_failure_keeps_url(cache, api):
    api.fail.add("upload_qr_image")
    cache.set_qr_image("data:image/png;base64,AAAA")
    assert cache.qr_image_url == "https://signed/old"
