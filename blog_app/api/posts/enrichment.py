# blog_app/api/posts/enrichment.py
from dataclasses import replace
from typing import Iterable, List

from blog_app.models.post import Post
from blog_app.services.media_service import MediaService


class PostEnricher:
    """
    조회 시점에 게시글의 media_path를 서명 URL(media_url)로 변환합니다.
    원본 Post는 변경하지 않으며, 결과는 저장되지 않습니다.
    """

    def __init__(self, media_service: MediaService):
        self.media = media_service

    def enrich(self, post: Post) -> Post:
        media_url = self.media.signed_url(post.media_path) if post.media_path else None
        return replace(post, media_url=media_url)

    def enrich_many(self, posts: Iterable[Post]) -> List[Post]:
        return [self.enrich(post) for post in posts]
