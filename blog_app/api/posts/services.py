# blog_app/api/posts/services.py
import logging
from typing import Optional, List

from blog_app.core.errors import (
    MissingFieldsError, InvalidCategoryError, RequestValidationError
)
from blog_app.models.post import Post, MediaType, POST_CATEGORIES
from blog_app.services.kv_store import KeyValueStore, POST_IDS_KEY, post_key
from blog_app.services.media_service import MediaService
from blog_app.utils.datetime_utils import DateTimeUtils
from blog_app.utils.id_generator import IdGenerator


def _is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


class PostService:
    """
    게시글 애그리거트와 게시글 ID 목록(인덱스)을 관리하는 서비스 클래스.

    쓰기 순서 규칙:
    - 생성: 애그리거트를 먼저 저장한 뒤 인덱스에 추가합니다.
    - 삭제: 미디어/애그리거트를 지운 뒤 마지막에 인덱스에서 제거합니다.
    중간에 실패하더라도 인덱스가 존재하지 않는 애그리거트를 가리키는 상황만 남으며,
    목록 조회는 이런 항목을 조용히 건너뜁니다.
    """

    def __init__(self, kv_store: KeyValueStore, media_service: MediaService, id_generator: Optional[IdGenerator] = None):
        self.kv = kv_store
        self.media = media_service
        self.ids = id_generator or IdGenerator()

    def get_post_ids(self) -> List[str]:
        return self.kv.get(POST_IDS_KEY) or []

    def list_posts(self) -> List[Post]:
        """인덱스 순서(최신순)로 게시글을 반환합니다. 애그리거트가 없는 ID는 제외합니다."""
        post_ids = self.get_post_ids()
        if not post_ids:
            return []

        records = self.kv.mget([post_key(post_id) for post_id in post_ids])
        posts = []
        for post_id, record in zip(post_ids, records):
            if record is None:
                logging.warning(f"인덱스에 남아있는 삭제된 게시글 ID를 건너뜁니다 (post_id: {post_id})")
                continue
            posts.append(Post.from_dict(record))
        return posts

    def get_post(self, post_id: str) -> Optional[Post]:
        record = self.kv.get(post_key(post_id))
        if record is None:
            return None
        return Post.from_dict(record)

    def create_post(self, title: str, content: str, category: str,
                    media_data: Optional[str] = None, media_type: Optional[str] = None) -> Post:
        """새 게시글을 생성합니다. 미디어가 있으면 애그리거트 저장 전에 업로드합니다."""
        if _is_blank(title) or _is_blank(content) or _is_blank(category):
            raise MissingFieldsError("필수 항목이 누락되었습니다 (title, content, category)")
        if category not in POST_CATEGORIES:
            raise InvalidCategoryError(f"유효하지 않은 카테고리입니다: {category}")

        resolved_media_type = None
        if media_data:
            try:
                resolved_media_type = MediaType(media_type)
            except ValueError:
                raise RequestValidationError(f"mediaType은 'image' 또는 'video'여야 합니다: {media_type}")

        post_id = self.ids.next_id(exists=lambda candidate: self.kv.get(post_key(candidate)) is not None)

        media_path = None
        if resolved_media_type is not None:
            media_path = self.media.upload(media_data, MediaService.post_media_path(post_id, resolved_media_type))

        new_post = Post(
            post_id=post_id,
            title=title,
            content=content,
            category=category,
            created_at=DateTimeUtils.now_iso(),
            media_path=media_path,
            media_type=resolved_media_type.value if resolved_media_type else None,
        )

        try:
            self.kv.set(post_key(post_id), new_post.to_record())
        except Exception as e:
            logging.error(f"게시글 저장 실패 (post_id: {post_id}): {e}", exc_info=True)
            # 애그리거트가 저장되지 않았으므로 업로드한 미디어를 정리합니다.
            self.media.remove(media_path)
            raise

        self.kv.update(POST_IDS_KEY, lambda ids: [post_id] + [i for i in (ids or []) if i != post_id])
        logging.info(f"게시글 생성 완료 (post_id: {post_id}, category: {category})")
        return new_post

    def delete_post(self, post_id: str) -> None:
        """게시글을 삭제합니다. 존재하지 않는 게시글이어도 오류가 아닙니다."""
        record = self.kv.get(post_key(post_id))
        if record is not None:
            self.media.remove(record.get('media_path'))
            self.kv.delete(post_key(post_id))

        # 인덱스 제거는 항상 마지막
        self.kv.update(POST_IDS_KEY, lambda ids: [i for i in (ids or []) if i != post_id])
        logging.info(f"게시글 삭제 완료 (post_id: {post_id})")
