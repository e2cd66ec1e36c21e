# blog_client/cache.py
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Callable, List, Optional, TypeVar

from blog_client.api import BlogApiClient
from blog_client.models import Post

T = TypeVar('T')
PostsUpdate = Callable[[List[Post]], List[Post]]


class BlogCache:
    """
    서버 애그리거트 저장소의 로컬 사본을 보관하는 클라이언트 캐시.

    변경 작업은 두 가지 방식으로 처리됩니다.
    - 확인 후 반영(confirm-then-apply): 게시글/댓글/답글 추가.
      서버가 ID를 발급하므로, 서버 응답을 받은 뒤에만 로컬 상태에 넣습니다.
    - 낙관적 반영 후 정리(optimistic-then-reconcile): 게시글/댓글/답글 삭제.
      요청 전에 로컬에서 먼저 지우고, 실패하면 작업별 정책으로 정리합니다.

    로컬 상태는 항상 새 목록으로 교체되며, 같은 게시글에 대한 동시 변경은
    마지막 반영이 이깁니다.
    """

    def __init__(self, api: BlogApiClient):
        self.api = api
        self.posts: List[Post] = []
        self.loading = True
        self.qr_image_url: Optional[str] = None

    # --- 상태 변경 헬퍼 ---
    def _update_posts(self, update: PostsUpdate) -> None:
        self.posts = update(self.posts)

    def _confirm_then_apply(self, request: Callable[[], T], apply: Callable[[T], PostsUpdate]) -> T:
        """서버 요청이 성공한 경우에만 결과를 로컬 상태에 반영합니다. 실패는 호출자에게 전파됩니다."""
        result = request()
        self._update_posts(apply(result))
        return result

    def _optimistic(self, update: PostsUpdate, request: Callable[[], None],
                    on_failure: Callable[[Exception], None]) -> None:
        """로컬 상태를 먼저 변경한 뒤 요청합니다. 실패하면 on_failure로 정리합니다."""
        self._update_posts(update)
        try:
            request()
        except Exception as e:
            on_failure(e)

    @staticmethod
    def _map_post(post_id: str, fn: Callable[[Post], Post]) -> PostsUpdate:
        return lambda posts: [fn(p) if p.post_id == post_id else p for p in posts]

    @staticmethod
    def _map_comment(post_id: str, comment_id: str, fn) -> PostsUpdate:
        def _apply(post: Post) -> Post:
            return replace(post, comments=[fn(c) if c.comment_id == comment_id else c for c in post.comments])
        return BlogCache._map_post(post_id, _apply)

    # --- 초기 로드 ---
    def load(self) -> None:
        """
        게시글 목록과 QR 이미지를 동시에 조회합니다.
        실패하면 로그만 남기고 빈 목록으로 로딩을 끝냅니다. 자동 재시도는 하지 않습니다.
        """
        try:
            with ThreadPoolExecutor(max_workers=2) as executor:
                posts_future = executor.submit(self.api.fetch_posts)
                qr_future = executor.submit(self.api.fetch_qr_image)
                fetched_posts = posts_future.result()
                qr_url = qr_future.result()
            self.posts = fetched_posts
            self.qr_image_url = qr_url
        except Exception as e:
            logging.error(f"Blog init error: {e}", exc_info=True)
        finally:
            self.loading = False

    # --- 게시글 ---
    def get_post(self, post_id: str) -> Optional[Post]:
        return next((p for p in self.posts if p.post_id == post_id), None)

    def add_post(self, title: str, content: str, category: str,
                 media_data: Optional[str] = None, media_type: Optional[str] = None) -> str:
        """게시글을 생성하고 서버가 반환한 게시글을 목록 맨 앞에 넣습니다. 새 게시글 ID를 반환합니다."""
        new_post = self._confirm_then_apply(
            lambda: self.api.create_post(title, content, category, media_data, media_type),
            lambda created: lambda posts: [created] + posts
        )
        return new_post.post_id

    def delete_post(self, post_id: str) -> None:
        """게시글을 먼저 목록에서 지웁니다. 요청이 실패하면 전체 목록을 다시 불러옵니다."""
        def _resync(err: Exception):
            logging.error(f"deletePost rollback error: {err}")
            try:
                self.posts = self.api.fetch_posts()
            except Exception as e:
                logging.error(f"deletePost resync error: {e}")

        self._optimistic(
            lambda posts: [p for p in posts if p.post_id != post_id],
            lambda: self.api.delete_post(post_id),
            _resync
        )

    def refresh_post(self, post_id: str) -> None:
        """
        게시글 하나를 다시 불러와 로컬 상태를 갱신합니다.
        로컬에 없는 게시글(목록을 거치지 않고 바로 연 경우)은 맨 앞에 추가합니다.
        """
        try:
            fresh = self.api.fetch_post(post_id)
        except Exception as e:
            logging.error(f"refreshPost error: {e}")
            return
        if fresh is None:
            return

        def _apply(posts: List[Post]) -> List[Post]:
            if any(p.post_id == post_id for p in posts):
                return [fresh if p.post_id == post_id else p for p in posts]
            return [fresh] + posts

        self._update_posts(_apply)

    # --- 댓글 ---
    def add_comment(self, post_id: str, author: str, content: str) -> None:
        self._confirm_then_apply(
            lambda: self.api.add_comment(post_id, author, content),
            lambda comment: self._map_post(post_id, lambda p: replace(p, comments=p.comments + [comment]))
        )

    def delete_comment(self, post_id: str, comment_id: str) -> None:
        """댓글을 먼저 지웁니다. 요청이 실패해도 되돌리지 않고 다음 새로고침 때 맞춰집니다."""
        self._optimistic(
            self._map_post(post_id, lambda p: replace(
                p, comments=[c for c in p.comments if c.comment_id != comment_id])),
            lambda: self.api.delete_comment(post_id, comment_id),
            lambda err: logging.error(f"deleteComment error: {err}")
        )

    # --- 답글 ---
    def add_reply(self, post_id: str, comment_id: str, author: str, content: str) -> None:
        self._confirm_then_apply(
            lambda: self.api.add_reply(post_id, comment_id, author, content),
            lambda reply: self._map_comment(post_id, comment_id, lambda c: replace(c, replies=c.replies + [reply]))
        )

    def delete_reply(self, post_id: str, comment_id: str, reply_id: str) -> None:
        self._optimistic(
            self._map_comment(post_id, comment_id, lambda c: replace(
                c, replies=[r for r in c.replies if r.reply_id != reply_id])),
            lambda: self.api.delete_reply(post_id, comment_id, reply_id),
            lambda err: logging.error(f"deleteReply error: {err}")
        )

    # --- QR 이미지 ---
    def set_qr_image(self, data_uri: Optional[str]) -> None:
        """data_uri가 있으면 업로드, None이면 삭제합니다. 실패는 로그만 남깁니다."""
        try:
            if data_uri:
                self.qr_image_url = self.api.upload_qr_image(data_uri)
            else:
                self.api.delete_qr_image()
                self.qr_image_url = None
        except Exception as e:
            logging.error(f"setQrImage error: {e}")
