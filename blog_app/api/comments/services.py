# blog_app/api/comments/services.py

import logging
from typing import Optional

from blog_app.core.errors import MissingContentError, PostNotFoundError, CommentNotFoundError
from blog_app.models.post import Post, Comment, Reply, ANONYMOUS_AUTHOR, ADMIN_AUTHOR
from blog_app.services.kv_store import KeyValueStore, post_key
from blog_app.utils.datetime_utils import DateTimeUtils
from blog_app.utils.id_generator import IdGenerator


def _clean_author(author: Optional[str], default: str) -> str:
    return (author or "").strip() or default

def _clean_content(content: Optional[str]) -> str:
    if not isinstance(content, str) or not content.strip():
        raise MissingContentError()
    return content.strip()


class CommentService:
    """
    게시글 애그리거트 안의 댓글/답글을 추가·삭제하는 서비스 클래스.
    - 모든 변경은 게시글 키 하나에 대한 트랜잭션(읽기-수정-쓰기)으로 처리합니다.
    - 삭제는 멱등입니다. 이미 없는 댓글/답글을 삭제해도 오류가 아닙니다.
    """
    def __init__(self, kv_store: KeyValueStore, id_generator: Optional[IdGenerator] = None):
        self.kv = kv_store
        self.ids = id_generator or IdGenerator()

    def _mutate_post(self, post_id: str, mutate) -> None:
        """게시글 애그리거트를 읽어 mutate(post)를 적용한 뒤 통째로 다시 씁니다."""
        def _mutator(record):
            if record is None:
                raise PostNotFoundError()
            post = Post.from_dict(record)
            mutate(post)
            return post.to_record()

        self.kv.update(post_key(post_id), _mutator)

    def add_comment(self, post_id: str, author: Optional[str], content: Optional[str]) -> Comment:
        """댓글을 게시글의 댓글 목록 끝에 추가합니다."""
        cleaned_content = _clean_content(content)
        cleaned_author = _clean_author(author, ANONYMOUS_AUTHOR)
        created = {}

        def _append(post: Post):
            existing_ids = {c.comment_id for c in post.comments}
            new_comment = Comment(
                comment_id=self.ids.next_id(exists=existing_ids.__contains__),
                author=cleaned_author,
                content=cleaned_content,
                created_at=DateTimeUtils.now_iso(),
            )
            post.comments.append(new_comment)
            created['comment'] = new_comment

        self._mutate_post(post_id, _append)
        logging.info(f"댓글 작성 완료 (post_id: {post_id}, comment_id: {created['comment'].comment_id})")
        return created['comment']

    def delete_comment(self, post_id: str, comment_id: str) -> None:
        """댓글을 삭제합니다. 댓글이 이미 없으면 아무것도 바뀌지 않습니다."""
        def _remove(post: Post):
            post.comments = [c for c in post.comments if c.comment_id != comment_id]

        self._mutate_post(post_id, _remove)

    def add_reply(self, post_id: str, comment_id: str, author: Optional[str], content: Optional[str]) -> Reply:
        """답글을 댓글의 답글 목록 끝에 추가합니다."""
        cleaned_content = _clean_content(content)
        cleaned_author = _clean_author(author, ADMIN_AUTHOR)
        created = {}

        def _append(post: Post):
            comment = post.find_comment(comment_id)
            if comment is None:
                raise CommentNotFoundError()
            existing_ids = {r.reply_id for r in comment.replies}
            new_reply = Reply(
                reply_id=self.ids.next_id(exists=existing_ids.__contains__),
                author=cleaned_author,
                content=cleaned_content,
                created_at=DateTimeUtils.now_iso(),
            )
            comment.replies.append(new_reply)
            created['reply'] = new_reply

        self._mutate_post(post_id, _append)
        logging.info(f"답글 작성 완료 (post_id: {post_id}, comment_id: {comment_id}, reply_id: {created['reply'].reply_id})")
        return created['reply']

    def delete_reply(self, post_id: str, comment_id: str, reply_id: str) -> bool:
        """
        답글을 삭제합니다. 답글이 이미 없어도 오류가 아닙니다.
        부모 댓글이 없으면 아무것도 바꾸지 않고 False를 반환합니다.
        """
        found = {'comment': False}

        def _remove(post: Post):
            comment = post.find_comment(comment_id)
            if comment is None:
                return
            found['comment'] = True
            comment.replies = [r for r in comment.replies if r.reply_id != reply_id]

        self._mutate_post(post_id, _remove)
        return found['comment']
