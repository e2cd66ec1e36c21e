# blog_app/models/post.py
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, List, Dict, Any

# 게시글에 지정할 수 있는 카테고리 목록 (에디터에서 선택 가능한 값)
AP_SUBCATEGORIES = (
    "AP Physics 1",
    "AP Physics C",
    "AP Chemistry",
    "AP Biology",
    "AP Economics",
)
POST_CATEGORIES = ("공지사항",) + AP_SUBCATEGORIES + ("TOEFL", "SAT")

# 작성자를 비워둔 경우 사용되는 기본 이름
ANONYMOUS_AUTHOR = "익명"   # 댓글
ADMIN_AUTHOR = "관리자"     # 답글


class MediaType(Enum):
    """게시글에 첨부되는 미디어 유형."""
    IMAGE = "image"
    VIDEO = "video"

    @property
    def extension(self) -> str:
        return "mp4" if self is MediaType.VIDEO else "jpg"


@dataclass
class Reply:
    """Comment 내부에 저장되는 답글."""
    reply_id: str
    author: str
    content: str
    created_at: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Reply":
        return cls(
            reply_id=data["reply_id"],
            author=data.get("author") or ADMIN_AUTHOR,
            content=data.get("content", ""),
            created_at=data.get("created_at", ""),
        )


@dataclass
class Comment:
    """Post 내부에 저장되는 댓글. 답글은 작성 순서대로 보관됩니다."""
    comment_id: str
    author: str
    content: str
    created_at: str
    replies: List[Reply] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        return cls(
            comment_id=data["comment_id"],
            author=data.get("author") or ANONYMOUS_AUTHOR,
            content=data.get("content", ""),
            created_at=data.get("created_at", ""),
            replies=[Reply.from_dict(r) for r in data.get("replies") or []],
        )

    def find_reply(self, reply_id: str) -> Optional[Reply]:
        return next((r for r in self.replies if r.reply_id == reply_id), None)


@dataclass
class Post:
    """
    키-값 저장소의 `blog:post:<id>` 키에 통째로 저장되는 게시글 애그리거트.
    댓글과 답글을 모두 포함하며, 항상 하나의 단위로 읽고 씁니다.

    - media_path: 오브젝트 저장소 내부 경로. 클라이언트에 노출하지 않습니다.
    - media_url: 조회 시점에 생성되는 서명 URL. 저장하지 않습니다.
    """
    post_id: str
    title: str
    content: str
    category: str
    created_at: str
    media_path: Optional[str] = None
    media_type: Optional[str] = None
    comments: List[Comment] = field(default_factory=list)
    media_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        return cls(
            post_id=data["post_id"],
            title=data["title"],
            content=data["content"],
            category=data["category"],
            created_at=data["created_at"],
            media_path=data.get("media_path"),
            media_type=data.get("media_type"),
            comments=[Comment.from_dict(c) for c in data.get("comments") or []],
        )

    def to_record(self) -> Dict[str, Any]:
        """저장용 딕셔너리. 일시적인 media_url은 제외합니다."""
        record = asdict(self)
        record.pop("media_url", None)
        return record

    def find_comment(self, comment_id: str) -> Optional[Comment]:
        return next((c for c in self.comments if c.comment_id == comment_id), None)
