# blog_client/models.py
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


@dataclass
class Reply:
    reply_id: str
    author: str
    content: str
    created_at: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Reply":
        return cls(
            reply_id=data["id"],
            author=data.get("author", ""),
            content=data.get("content", ""),
            created_at=data.get("createdAt", ""),
        )


@dataclass
class Comment:
    comment_id: str
    author: str
    content: str
    created_at: str
    replies: List[Reply] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Comment":
        return cls(
            comment_id=data["id"],
            author=data.get("author", ""),
            content=data.get("content", ""),
            created_at=data.get("createdAt", ""),
            replies=[Reply.from_json(r) for r in data.get("replies") or []],
        )


@dataclass
class Post:
    """
    클라이언트가 보관하는 게시글 사본.
    media_url은 서버가 발급한 시간 제한 URL이므로 영구 식별자로 쓰면 안 됩니다.
    """
    post_id: str
    title: str
    content: str
    category: str
    created_at: str
    media_url: Optional[str] = None
    media_type: Optional[str] = None
    comments: List[Comment] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Post":
        """서버 응답을 정규화합니다. 누락된 목록은 빈 목록, 누락된 미디어 정보는 None이 됩니다."""
        return cls(
            post_id=data["id"],
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=data.get("category", ""),
            created_at=data.get("createdAt", ""),
            media_url=data.get("mediaUrl") or None,
            media_type=data.get("mediaType") or None,
            comments=[Comment.from_json(c) for c in data.get("comments") or []],
        )
