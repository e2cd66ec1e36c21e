# blog_client/__init__.py
"""
블로그 서버를 사용하는 클라이언트 패키지.

- BlogApiClient: HTTP API 호출
- BlogCache: 낙관적 변경과 서버 응답 정리를 담당하는 로컬 캐시
"""

from .api import BlogApiClient, BlogApiError
from .cache import BlogCache
from .models import Post, Comment, Reply

__all__ = [
    'BlogApiClient', 'BlogApiError',
    'BlogCache',
    'Post', 'Comment', 'Reply'
]
