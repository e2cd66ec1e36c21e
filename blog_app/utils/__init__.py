# blog_app/utils/__init__.py
"""
유틸리티 모듈 패키지

시간 처리와 ID 생성처럼 여러 서비스에서 공통으로 사용하는 도구를 모아둡니다.
"""

from .datetime_utils import DateTimeUtils
from .id_generator import IdGenerator

__all__ = [
    'DateTimeUtils',
    'IdGenerator'
]
