# blog_app/core/errors.py
"""
블로그 저장소 계층에서 사용하는 예외 계층.

각 예외는 HTTP 응답으로 변환될 때 사용할 상태 코드와 에러 코드를 함께 가집니다.
- 입력값 오류(400)와 리소스 없음(404)은 저장소를 변경하기 전에 감지됩니다.
- 저장소 오류(500)는 라우트의 최외곽 핸들러에서 처리됩니다.
"""
from typing import Optional


class BlogError(Exception):
    """모든 도메인 예외의 기반 클래스."""
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
    default_message = "서버 내부에서 예상치 못한 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


# --- 400: 입력값 검증 ---
class RequestValidationError(BlogError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "요청 데이터가 올바르지 않습니다."

class MissingFieldsError(RequestValidationError):
    error_code = "MISSING_FIELDS"
    default_message = "필수 항목이 누락되었습니다."

class MissingContentError(RequestValidationError):
    error_code = "MISSING_CONTENT"
    default_message = "내용을 입력해주세요."

class InvalidCategoryError(RequestValidationError):
    error_code = "INVALID_CATEGORY"
    default_message = "유효하지 않은 카테고리입니다."

class MediaDecodeError(RequestValidationError):
    """data URI(`data:<mime>;base64,<data>`) 형식이 아닌 미디어 페이로드."""
    error_code = "INVALID_PAYLOAD"
    default_message = "올바른 base64 data URI 형식이 아닙니다."


# --- 404: 리소스 없음 ---
class NotFoundError(BlogError):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "리소스를 찾을 수 없습니다."

class PostNotFoundError(NotFoundError):
    error_code = "POST_NOT_FOUND"
    default_message = "게시물을 찾을 수 없습니다."

class CommentNotFoundError(NotFoundError):
    error_code = "COMMENT_NOT_FOUND"
    default_message = "댓글을 찾을 수 없습니다."


# --- 500: 저장소 오류 ---
class StorageError(BlogError):
    """키-값 저장소 또는 오브젝트 저장소 호출 실패."""
    error_code = "STORAGE_ERROR"
    default_message = "저장소 처리 중 오류가 발생했습니다."
