# blog_app/api/posts/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

# --- 응답용 중첩 스키마 (댓글/답글은 게시글 응답에 포함됨) ---
class ReplyResponseSchema(Schema):
    """답글 정보 응답 스키마."""
    reply_id = fields.Str(data_key="id", required=True)
    author = fields.Str(required=True)
    content = fields.Str(required=True)
    created_at = fields.Str(data_key="createdAt", required=True)

class CommentResponseSchema(Schema):
    """댓글 정보 응답 스키마. 답글은 작성 순서대로 포함됩니다."""
    comment_id = fields.Str(data_key="id", required=True)
    author = fields.Str(required=True)
    content = fields.Str(required=True)
    created_at = fields.Str(data_key="createdAt", required=True)
    replies = fields.List(fields.Nested(ReplyResponseSchema), dump_default=list)

# --- API 요청/응답 스키마 ---

class PostCreateSchema(Schema):
    """
    POST /posts 요청 본문의 형식을 검사합니다.
    필수 항목 누락/공백 여부는 서비스 계층에서 MISSING_FIELDS로 처리합니다.
    """
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(load_default=None, allow_none=True)
    content = fields.Str(load_default=None, allow_none=True)
    category = fields.Str(load_default=None, allow_none=True)
    media_data = fields.Str(data_key="mediaData", load_default=None, allow_none=True)
    media_type = fields.Str(data_key="mediaType", load_default=None, allow_none=True,
                            validate=validate.OneOf(["image", "video"]))

class PostResponseSchema(Schema):
    """
    게시글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    저장소 내부 경로(media_path)는 노출하지 않고, 서명 URL(mediaUrl)만 포함합니다.
    """
    post_id = fields.Str(data_key="id", dump_only=True)
    title = fields.Str(required=True)
    content = fields.Str(required=True)
    category = fields.Str(required=True)
    media_url = fields.Str(data_key="mediaUrl", allow_none=True)
    media_type = fields.Str(data_key="mediaType", allow_none=True)
    created_at = fields.Str(data_key="createdAt", required=True)
    comments = fields.List(fields.Nested(CommentResponseSchema), dump_default=list)
