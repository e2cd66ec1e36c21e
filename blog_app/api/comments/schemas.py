# blog_app/api/comments/schemas.py
from marshmallow import Schema, fields, EXCLUDE

class CommentCreateSchema(Schema):
    """
    POST /posts/{post_id}/comments, POST /posts/{post_id}/comments/{comment_id}/replies
    요청 본문 형식. 작성자를 비워두면 서비스에서 기본 이름이 사용됩니다.
    """
    class Meta:
        unknown = EXCLUDE

    author = fields.Str(load_default="", allow_none=True)
    content = fields.Str(load_default=None, allow_none=True)
