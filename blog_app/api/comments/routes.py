# blog_app/api/comments/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from blog_app.api.comments.schemas import CommentCreateSchema
from blog_app.api.posts.schemas import CommentResponseSchema, ReplyResponseSchema
from blog_app.core.errors import RequestValidationError, NotFoundError


comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/<string:post_id>/comments', methods=['POST'])
def create_comment(post_id: str):
    """
    특정 게시글에 새로운 댓글을 작성합니다.
    - 작성자를 비워두면 '익명'으로 저장됩니다.
    - 성공 시, 생성된 댓글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    comment_service = current_app.services['comments']
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        new_comment = comment_service.add_comment(post_id, data['author'], data['content'])
        return jsonify({"comment": CommentResponseSchema().dump(new_comment)}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except (RequestValidationError, NotFoundError) as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"댓글 생성 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify({"error_code": "COMMENT_CREATION_FAILED", "message": f"댓글 생성 중 오류가 발생했습니다: {e}"}), 500


@comments_bp.route('/<string:post_id>/comments/<string:comment_id>', methods=['DELETE'])
def delete_comment(post_id: str, comment_id: str):
    """특정 댓글을 삭제합니다. 이미 삭제된 댓글이어도 성공으로 응답합니다."""
    comment_service = current_app.services['comments']
    try:
        comment_service.delete_comment(post_id, comment_id)
        return jsonify({"ok": True}), 200
    except NotFoundError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"댓글 삭제 중 오류 발생 (post_id: {post_id}, comment_id: {comment_id}): {e}", exc_info=True)
        return jsonify({"error_code": "COMMENT_DELETION_FAILED", "message": f"댓글 삭제 중 오류가 발생했습니다: {e}"}), 500


@comments_bp.route('/<string:post_id>/comments/<string:comment_id>/replies', methods=['POST'])
def create_reply(post_id: str, comment_id: str):
    """
    특정 댓글에 답글을 작성합니다.
    - 작성자를 비워두면 '관리자'로 저장됩니다.
    """
    comment_service = current_app.services['comments']
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        new_reply = comment_service.add_reply(post_id, comment_id, data['author'], data['content'])
        return jsonify({"reply": ReplyResponseSchema().dump(new_reply)}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except (RequestValidationError, NotFoundError) as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"답글 생성 중 오류 발생 (post_id: {post_id}, comment_id: {comment_id}): {e}", exc_info=True)
        return jsonify({"error_code": "REPLY_CREATION_FAILED", "message": f"답글 생성 중 오류가 발생했습니다: {e}"}), 500


@comments_bp.route('/<string:post_id>/comments/<string:comment_id>/replies/<string:reply_id>', methods=['DELETE'])
def delete_reply(post_id: str, comment_id: str, reply_id: str):
    """특정 답글을 삭제합니다. 이미 삭제된 답글이어도 성공으로 응답합니다."""
    comment_service = current_app.services['comments']
    try:
        if not comment_service.delete_reply(post_id, comment_id, reply_id):
            return jsonify({"error_code": "COMMENT_NOT_FOUND", "message": "댓글을 찾을 수 없습니다."}), 404
        return jsonify({"ok": True}), 200
    except NotFoundError as e:
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"답글 삭제 중 오류 발생 (post_id: {post_id}, reply_id: {reply_id}): {e}", exc_info=True)
        return jsonify({"error_code": "REPLY_DELETION_FAILED", "message": f"답글 삭제 중 오류가 발생했습니다: {e}"}), 500
