# blog_app/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from blog_app.api.posts.schemas import PostCreateSchema, PostResponseSchema
from blog_app.core.errors import BlogError, RequestValidationError


posts_bp = Blueprint('posts_bp', __name__)

@posts_bp.route('', methods=['GET'])
def get_posts():
    """
    전체 게시글 목록을 최신순으로 조회합니다.
    - 각 게시글의 미디어는 조회 시점에 발급한 서명 URL(mediaUrl)로 제공됩니다.
    """
    post_service = current_app.services['posts']
    enricher = current_app.services['enricher']
    try:
        posts = enricher.enrich_many(post_service.list_posts())
        return jsonify({"posts": PostResponseSchema(many=True).dump(posts)}), 200
    except Exception as e:
        logging.error(f"게시글 목록 조회 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "POSTS_FETCH_FAILED", "message": f"게시글 목록 조회 중 오류가 발생했습니다: {e}"}), 500


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    """특정 게시글의 상세 정보(댓글/답글 포함)를 조회합니다."""
    post_service = current_app.services['posts']
    enricher = current_app.services['enricher']
    try:
        post = post_service.get_post(post_id)
        if not post:
            return jsonify({"error_code": "POST_NOT_FOUND", "message": "게시물을 찾을 수 없습니다."}), 404
        return jsonify({"post": PostResponseSchema().dump(enricher.enrich(post))}), 200
    except Exception as e:
        logging.error(f"게시글 조회 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify({"error_code": "POST_FETCH_FAILED", "message": f"게시글 조회 중 오류가 발생했습니다: {e}"}), 500


@posts_bp.route('', methods=['POST'])
def create_post():
    """
    새로운 게시글을 생성합니다.
    - mediaData(base64 data URI)와 mediaType이 함께 오면 미디어를 먼저 업로드합니다.
    - 성공 시, 생성된 게시글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    post_service = current_app.services['posts']
    enricher = current_app.services['enricher']
    try:
        data = PostCreateSchema().load(request.get_json(silent=True) or {})
        new_post = post_service.create_post(
            data['title'], data['content'], data['category'],
            media_data=data['media_data'], media_type=data['media_type']
        )
        return jsonify({"post": PostResponseSchema().dump(enricher.enrich(new_post))}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except RequestValidationError as e:
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logging.error(f"게시글 생성 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "POST_CREATION_FAILED", "message": f"게시글 생성 중 오류가 발생했습니다: {e}"}), 500


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
def delete_post(post_id: str):
    """
    특정 게시글을 삭제합니다. 첨부 미디어도 함께 삭제됩니다.
    - 이미 없는 게시글이어도 성공으로 응답합니다.
    """
    post_service = current_app.services['posts']
    try:
        post_service.delete_post(post_id)
        return jsonify({"ok": True}), 200
    except BlogError as e:
        logging.error(f"게시글 삭제 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logging.error(f"게시글 삭제 중 오류 발생 (post_id: {post_id}): {e}", exc_info=True)
        return jsonify({"error_code": "POST_DELETION_FAILED", "message": f"게시글 삭제 중 오류가 발생했습니다: {e}"}), 500
