# blog_app/api/settings/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from blog_app.api.settings.schemas import QrImageUploadSchema, QrImageResponseSchema
from blog_app.core.errors import RequestValidationError

settings_bp = Blueprint('settings_bp', __name__)

@settings_bp.route('/qr', methods=['GET'])
def get_qr_image():
    """현재 QR 이미지의 서명 URL을 조회합니다. 설정된 이미지가 없으면 null을 반환합니다."""
    service = current_app.services['qr_settings']
    try:
        url = service.get_qr_url()
        return jsonify(QrImageResponseSchema().dump({"qr_image_url": url})), 200
    except Exception as e:
        logging.error(f"QR 이미지 조회 API 오류: {e}", exc_info=True)
        return jsonify({"error_code": "QR_FETCH_FAILED", "message": f"QR 이미지 조회 중 오류가 발생했습니다: {e}"}), 500

@settings_bp.route('/qr', methods=['POST'])
def upload_qr_image():
    """QR 이미지를 업로드(교체)합니다. 이전 이미지는 삭제됩니다."""
    service = current_app.services['qr_settings']
    try:
        data = QrImageUploadSchema().load(request.get_json(silent=True) or {})
        url = service.set_qr_image(data['image_data'])
        return jsonify(QrImageResponseSchema().dump({"qr_image_url": url})), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except RequestValidationError as e:
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logging.error(f"QR 이미지 업로드 API 오류: {e}", exc_info=True)
        return jsonify({"error_code": "QR_UPLOAD_FAILED", "message": f"QR 이미지 업로드 중 오류가 발생했습니다: {e}"}), 500

@settings_bp.route('/qr', methods=['DELETE'])
def delete_qr_image():
    """QR 이미지를 삭제합니다. 설정된 이미지가 없어도 성공으로 응답합니다."""
    service = current_app.services['qr_settings']
    try:
        service.delete_qr()
        return jsonify({"ok": True}), 200
    except Exception as e:
        logging.error(f"QR 이미지 삭제 API 오류: {e}", exc_info=True)
        return jsonify({"error_code": "QR_DELETION_FAILED", "message": f"QR 이미지 삭제 중 오류가 발생했습니다: {e}"}), 500
