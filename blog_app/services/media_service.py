# blog_app/services/media_service.py
import base64
import binascii
import logging
import re
from datetime import timedelta
from typing import Optional, Tuple

from blog_app.core.errors import MediaDecodeError
from blog_app.models.post import MediaType
from blog_app.services.storage_service import ObjectStore

# data:<mime>;base64,<data> (한 줄만 허용)
DATA_URI_PATTERN = re.compile(r'data:([^;]+);base64,(.+)')


def decode_data_uri(payload: str) -> Tuple[str, bytes]:
    """
    base64 data URI를 (content_type, bytes)로 디코딩합니다.
    데이터 부분의 공백은 무시하고, 끝의 '=' 패딩이 빠져 있으면 채워서 디코딩합니다.
    형식이 맞지 않거나 base64 디코딩에 실패하면 MediaDecodeError를 발생시킵니다.
    """
    if not isinstance(payload, str):
        raise MediaDecodeError()
    match = DATA_URI_PATTERN.fullmatch(payload)
    if not match:
        raise MediaDecodeError()

    content_type = match.group(1)
    encoded = re.sub(r'\s+', '', match.group(2))
    if not encoded:
        raise MediaDecodeError()
    encoded += '=' * (-len(encoded) % 4)
    try:
        return content_type, base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise MediaDecodeError(f"base64 디코딩에 실패했습니다: {e}") from e


class MediaService:
    """
    게시글/QR 미디어의 수명 주기를 담당하는 서비스 클래스.
    - 업로드: data URI 디코딩 후 지정된 경로에 저장 (덮어쓰기 허용)
    - 서명 URL: 조회 시마다 새로 발급하며, 실패해도 None을 반환
    - 삭제: 대상이 없어도 오류가 아님
    """

    def __init__(self, object_store: ObjectStore, signed_url_ttl: timedelta = timedelta(days=7)):
        self.object_store = object_store
        self.signed_url_ttl = signed_url_ttl

    # --- 경로 규칙 ---
    @staticmethod
    def post_media_path(post_id: str, media_type: MediaType) -> str:
        return f"posts/{post_id}/media.{media_type.extension}"

    @staticmethod
    def qr_image_path(timestamp: str) -> str:
        return f"qr/qr-image-{timestamp}.png"

    def upload(self, payload: str, path: str) -> str:
        """data URI 페이로드를 디코딩하여 path에 업로드하고 path를 반환합니다."""
        content_type, data = decode_data_uri(payload)
        self.object_store.put(path, data, content_type)
        logging.info(f"미디어 업로드 완료 (path: {path}, content_type: {content_type}, {len(data)} bytes)")
        return path

    def signed_url(self, path: Optional[str]) -> Optional[str]:
        """
        path에 대한 시간 제한 접근 URL을 발급합니다.
        객체가 없거나 발급에 실패하면 로그만 남기고 None을 반환합니다.
        """
        if not path:
            return None
        try:
            return self.object_store.signed_url(path, self.signed_url_ttl)
        except Exception as e:
            logging.warning(f"서명 URL 발급 실패 (path: {path}): {e}")
            return None

    def remove(self, path: Optional[str]) -> None:
        """미디어를 삭제합니다. 실패해도 호출자의 작업은 계속 진행됩니다."""
        if not path:
            return
        try:
            self.object_store.remove(path)
        except Exception as e:
            logging.error(f"Storage 미디어 삭제 실패 (path: {path}): {e}", exc_info=True)
