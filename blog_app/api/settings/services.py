# blog_app/api/settings/services.py
import logging
from typing import Optional

from blog_app.core.errors import MissingFieldsError
from blog_app.services.kv_store import KeyValueStore, QR_PATH_KEY
from blog_app.services.media_service import MediaService
from blog_app.utils.id_generator import IdGenerator


class QrSettingsService:
    """
    블로그에 표시되는 QR 이미지(단일 레코드)를 관리합니다.
    인덱스 없이 고정 키(blog:qr_path)에 현재 이미지 경로만 저장합니다.
    """

    def __init__(self, kv_store: KeyValueStore, media_service: MediaService, id_generator: Optional[IdGenerator] = None):
        self.kv = kv_store
        self.media = media_service
        self.ids = id_generator or IdGenerator()

    def get_qr_path(self) -> Optional[str]:
        return self.kv.get(QR_PATH_KEY)

    def get_qr_url(self) -> Optional[str]:
        """현재 QR 이미지의 서명 URL을 반환합니다. 설정된 이미지가 없으면 None."""
        return self.media.signed_url(self.get_qr_path())

    def set_qr_image(self, image_data: Optional[str]) -> Optional[str]:
        """
        QR 이미지를 교체하고 새 서명 URL을 반환합니다.
        새 이미지를 업로드하고 키를 갱신한 다음 이전 이미지를 삭제하므로,
        작업이 끝나면 QR 이미지 파일은 하나만 남습니다.
        """
        if not image_data:
            raise MissingFieldsError("imageData는 필수입니다.")

        old_path = self.get_qr_path()
        new_path = self.media.upload(image_data, MediaService.qr_image_path(self.ids.next_id()))
        self.kv.set(QR_PATH_KEY, new_path)

        if old_path and old_path != new_path:
            self.media.remove(old_path)

        logging.info(f"QR 이미지 교체 완료 (path: {new_path})")
        return self.media.signed_url(new_path)

    def delete_qr(self) -> None:
        """QR 이미지를 삭제합니다. 설정된 이미지가 없어도 오류가 아닙니다."""
        qr_path = self.get_qr_path()
        if qr_path:
            self.media.remove(qr_path)
        self.kv.delete(QR_PATH_KEY)
