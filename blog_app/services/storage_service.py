# blog_app/services/storage_service.py
import logging
import threading
from datetime import timedelta
from typing import Dict, Tuple
from urllib.parse import quote

from google.api_core.exceptions import Conflict, GoogleAPICallError, NotFound

from blog_app.core.errors import StorageError
from blog_app.utils.datetime_utils import DateTimeUtils


class ObjectStore:
    """
    미디어 바이너리를 보관하는 오브젝트 저장소 인터페이스.

    - put: 같은 경로에 다시 쓰면 기존 내용을 덮어씁니다.
    - signed_url: 객체가 없으면 FileNotFoundError를 발생시킵니다.
    - remove: 객체가 없어도 오류가 아닙니다.
    """

    def ensure_bucket(self) -> None:
        raise NotImplementedError

    def put(self, path: str, data: bytes, content_type: str) -> None:
        raise NotImplementedError

    def signed_url(self, path: str, expires_in: timedelta) -> str:
        raise NotImplementedError

    def remove(self, path: str) -> None:
        raise NotImplementedError


class FirebaseObjectStore(ObjectStore):
    """
    Firebase Storage(Google Cloud Storage) 버킷을 사용하는 오브젝트 저장소.
    버킷은 비공개로 유지하고, 접근은 서명 URL로만 허용합니다.
    """

    def __init__(self, bucket):
        """
        :param bucket: firebase_admin.storage.bucket()이 반환한 버킷 객체
        """
        self.bucket = bucket

    def ensure_bucket(self) -> None:
        """
        버킷이 없으면 생성합니다. create_app에서 트래픽을 받기 전에 한 번 호출됩니다.
        여러 인스턴스가 동시에 호출해도 결과가 같습니다.
        """
        try:
            if self.bucket.exists():
                return
            self.bucket.create()
            logging.info(f"ObjectStore: 버킷을 생성했습니다 ({self.bucket.name})")
        except Conflict:
            # 다른 인스턴스가 먼저 생성한 경우
            return
        except GoogleAPICallError as e:
            logging.error(f"버킷 준비 실패 ({self.bucket.name}): {e}", exc_info=True)
            raise StorageError(f"버킷 준비 실패: {e}") from e

    def put(self, path: str, data: bytes, content_type: str) -> None:
        blob = self.bucket.blob(path)
        try:
            blob.upload_from_string(data, content_type=content_type)
        except GoogleAPICallError as e:
            logging.error(f"Storage 업로드 실패 (path: {path}): {e}", exc_info=True)
            raise StorageError(f"Storage 업로드 실패 (path: {path}): {e}") from e

    def signed_url(self, path: str, expires_in: timedelta) -> str:
        blob = self.bucket.blob(path)
        if not blob.exists():
            raise FileNotFoundError(f"파일을 찾을 수 없습니다: {path}")

        return blob.generate_signed_url(
            version="v4",
            expiration=expires_in,
            method="GET"
        )

    def remove(self, path: str) -> None:
        try:
            self.bucket.blob(path).delete()
        except NotFound:
            return
        except GoogleAPICallError as e:
            logging.error(f"Storage 삭제 실패 (path: {path}): {e}", exc_info=True)
            raise StorageError(f"Storage 삭제 실패 (path: {path}): {e}") from e


class InMemoryObjectStore(ObjectStore):
    """프로세스 메모리에 객체를 보관하는 오브젝트 저장소 (로컬 개발/테스트용)."""

    def __init__(self, bucket_name: str = 'blog-media'):
        self.bucket_name = bucket_name
        self.bucket_ready = False
        self._objects: Dict[str, Tuple[bytes, str]] = {}
        self._lock = threading.Lock()

    def ensure_bucket(self) -> None:
        self.bucket_ready = True

    def put(self, path: str, data: bytes, content_type: str) -> None:
        with self._lock:
            self._objects[path] = (data, content_type)

    def signed_url(self, path: str, expires_in: timedelta) -> str:
        with self._lock:
            if path not in self._objects:
                raise FileNotFoundError(f"파일을 찾을 수 없습니다: {path}")
        expires_at = DateTimeUtils.to_timestamp_ms(DateTimeUtils.now() + expires_in)
        return f"memory://{self.bucket_name}/{quote(path)}?expires={expires_at}"

    def remove(self, path: str) -> None:
        with self._lock:
            self._objects.pop(path, None)

    def get(self, path: str) -> Tuple[bytes, str]:
        with self._lock:
            return self._objects[path]

    def paths(self):
        with self._lock:
            return sorted(self._objects.keys())
