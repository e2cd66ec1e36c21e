# blog_app/services/kv_store.py
import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import GoogleAPICallError

from blog_app.core.errors import StorageError

# --- 키 레이아웃 ---
POST_IDS_KEY = "blog:post_ids"   # 게시글 ID 목록 (최신순)
QR_PATH_KEY = "blog:qr_path"     # QR 이미지 경로 (단일 값)

def post_key(post_id: str) -> str:
    """게시글 애그리거트(댓글/답글 포함)가 저장되는 키."""
    return f"blog:post:{post_id}"


Mutator = Callable[[Optional[Any]], Any]


class KeyValueStore:
    """
    문자열 키에 JSON 호환 값을 저장하는 키-값 저장소 인터페이스.

    `update`는 하나의 키에 대한 읽기-수정-쓰기를 원자적으로 수행합니다.
    mutator는 현재 값(없으면 None)을 받아 새 값을 반환하며,
    mutator에서 발생한 예외는 쓰기 없이 그대로 전파됩니다.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def mget(self, keys: List[str]) -> List[Optional[Any]]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def update(self, key: str, mutator: Mutator) -> Any:
        raise NotImplementedError


class FirestoreKeyValueStore(KeyValueStore):
    """
    Firestore 컬렉션을 키-값 저장소로 사용합니다.
    문서 ID가 키이고, 값은 문서의 'value' 필드에 저장됩니다.
    """

    def __init__(self, db=None, collection_name: str = 'kv_store'):
        self.db = db or firestore.client()
        self.collection = self.db.collection(collection_name)

    def get(self, key: str) -> Optional[Any]:
        try:
            doc = self.collection.document(key).get()
        except GoogleAPICallError as e:
            logging.error(f"KV 조회 실패 (key: {key}): {e}", exc_info=True)
            raise StorageError(f"KV 조회 실패 (key: {key}): {e}") from e
        if not doc.exists:
            return None
        return doc.to_dict().get('value')

    def mget(self, keys: List[str]) -> List[Optional[Any]]:
        if not keys:
            return []
        refs = [self.collection.document(key) for key in keys]
        try:
            # get_all은 요청 순서를 보장하지 않으므로 문서 ID로 다시 정렬합니다.
            snapshots = {doc.id: doc for doc in self.db.get_all(refs)}
        except GoogleAPICallError as e:
            logging.error(f"KV 다건 조회 실패 ({len(keys)}건): {e}", exc_info=True)
            raise StorageError(f"KV 다건 조회 실패: {e}") from e

        values = []
        for key in keys:
            doc = snapshots.get(key)
            values.append(doc.to_dict().get('value') if doc is not None and doc.exists else None)
        return values

    def set(self, key: str, value: Any) -> None:
        try:
            self.collection.document(key).set({'value': value})
        except GoogleAPICallError as e:
            logging.error(f"KV 저장 실패 (key: {key}): {e}", exc_info=True)
            raise StorageError(f"KV 저장 실패 (key: {key}): {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.collection.document(key).delete()
        except GoogleAPICallError as e:
            logging.error(f"KV 삭제 실패 (key: {key}): {e}", exc_info=True)
            raise StorageError(f"KV 삭제 실패 (key: {key}): {e}") from e

    def update(self, key: str, mutator: Mutator) -> Any:
        doc_ref = self.collection.document(key)
        transaction = self.db.transaction()

        @firestore.transactional
        def _update_in_transaction(transaction):
            snapshot = doc_ref.get(transaction=transaction)
            current = snapshot.to_dict().get('value') if snapshot.exists else None
            new_value = mutator(current)
            transaction.set(doc_ref, {'value': new_value})
            return new_value

        try:
            return _update_in_transaction(transaction)
        except GoogleAPICallError as e:
            logging.error(f"KV 트랜잭션 실패 (key: {key}): {e}", exc_info=True)
            raise StorageError(f"KV 트랜잭션 실패 (key: {key}): {e}") from e


class InMemoryKeyValueStore(KeyValueStore):
    """
    프로세스 메모리에 값을 보관하는 키-값 저장소 (로컬 개발/테스트용).
    직렬화된 저장소와 같게 동작하도록 읽기/쓰기 시 값을 깊은 복사합니다.
    """

    def __init__(self):
        self._data: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return copy.deepcopy(self._data.get(key))

    def mget(self, keys: List[str]) -> List[Optional[Any]]:
        with self._lock:
            return [copy.deepcopy(self._data.get(key)) for key in keys]

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def update(self, key: str, mutator: Mutator) -> Any:
        with self._lock:
            new_value = mutator(copy.deepcopy(self._data.get(key)))
            self._data[key] = copy.deepcopy(new_value)
            return copy.deepcopy(new_value)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._data.keys())
