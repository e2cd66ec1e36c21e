# blog_app/utils/id_generator.py
import threading
from typing import Callable, Optional

from blog_app.utils.datetime_utils import DateTimeUtils


class IdGenerator:
    """
    생성 시각(밀리초)을 문자열로 만든 ID를 발급합니다.

    같은 밀리초 안에 여러 ID가 요청되어도 충돌하지 않도록
    프로세스 안에서는 항상 직전 값보다 큰 값을 발급하고,
    `exists` 콜백이 주어지면 이미 사용 중인 값은 건너뜁니다.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or (lambda: DateTimeUtils.to_timestamp_ms(DateTimeUtils.now()))
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self, exists: Optional[Callable[[str], bool]] = None) -> str:
        with self._lock:
            candidate = max(self._clock(), self._last + 1)
            while exists is not None and exists(str(candidate)):
                candidate += 1
            self._last = candidate
            return str(candidate)
