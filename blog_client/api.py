# blog_client/api.py
import logging
from typing import Optional, List, Any, Dict

import requests

from blog_client.models import Post, Comment, Reply


class BlogApiError(Exception):
    """서버가 2xx가 아닌 응답을 반환했을 때 발생합니다."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"[{status_code}] {body}")


class BlogApiClient:
    """
    블로그 서버 HTTP API 클라이언트.

    :param base_url: API 접두사까지 포함한 서버 주소 (예: "http://127.0.0.1:5000/api")
    :param session: requests.Session 호환 객체 (생략 시 새로 생성)
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10.0):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None):
        return self.session.request(method, f"{self.base_url}{path}", json=json, timeout=self.timeout)

    def _check(self, response, operation: str):
        if not response.ok:
            logging.error(f"{operation} error: [{response.status_code}] {response.text}")
            raise BlogApiError(response.status_code, response.text)
        return response

    # --- Posts ---
    def fetch_posts(self) -> List[Post]:
        response = self._check(self._request("GET", "/posts"), "fetchPosts")
        return [Post.from_json(p) for p in response.json().get("posts") or []]

    def fetch_post(self, post_id: str) -> Optional[Post]:
        """게시글 하나를 조회합니다. 404이면 None을 반환합니다."""
        response = self._request("GET", f"/posts/{post_id}")
        if response.status_code == 404:
            return None
        self._check(response, "fetchPost")
        return Post.from_json(response.json()["post"])

    def create_post(self, title: str, content: str, category: str,
                    media_data: Optional[str] = None, media_type: Optional[str] = None) -> Post:
        payload = {
            "title": title,
            "content": content,
            "category": category,
            "mediaData": media_data,
            "mediaType": media_type,
        }
        response = self._check(self._request("POST", "/posts", json=payload), "createPost")
        return Post.from_json(response.json()["post"])

    def delete_post(self, post_id: str) -> None:
        self._check(self._request("DELETE", f"/posts/{post_id}"), "deletePost")

    # --- Comments ---
    def add_comment(self, post_id: str, author: str, content: str) -> Comment:
        response = self._check(
            self._request("POST", f"/posts/{post_id}/comments", json={"author": author, "content": content}),
            "addComment"
        )
        return Comment.from_json(response.json()["comment"])

    def delete_comment(self, post_id: str, comment_id: str) -> None:
        self._check(self._request("DELETE", f"/posts/{post_id}/comments/{comment_id}"), "deleteComment")

    # --- Replies ---
    def add_reply(self, post_id: str, comment_id: str, author: str, content: str) -> Reply:
        response = self._check(
            self._request("POST", f"/posts/{post_id}/comments/{comment_id}/replies",
                          json={"author": author, "content": content}),
            "addReply"
        )
        return Reply.from_json(response.json()["reply"])

    def delete_reply(self, post_id: str, comment_id: str, reply_id: str) -> None:
        self._check(
            self._request("DELETE", f"/posts/{post_id}/comments/{comment_id}/replies/{reply_id}"),
            "deleteReply"
        )

    # --- QR Image ---
    def fetch_qr_image(self) -> Optional[str]:
        """QR 이미지 URL을 조회합니다. 실패 응답이면 None을 반환합니다."""
        response = self._request("GET", "/settings/qr")
        if not response.ok:
            return None
        return response.json().get("qrImageUrl") or None

    def upload_qr_image(self, image_data: str) -> Optional[str]:
        response = self._check(self._request("POST", "/settings/qr", json={"imageData": image_data}), "uploadQr")
        return response.json().get("qrImageUrl") or None

    def delete_qr_image(self) -> None:
        """QR 이미지를 삭제합니다. 실패 응답은 로그만 남깁니다."""
        response = self._request("DELETE", "/settings/qr")
        if not response.ok:
            logging.error(f"deleteQr error: [{response.status_code}] {response.text}")
