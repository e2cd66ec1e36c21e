# blog_app/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from datetime import timedelta
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
import firebase_admin
from firebase_admin import credentials, firestore, storage

# - 설정 / 예외
from blog_app.core.config import config_by_name
from blog_app.core.errors import BlogError

# - API 블루프린트
from blog_app.api.posts.routes import posts_bp
from blog_app.api.comments.routes import comments_bp
from blog_app.api.settings.routes import settings_bp

# - 서비스 모듈
from blog_app.services.kv_store import FirestoreKeyValueStore, InMemoryKeyValueStore
from blog_app.services.storage_service import FirebaseObjectStore, InMemoryObjectStore
from blog_app.services.media_service import MediaService
from blog_app.api.posts.services import PostService
from blog_app.api.posts.enrichment import PostEnricher
from blog_app.api.comments.services import CommentService
from blog_app.api.settings.services import QrSettingsService
from blog_app.utils.id_generator import IdGenerator


def _init_firebase(app: Flask):
    """Firebase Admin SDK를 초기화합니다. 프로세스당 한 번만 수행됩니다."""
    if firebase_admin._apps:
        return
    cred_path = app.config.get('FIREBASE_CREDENTIALS_PATH')
    if not cred_path or not os.path.exists(cred_path):
        raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
    if not app.config.get('FIREBASE_STORAGE_BUCKET'):
        raise ValueError("FIREBASE_STORAGE_BUCKET 설정이 .env 또는 설정 파일에 필요합니다.")
    cred = credentials.Certificate(cred_path)
    firebase_admin.initialize_app(cred, {
        'storageBucket': app.config['FIREBASE_STORAGE_BUCKET']
    })


def _build_stores(app: Flask):
    """STORAGE_BACKEND 설정에 따라 키-값 저장소와 오브젝트 저장소를 생성합니다."""
    backend = app.config['STORAGE_BACKEND']
    if backend == 'firebase':
        _init_firebase(app)
        kv_store = FirestoreKeyValueStore(firestore.client(), app.config['KV_COLLECTION'])
        object_store = FirebaseObjectStore(storage.bucket(app.config['FIREBASE_STORAGE_BUCKET']))
        return kv_store, object_store
    if backend == 'memory':
        return InMemoryKeyValueStore(), InMemoryObjectStore(app.config['MEMORY_BUCKET_NAME'])
    raise ValueError(f"지원하지 않는 STORAGE_BACKEND 입니다: {backend}")


def create_app(config_name=None, kv_store=None, object_store=None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'testing' | 'production' (기본값: FLASK_ENV)
    :param kv_store: 주입할 키-값 저장소 (테스트용, 생략 시 설정에 따라 생성)
    :param object_store: 주입할 오브젝트 저장소 (테스트용, 생략 시 설정에 따라 생성)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    # =====================================================================================
    # 4. 저장소 초기화
    # =====================================================================================
    if kv_store is None or object_store is None:
        default_kv, default_objects = _build_stores(app)
        kv_store = default_kv if kv_store is None else kv_store
        object_store = default_objects if object_store is None else object_store

    # 버킷 준비는 요청을 받기 전에 한 번만 수행합니다.
    try:
        object_store.ensure_bucket()
        logging.info("Object storage bucket is ready")
    except Exception as e:
        logging.error(f"Failed to prepare object storage bucket: {e}")
        raise

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}
    id_generator = IdGenerator()

    app.services['kv_store'] = kv_store
    app.services['object_store'] = object_store
    app.services['media'] = MediaService(
        object_store,
        signed_url_ttl=timedelta(days=app.config['SIGNED_URL_EXPIRATION_DAYS'])
    )
    app.services['enricher'] = PostEnricher(app.services['media'])
    app.services['posts'] = PostService(kv_store, app.services['media'], id_generator)
    app.services['comments'] = CommentService(kv_store, id_generator)
    app.services['qr_settings'] = QrSettingsService(kv_store, app.services['media'], id_generator)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    prefix = app.config['API_PREFIX'].rstrip('/')
    app.register_blueprint(posts_bp, url_prefix=f'{prefix}/posts')
    app.register_blueprint(comments_bp, url_prefix=f'{prefix}/posts')
    app.register_blueprint(settings_bp, url_prefix=f'{prefix}/settings')

    @app.route(f'{prefix}/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"}), 200

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(BlogError)
    def handle_blog_error(err):
        if err.status_code >= 500:
            logging.error(f"Storage error: {err}")
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        if isinstance(err, HTTPException):
            return err
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": f"서버 내부에서 예상치 못한 오류가 발생했습니다: {err}"}
        return jsonify(response), 500

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
