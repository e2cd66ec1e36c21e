# blog_app/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # 모든 API 경로 앞에 붙는 공통 접두사입니다.
    API_PREFIX = os.getenv('API_PREFIX', '/api')

    # 'firebase': Firestore + Firebase Storage 사용, 'memory': 프로세스 메모리 사용 (로컬/테스트)
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'firebase')

    FIREBASE_STORAGE_BUCKET = os.getenv('FIREBASE_STORAGE_BUCKET')
    # 키-값 저장소로 사용할 Firestore 컬렉션 이름입니다.
    KV_COLLECTION = os.getenv('KV_COLLECTION', 'kv_store')

    # 미디어 접근용 서명 URL의 유효 기간(일). 서명 URL은 저장하지 않고 조회 시마다 새로 발급합니다.
    SIGNED_URL_EXPIRATION_DAYS = int(os.getenv('SIGNED_URL_EXPIRATION_DAYS', 7))

    MEMORY_BUCKET_NAME = os.getenv('MEMORY_BUCKET_NAME', 'blog-media')

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH')

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다. 외부 저장소 없이 메모리 어댑터를 사용합니다."""
    TESTING = True
    DEBUG = False
    STORAGE_BACKEND = 'memory'
    FIREBASE_CREDENTIALS_PATH = None

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택하는 데 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
