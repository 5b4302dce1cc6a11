"""
VidTube Application
Flask 기반 동영상 공유 REST API
"""

from flask import Flask
from flask_cors import CORS
from sqlalchemy.engine import URL
import redis
import logging
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.integrations.redis import RedisIntegration
from common.extensions import db, api
import common.extensions as extensions
from common.utils.logging_utils import setup_logger, register_access_log


def _init_redis(app, logger):
    if not app.config.get('REDIS_ENABLED'):
        logger.info("Redis 비활성화 설정, 토큰 블랙리스트 없이 동작합니다")
        extensions.redis_client = None
        return

    try:
        if app.config.get('REDIS_URL'):
            logger.info("Redis 연결 시도: REDIS_URL 사용")
            extensions.redis_client = redis.from_url(
                app.config['REDIS_URL'],
                decode_responses=True,
                socket_connect_timeout=5
            )
        else:
            redis_host = app.config.get('REDIS_HOST', 'localhost')
            redis_port = app.config.get('REDIS_PORT', 6379)
            redis_db = app.config.get('REDIS_DB', 0)
            redis_password = app.config.get('REDIS_PASSWORD') or None

            logger.info(f"Redis 연결 시도: {redis_host}:{redis_port} (db={redis_db}, 인증={'설정됨' if redis_password else '없음'})")

            extensions.redis_client = redis.Redis(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                password=redis_password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )

        extensions.redis_client.ping()
        logger.info("Redis 연결 성공")

    except redis.AuthenticationError as e:
        logger.warning(f"Redis 인증 실패: {e}")
        logger.warning("Redis 설정에서 REDIS_PASSWORD를 확인하세요")
        extensions.redis_client = None
    except redis.RedisError as e:
        logger.warning(f"Redis 연결 실패: {e}")
        logger.warning("토큰 블랙리스트 기능이 비활성화됩니다")
        extensions.redis_client = None


def create_app(config_name='default'):
    """
    Application Factory Pattern
    """
    app = Flask(__name__)

    from common.config.config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    app.json.ensure_ascii = False

    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
                RedisIntegration(),
            ],
            environment=app.config.get('SENTRY_ENVIRONMENT', 'development'),
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 1.0),
            send_default_pii=False,
            attach_stacktrace=True,
        )

    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logger = setup_logger(app, log_level, file_logging=not app.config.get('TESTING'))
    register_access_log(app)

    if not app.config.get('TESTING'):
        required = [
            'DB_USERNAME', 'DB_PASSWORD',
            'DB_HOST', 'DB_PORT', 'DB_NAME'
        ]
        missing = [k for k in required if not app.config.get(k)]
        if missing:
            raise RuntimeError(f"DB 환경변수 누락: {missing}")

        app.config['SQLALCHEMY_DATABASE_URI'] = URL.create(
            drivername='mysql+pymysql',
            username=app.config['DB_USERNAME'],
            password=app.config['DB_PASSWORD'],
            host=app.config['DB_HOST'],
            port=app.config['DB_PORT'],
            database=app.config['DB_NAME'],
            query={'charset': 'utf8mb4'},
        )

    db.init_app(app)
    CORS(app,
         supports_credentials=True,
         origins=app.config['CORS_ORIGINS'],
         allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
         expose_headers=["Authorization", "Content-Type"],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         max_age=3600)

    api.init_app(app)

    _init_redis(app, logger)

    from common.utils.db_utils import connect_with_retry
    connect_with_retry(app)

    from common.utils.file_utils import ensure_upload_dirs
    ensure_upload_dirs(app.config['UPLOAD_FOLDER'])

    if app.config.get('SCHEDULER_ENABLED'):
        from common.scheduler import init_scheduler
        init_scheduler(app)

    from app.routes import (
        base_blueprint, auth_blueprint, video_blueprint, comment_blueprint,
        channel_blueprint, user_blueprint, search_blueprint
    )

    api.register_blueprint(base_blueprint)
    api.register_blueprint(auth_blueprint)
    api.register_blueprint(video_blueprint)
    api.register_blueprint(comment_blueprint)
    api.register_blueprint(channel_blueprint)
    api.register_blueprint(user_blueprint)
    api.register_blueprint(search_blueprint)

    from common.exception.error_handler import register_error_handlers
    register_error_handlers(app)

    return app
