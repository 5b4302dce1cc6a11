from datetime import datetime

from flask import current_app, send_from_directory
from flask_smorest import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from common.extensions import db
from common.utils.logging_utils import get_logger

logger = get_logger('base')

base_blueprint = Blueprint(
    'base',
    __name__,
    url_prefix='/',
    description='헬스 체크 / 업로드 파일 제공'
)


@base_blueprint.route('health', methods=['GET'])
def health():
    return {
        "status": "ok",
        "service": "vidtube",
        "time": datetime.now().isoformat()
    }


@base_blueprint.route('api/status', methods=['GET'])
def api_status():
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"상태 확인 중 DB 연결 실패: {e}")
        return {
            "status": "error",
            "database": "disconnected",
            "time": datetime.now().isoformat()
        }, 500

    return {
        "status": "ok",
        "database": "connected",
        "version": current_app.config.get('API_VERSION'),
        "time": datetime.now().isoformat()
    }


@base_blueprint.route('uploads/<path:filename>', methods=['GET'])
def uploaded_file(filename):
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename, max_age=86400)
