from flask import jsonify
from werkzeug.exceptions import HTTPException
from sqlalchemy.exc import IntegrityError, DataError, SQLAlchemyError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('error_handler')


def _fail(message, code, status):
    return jsonify({
        "result": "fail",
        "message": message,
        "code": code,
        "data": None
    }), status


def register_error_handlers(app):
    @app.errorhandler(BusinessError)
    def handle_business_error(e):
        return _fail(e.message, e.code, e.status)

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(e):
        logger.warning(f"무결성 제약 위반: {e.orig}")
        return _fail(
            APIError.DUPLICATE_RESOURCE.message,
            APIError.DUPLICATE_RESOURCE.code,
            APIError.DUPLICATE_RESOURCE.status
        )

    @app.errorhandler(DataError)
    def handle_data_error(e):
        return _fail("올바르지 않은 데이터 형식입니다.", APIError.INVALID_INPUT_VALUE.code, 400)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e):
        logger.error(f"DB 오류: {e}", exc_info=True)
        return _fail(APIError.DB_ERROR.message, APIError.DB_ERROR.code, APIError.DB_ERROR.status)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        #NOTE: flask-smorest 422(스키마 검증 실패) 등은 errors 정보를 함께 내려줌
        body = {
            "result": "fail",
            "message": e.description or e.name,
            "code": APIError.INVALID_INPUT_VALUE.code if e.code in (400, 422) else f"H{e.code}",
            "data": None
        }
        errors = getattr(e, 'data', {}).get('messages')
        if errors:
            body["errors"] = errors
        return jsonify(body), e.code

    @app.errorhandler(Exception)
    def handle_internal_error(e):
        logger.exception(f"처리되지 않은 예외: {e}")
        return _fail(
            APIError.INTERNAL_SERVER_ERROR.message,
            APIError.INTERNAL_SERVER_ERROR.code,
            APIError.INTERNAL_SERVER_ERROR.status
        )
