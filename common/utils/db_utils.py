import time

from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from common.extensions import db
from common.utils.logging_utils import get_logger

logger = get_logger('db_utils')


def connect_with_retry(app, retries=None, delay=None):
    """
    기동 시 DB 연결을 확인. 고정 횟수/고정 간격으로 재시도하고
    모두 실패하면 RuntimeError
    """
    retries = retries if retries is not None else app.config.get('DB_CONNECT_RETRIES', 5)
    delay = delay if delay is not None else app.config.get('DB_CONNECT_RETRY_DELAY', 5)

    attempt = 0
    while attempt < retries:
        attempt += 1
        try:
            with app.app_context():
                db.session.execute(text('SELECT 1'))
                db.session.remove()
            logger.info(f"DB 연결 성공 (시도 {attempt}/{retries})")
            return True
        except OperationalError as e:
            logger.error(f"DB 연결 실패 ({retries - attempt}회 남음): {e}")
            if attempt < retries:
                time.sleep(delay)

    raise RuntimeError(f"DB 연결 실패: {retries}회 시도 후 포기")
