from functools import wraps

from common.extensions import db
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('transaction')


def _rollback(func, error):
    db.session.rollback()

    # BusinessError는 정상적인 거절 응답이므로 debug 레벨
    if isinstance(error, BusinessError):
        logger.debug(f"롤백: {func.__qualname__} ({error.code})")
    else:
        logger.warning(f"롤백: {func.__qualname__} ({type(error).__name__}: {error})")


def transactional(func):
    """성공 시 commit, 예외 시 rollback 후 그대로 전파"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)

            db.session.commit()

            return result

        except Exception as e:
            _rollback(func, e)
            raise

    return wrapper


def transactional_readonly(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except Exception as e:
            _rollback(func, e)
            raise

    return wrapper
