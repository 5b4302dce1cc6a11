from functools import wraps
from flask import request, g

import common.extensions as extensions
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils import decode_token
from common.utils.jwt_utils import blacklist_key


def _authenticate(auth_header):
    if not auth_header.startswith("Bearer "):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    token = auth_header.split(" ", 1)[1].strip()

    if extensions.redis_client and extensions.redis_client.exists(blacklist_key(token)):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    payload = decode_token(token)

    if payload.get('type') != 'access':
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    g.user_id = payload['sub']
    g.access_token = token
    g.is_guest = False


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            raise BusinessError(APIError.AUTH_INVALID_TOKEN, "액세스 토큰이 필요합니다.")

        _authenticate(auth_header)

        return f(*args, **kwargs)
    return decorated_function


def login_optional(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            g.user_id = None
            g.is_guest = True
            return f(*args, **kwargs)

        _authenticate(auth_header)

        return f(*args, **kwargs)
    return decorated_function


def creator_required(f):
    """login_required 뒤에 붙여서 사용 (g.user_id 필요)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from app.models.user import User

        user = User.query.filter_by(user_id=g.user_id).first()
        if not user:
            raise BusinessError(APIError.AUTH_INVALID_TOKEN, "사용자를 찾을 수 없는 토큰입니다.")
        if not user.is_creator:
            raise BusinessError(APIError.CREATOR_REQUIRED)

        return f(*args, **kwargs)
    return decorated_function


def public_route(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        return f(*args, **kwargs)
    return decorated_function
