import datetime
import uuid

import jwt
from flask import current_app
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError


def get_jwt_config():
    try:
        secret_key = current_app.config.get('JWT_SECRET_KEY')
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')
    except RuntimeError:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "Application Context Error")

    if not secret_key:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "JWT KEY가 설정되지 않았습니다.")

    return secret_key, algorithm


def encode_token(user_id, expires_delta, token_type):
    secret_key, algorithm = get_jwt_config()

    current_time = datetime.datetime.now(datetime.timezone.utc)

    payload = {
        "sub": user_id,
        "iat": current_time,
        "exp": current_time + expires_delta,
        "type": token_type,
        #NOTE: 같은 초에 발급된 토큰끼리도 구분되도록 jti 부여
        "jti": uuid.uuid4().hex,
    }

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(encoded_token):
    secret_key, algorithm = get_jwt_config()

    try:
        return jwt.decode(encoded_token, secret_key, algorithms=[algorithm])

    except ExpiredSignatureError:
        raise BusinessError(APIError.AUTH_TOKEN_EXPIRED)

    except InvalidTokenError:
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)


def refresh_token_lifetime():
    return current_app.config.get('JWT_REFRESH_TOKEN_EXPIRES', datetime.timedelta(days=7))


def create_access_token(user_id):
    expires = current_app.config.get('JWT_ACCESS_TOKEN_EXPIRES', datetime.timedelta(minutes=15))
    return encode_token(user_id, expires, 'access')


def create_refresh_token(user_id):
    return encode_token(user_id, refresh_token_lifetime(), 'refresh')


def blacklist_key(token):
    return f"vidtube:blacklist:{token}"
