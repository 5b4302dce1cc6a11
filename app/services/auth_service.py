import datetime

import bcrypt
from flask import current_app

import common.extensions as extensions
from app.dto.auth import AuthTokenDto, AuthResultDto
from app.dto.user import UserProfileDto
from app.models.user import User
from app.models.refresh_token import RefreshToken
from app.services.user_service import to_profile_dto
from common.decorator.db_decorators import transactional, transactional_readonly
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db
from common.utils import create_access_token, create_refresh_token, decode_token
from common.utils.jwt_utils import refresh_token_lifetime, blacklist_key
from common.utils.logging_utils import get_logger

logger = get_logger('auth_service')

BCRYPT_ROUNDS = 12


def _hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode('utf-8')


def _check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except ValueError:
        # 해시 형식이 잘못 저장된 경우
        return False


def _issue_tokens(user_id: str) -> AuthTokenDto:
    access_token = create_access_token(user_id)
    refresh_token = create_refresh_token(user_id)

    db.session.add(RefreshToken(
        token=refresh_token,
        user_id=user_id,
        expires_at=datetime.datetime.utcnow() + refresh_token_lifetime()
    ))

    return AuthTokenDto(
        access_token=access_token,
        refresh_token=refresh_token
    )


class AuthService:

    @staticmethod
    @transactional
    def register(email: str, username: str, password: str, first_name: str, last_name: str,
                 is_creator: bool = False, channel_name: str = None) -> AuthResultDto:
        if db.session.query(User.user_id).filter_by(email=email).first():
            raise BusinessError(APIError.AUTH_DUPLICATE_EMAIL)
        if db.session.query(User.user_id).filter_by(username=username).first():
            raise BusinessError(APIError.AUTH_DUPLICATE_USERNAME)

        #NOTE: 크리에이터는 채널명이 없으면 "이름 성"을 기본 채널명으로 사용
        if is_creator and not channel_name:
            channel_name = f"{first_name} {last_name}"

        new_user = User(
            email=email,
            username=username,
            password=_hash_password(password),
            first_name=first_name,
            last_name=last_name,
            is_creator=bool(is_creator),
            channel_name=channel_name if is_creator else None,
            profile_picture=current_app.config.get('DEFAULT_AVATAR_URL')
        )
        db.session.add(new_user)
        db.session.flush()

        tokens = _issue_tokens(new_user.user_id)

        logger.info(f"회원가입: user_id={new_user.user_id} is_creator={new_user.is_creator}")

        return AuthResultDto(
            user=to_profile_dto(new_user, include_email=True),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token
        )

    @staticmethod
    @transactional
    def login(email: str, password: str) -> AuthResultDto:
        user = db.session.query(User).filter_by(email=email).first()

        # 이메일 / 비밀번호 중 어느 쪽이 틀렸는지는 구분하지 않음
        if not user or not _check_password(password, user.password):
            raise BusinessError(APIError.AUTH_INVALID_CREDENTIALS)

        tokens = _issue_tokens(user.user_id)

        logger.info(f"로그인: user_id={user.user_id}")

        return AuthResultDto(
            user=to_profile_dto(user, include_email=True),
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token
        )

    @staticmethod
    @transactional
    def logout(user_id: str, access_token: str = None):
        deleted = db.session.query(RefreshToken).filter(
            RefreshToken.user_id == user_id
        ).delete(synchronize_session=False)

        logger.info(f"로그아웃: user_id={user_id} 리프레시 토큰 {deleted}개 삭제")

        if not access_token:
            return

        redis_client = extensions.redis_client
        if redis_client is None:
            logger.warning("Redis 사용 불가, 토큰 블랙리스트 기능 비활성화")
            return

        payload = decode_token(access_token)
        exp_timestamp = payload.get('exp')

        if exp_timestamp:
            current_timestamp = datetime.datetime.now(datetime.timezone.utc).timestamp()
            ttl_seconds = int(exp_timestamp - current_timestamp)

            #NOTE: 만료 시간이 남아있으면 블랙리스트에 추가
            if ttl_seconds > 0:
                redis_client.setex(blacklist_key(access_token), ttl_seconds, "1")

    @staticmethod
    @transactional
    def reissue(refresh_token: str) -> AuthTokenDto:
        payload = decode_token(refresh_token)

        if payload.get('type') != 'refresh':
            raise BusinessError(APIError.AUTH_INVALID_TOKEN)

        stored = db.session.query(RefreshToken).filter_by(token=refresh_token).first()
        if not stored:
            raise BusinessError(APIError.AUTH_INVALID_TOKEN, "등록되지 않은 리프레시 토큰입니다.")

        # 만료된 행은 RefreshTokenCleanupJob이 정리
        if stored.is_expired:
            raise BusinessError(APIError.AUTH_TOKEN_EXPIRED)

        user_id = stored.user_id

        # 기존 토큰은 폐기하고 새로 발급 (rotation)
        db.session.delete(stored)
        tokens = _issue_tokens(user_id)

        logger.info(f"토큰 재발급: user_id={user_id}")

        return tokens

    @staticmethod
    @transactional_readonly
    def get_me(user_id: str) -> UserProfileDto:
        user = db.session.query(User).filter_by(user_id=user_id).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)

        return to_profile_dto(user, include_email=True)
