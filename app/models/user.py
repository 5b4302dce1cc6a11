import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Boolean, BigInteger, Integer, TIMESTAMP
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class User(db.Model):
    __tablename__ = 'user'

    # Primary Key
    user_id = Column(String(36), primary_key=True, default=generate_uuid, comment='사용자 고유 ID (UUID)')

    # 기본 정보
    email = Column(String(255), nullable=False, unique=True, comment='이메일 (로그인 ID)')
    username = Column(String(50), nullable=False, unique=True, comment='사용자 이름 (고유)')
    password = Column(String(255), nullable=False, comment='bcrypt 해시 비밀번호')
    first_name = Column(String(50), nullable=False, comment='이름')
    last_name = Column(String(50), nullable=False, comment='성')

    # 상태 및 권한
    is_creator = Column(Boolean, default=False, nullable=False, comment='크리에이터 여부 (영상 업로드 가능)')
    verified = Column(Boolean, default=False, nullable=False, comment='인증 채널 여부')

    # 채널 정보
    channel_name = Column(String(100), nullable=True, comment='채널명')
    profile_picture = Column(String(500), nullable=True, comment='프로필 이미지 URL')
    banner_image = Column(String(500), nullable=True, comment='배너 이미지 URL')
    description = Column(Text, nullable=True, comment='채널 설명')

    # 비정규화 카운터 (Subscription / 조회 이벤트와 동기화)
    subscriber_count = Column(Integer, default=0, nullable=False, comment='구독자 수')
    total_views = Column(BigInteger, default=0, nullable=False, comment='채널 전체 조회수')

    # 타임스탬프
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='생성일시')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='수정일시 (자동 갱신)'
    )

    # Relationships
    videos = relationship(
        'Video',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    comments = relationship(
        'Comment',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    video_likes = relationship(
        'VideoLike',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    subscriptions = relationship(
        'Subscription',
        foreign_keys='Subscription.user_id',
        back_populates='subscriber',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    subscribers = relationship(
        'Subscription',
        foreign_keys='Subscription.channel_id',
        back_populates='channel',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    watch_history = relationship(
        'WatchHistory',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    refresh_tokens = relationship(
        'RefreshToken',
        back_populates='user',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )

    def __repr__(self):
        return f'<User {self.username}>'

    @property
    def display_name(self):
        return self.channel_name or self.username

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'
