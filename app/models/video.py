import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, BigInteger, Boolean, JSON, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Video(db.Model):
    __tablename__ = 'video'

    video_id = Column(String(36), primary_key=True, default=generate_uuid, comment='영상 고유 ID (UUID)')

    # 업로더 (채널)
    user_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='업로더 ID (FK)'
    )

    title = Column(String(255), nullable=False, comment='영상 제목')
    description = Column(Text, nullable=True, comment='영상 설명')
    thumbnail_url = Column(String(500), nullable=True, comment='썸네일 URL (상대 경로 또는 절대 URL)')
    video_url = Column(String(500), nullable=False, comment='영상 파일 URL (상대 경로 또는 절대 URL)')
    duration = Column(String(20), nullable=True, comment='영상 길이 (자유 형식, 예: 10:24)')
    category = Column(String(50), nullable=False, comment='카테고리 (CategoryEnum 값)')
    tags = Column(JSON, nullable=False, default=list, comment='태그 목록')

    # 비정규화 카운터 (VideoLike / 조회 이벤트와 동기화)
    view_count = Column(BigInteger, default=0, nullable=False, comment='조회수')
    like_count = Column(Integer, default=0, nullable=False, comment='좋아요 수')
    dislike_count = Column(Integer, default=0, nullable=False, comment='싫어요 수')

    is_public = Column(Boolean, default=True, nullable=False, comment='공개 여부')

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='등록일시')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='수정일시'
    )

    user = relationship('User', back_populates='videos')
    comments = relationship(
        'Comment',
        back_populates='video',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    video_likes = relationship(
        'VideoLike',
        back_populates='video',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    watch_history = relationship(
        'WatchHistory',
        back_populates='video',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )

    __table_args__ = (
        Index('idx_video_public_created', 'is_public', 'created_at'),
        Index('idx_video_channel', 'user_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Video {self.title} ({self.video_id})>'

    @property
    def comment_count(self):
        return self.comments.count()
