import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class VideoLike(db.Model):
    __tablename__ = 'video_like'

    # Primary Key
    video_like_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='반응 ID (UUID)'
    )

    # Foreign Keys
    video_id = Column(
        String(36),
        ForeignKey('video.video_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='영상 ID (FK)'
    )
    user_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='사용자 ID (FK)'
    )

    # True: 좋아요, False: 싫어요
    is_like = Column(Boolean, nullable=False, comment='반응 종류 (1:좋아요, 0:싫어요)')

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='반응 시간')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='반응 변경 시간'
    )

    # Relationships
    video = relationship('Video', back_populates='video_likes')
    user = relationship('User', back_populates='video_likes')

    # 한 유저당 한 영상에 반응 하나
    __table_args__ = (
        db.UniqueConstraint('user_id', 'video_id', name='uk_like_user_video'),
    )

    def __repr__(self):
        return f'<VideoLike video_id={self.video_id} user_id={self.user_id} is_like={self.is_like}>'
