import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class WatchHistory(db.Model):
    __tablename__ = 'watch_history'

    # Primary Key
    watch_history_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='시청 기록 ID (UUID)'
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

    watch_time = Column(Integer, default=0, nullable=False, comment='최근 시청 시간(초)')

    # 재시청 시 갱신
    watched_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='마지막 시청 일시')
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='최초 시청 일시')

    # Relationships
    video = relationship('Video', back_populates='watch_history')
    user = relationship('User', back_populates='watch_history')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'video_id', name='uk_history_user_video'),
        Index('idx_user_history', 'user_id', 'watched_at'),
    )

    def __repr__(self):
        return f'<WatchHistory video_id={self.video_id} user_id={self.user_id}>'
