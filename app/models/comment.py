import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Comment(db.Model):
    __tablename__ = 'comment'

    MAX_CONTENT_LENGTH = 1000

    # Primary Key
    comment_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='댓글 ID (UUID)'
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
        comment='작성자 ID (FK)'
    )
    parent_id = Column(
        String(36),
        ForeignKey('comment.comment_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=True,
        comment='부모 댓글 ID (FK, 최상위 댓글이면 NULL)'
    )

    # 댓글 내용
    content = Column(Text, nullable=False, comment='댓글 내용 (최대 1000자)')

    #NOTE: 댓글 좋아요/싫어요는 컬럼만 존재하고 아직 API로 연결되지 않음
    like_count = Column(Integer, default=0, nullable=False, comment='좋아요 수')
    dislike_count = Column(Integer, default=0, nullable=False, comment='싫어요 수')

    # 타임스탬프
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='작성일시')
    updated_at = Column(
        TIMESTAMP,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment='수정일시'
    )

    # Relationships
    video = relationship('Video', back_populates='comments')
    user = relationship('User', back_populates='comments')
    parent = relationship('Comment', remote_side=[comment_id], back_populates='replies')
    replies = relationship(
        'Comment',
        back_populates='parent',
        cascade='all, delete-orphan',
        order_by='Comment.created_at'
    )

    __table_args__ = (
        Index('idx_video_comments', 'video_id', 'parent_id', 'created_at'),
        Index('idx_comment_replies', 'parent_id', 'created_at'),
    )

    def __repr__(self):
        return f'<Comment comment_id={self.comment_id} video_id={self.video_id} parent_id={self.parent_id}>'

    @property
    def is_reply(self):
        return self.parent_id is not None
