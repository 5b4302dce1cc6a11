import uuid
from datetime import datetime
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class RefreshToken(db.Model):
    __tablename__ = 'refresh_token'

    refresh_token_id = Column(String(36), primary_key=True, default=generate_uuid, comment='리프레시 토큰 ID (UUID)')

    token = Column(String(512), nullable=False, unique=True, comment='리프레시 토큰 (JWT)')
    user_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='사용자 ID (FK)'
    )
    expires_at = Column(TIMESTAMP, nullable=False, comment='만료 일시')
    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='발급 일시')

    user = relationship('User', back_populates='refresh_tokens')

    __table_args__ = (
        Index('idx_refresh_token_expires', 'expires_at'),
    )

    def __repr__(self):
        return f'<RefreshToken user_id={self.user_id} expires_at={self.expires_at}>'

    @property
    def is_expired(self):
        return self.expires_at <= datetime.utcnow()
