import uuid
from datetime import datetime
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from common.extensions import db


def generate_uuid():
    return str(uuid.uuid4())


class Subscription(db.Model):
    __tablename__ = 'subscription'

    subscription_id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment='구독 ID (UUID)'
    )

    # 구독자
    user_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='구독자 ID (FK)'
    )
    # 구독 대상 채널
    channel_id = Column(
        String(36),
        ForeignKey('user.user_id', ondelete='CASCADE', onupdate='CASCADE'),
        nullable=False,
        comment='채널(사용자) ID (FK)'
    )

    created_at = Column(TIMESTAMP, default=datetime.utcnow, nullable=False, comment='구독 시작 시간')

    subscriber = relationship('User', foreign_keys=[user_id], back_populates='subscriptions')
    channel = relationship('User', foreign_keys=[channel_id], back_populates='subscribers')

    __table_args__ = (
        db.UniqueConstraint('user_id', 'channel_id', name='uk_subscription_user_channel'),
        CheckConstraint('user_id <> channel_id', name='ck_subscription_not_self'),
        Index('idx_subscription_channel', 'channel_id'),
    )

    def __repr__(self):
        return f'<Subscription user_id={self.user_id} channel_id={self.channel_id}>'
