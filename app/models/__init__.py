"""
Models package
SQLAlchemy ORM 모델 (모델당 파일 하나)

- User: 사용자 / 채널 정보
- Video: 영상 정보
- VideoLike: 영상 좋아요/싫어요
- Comment: 댓글 (parent_id로 답글 1단계)
- Subscription: 채널 구독
- WatchHistory: 시청 기록 (사용자/영상당 1행)
- RefreshToken: 리프레시 토큰
"""

from common.extensions import db

from app.models.user import User
from app.models.video import Video
from app.models.video_like import VideoLike
from app.models.comment import Comment
from app.models.subscription import Subscription
from app.models.watch_history import WatchHistory
from app.models.refresh_token import RefreshToken

__all__ = [
    # Database instance
    'db',

    # SQLAlchemy Models
    'User',
    'Video',
    'VideoLike',
    'Comment',
    'Subscription',
    'WatchHistory',
    'RefreshToken'
]
