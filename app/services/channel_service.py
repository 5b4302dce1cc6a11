from typing import Optional, List, Dict

from sqlalchemy import func

from common.extensions import db
from common.decorator.db_decorators import transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.utils.file_utils import to_absolute_url
from app.models.user import User
from app.models.video import Video
from app.services.engagement_service import EngagementService
from app.services.video_service import VideoService
from app.dto.channel import ChannelDto
from app.dto.video import VideoListDto


def public_video_counts(user_ids: List[str]) -> Dict[str, int]:
    if not user_ids:
        return {}

    return dict(
        db.session.query(Video.user_id, func.count(Video.video_id)).filter(
            Video.user_id.in_(user_ids),
            Video.is_public.is_(True)
        ).group_by(Video.user_id).all()
    )


def to_channel_dto(user: User, video_count: int, is_subscribed: bool = False) -> ChannelDto:
    return ChannelDto(
        channel_id=user.user_id,
        name=user.display_name,
        username=user.username,
        profile_picture=to_absolute_url(user.profile_picture),
        banner_image=to_absolute_url(user.banner_image),
        description=user.description,
        verified=bool(user.verified),
        subscriber_count=user.subscriber_count,
        total_views=user.total_views,
        video_count=video_count,
        created_at=user.created_at,
        is_subscribed=is_subscribed
    )


class ChannelService:

    @staticmethod
    @transactional_readonly
    def get_channels(channel_ids: List[str]) -> List[ChannelDto]:
        if not channel_ids:
            raise BusinessError(APIError.INVALID_INPUT_VALUE, "채널 ID 목록이 필요합니다.")

        channels = db.session.query(User).filter(
            User.user_id.in_(channel_ids),
            User.is_creator.is_(True)
        ).all()

        counts = public_video_counts([c.user_id for c in channels])
        return [to_channel_dto(c, counts.get(c.user_id, 0)) for c in channels]

    @staticmethod
    @transactional_readonly
    def get_channel(channel_id: str, viewer_id: Optional[str] = None) -> ChannelDto:
        channel = db.session.query(User).filter_by(user_id=channel_id).first()
        if not channel:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        counts = public_video_counts([channel_id])

        return to_channel_dto(
            channel,
            counts.get(channel_id, 0),
            is_subscribed=EngagementService.is_subscribed(viewer_id, channel_id)
        )

    @staticmethod
    def get_channel_videos(channel_id: str, sort_by: str = 'createdAt',
                           limit: int = 20, offset: int = 0) -> VideoListDto:
        ChannelService._ensure_exists(channel_id)

        return VideoService.list_videos(
            channel_id=channel_id,
            sort_by=sort_by,
            limit=limit,
            offset=offset
        )

    @staticmethod
    @transactional_readonly
    def _ensure_exists(channel_id: str):
        if not db.session.query(User.user_id).filter_by(user_id=channel_id).first():
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)
