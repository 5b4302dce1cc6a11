from datetime import datetime
from typing import Optional, List

from sqlalchemy import desc
from sqlalchemy.orm import joinedload
from sqlalchemy.exc import IntegrityError
from werkzeug.datastructures import FileStorage

from common.extensions import db
from common.decorator.db_decorators import transactional, transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.utils.file_utils import validate_upload, save_upload, delete_upload, to_absolute_url
from common.utils.logging_utils import get_logger
from app.models.user import User
from app.models.video import Video
from app.models.subscription import Subscription
from app.models.watch_history import WatchHistory
from app.services.channel_service import public_video_counts
from app.services.video_service import summary_dto, comment_counts, to_video_list
from app.dto.user import (
    UserProfileDto, SubscribedChannelDto, SubscriptionItemDto,
    WatchHistoryItemDto, WatchHistoryListDto
)
from app.dto.video import VideoListDto

logger = get_logger('user_service')


def to_profile_dto(user: User, include_email: bool = False) -> UserProfileDto:
    counts = public_video_counts([user.user_id])
    return UserProfileDto(
        user_id=user.user_id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        profile_picture=to_absolute_url(user.profile_picture),
        banner_image=to_absolute_url(user.banner_image),
        description=user.description,
        is_creator=bool(user.is_creator),
        verified=bool(user.verified),
        channel_name=user.channel_name,
        subscriber_count=user.subscriber_count,
        total_views=user.total_views,
        video_count=counts.get(user.user_id, 0),
        created_at=user.created_at,
        email=user.email if include_email else None
    )


class UserService:

    @staticmethod
    @transactional_readonly
    def get_profile(user_id: str, include_email: bool = False) -> UserProfileDto:
        user = db.session.query(User).filter_by(user_id=user_id).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)

        return to_profile_dto(user, include_email)

    @staticmethod
    @transactional
    def update_profile(user_id: str, first_name: Optional[str] = None, last_name: Optional[str] = None,
                       username: Optional[str] = None, description: Optional[str] = None,
                       channel_name: Optional[str] = None,
                       profile_picture: Optional[FileStorage] = None,
                       banner_image: Optional[FileStorage] = None) -> UserProfileDto:
        user = db.session.query(User).filter_by(user_id=user_id).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)

        if username and username != user.username:
            taken = db.session.query(User.user_id).filter(
                User.username == username,
                User.user_id != user_id
            ).first()
            if taken:
                raise BusinessError(APIError.AUTH_DUPLICATE_USERNAME)
            user.username = username

        if first_name:
            user.first_name = first_name
        if last_name:
            user.last_name = last_name
        if description is not None:
            user.description = description

        #NOTE: 채널명은 크리에이터만 변경 가능
        if channel_name and user.is_creator:
            user.channel_name = channel_name

        images = [
            (attr, file) for attr, file in (('profile_picture', profile_picture), ('banner_image', banner_image))
            if file and file.filename
        ]
        for _, file in images:
            validate_upload(file, 'avatars')

        saved_urls = []
        try:
            for attr, file in images:
                url = save_upload(file, 'avatars')
                saved_urls.append(url)
                setattr(user, attr, url)

            db.session.flush()
        except IntegrityError:
            for url in saved_urls:
                delete_upload(url)
            # 동시에 같은 username으로 변경된 경우
            raise BusinessError(APIError.AUTH_DUPLICATE_USERNAME)
        except Exception:
            for url in saved_urls:
                delete_upload(url)
            raise

        logger.info(f"프로필 수정: user_id={user_id}")

        return to_profile_dto(user, include_email=True)

    @staticmethod
    @transactional_readonly
    def get_subscriptions(user_id: str, limit: int = 20, offset: int = 0) -> List[SubscriptionItemDto]:
        subscriptions = db.session.query(Subscription).options(
            joinedload(Subscription.channel)
        ).filter(
            Subscription.user_id == user_id
        ).order_by(desc(Subscription.created_at)).offset(offset).limit(limit).all()

        counts = public_video_counts([s.channel_id for s in subscriptions])

        return [
            SubscriptionItemDto(
                subscription_id=s.subscription_id,
                subscribed_at=s.created_at,
                channel=SubscribedChannelDto(
                    channel_id=s.channel.user_id,
                    name=s.channel.display_name,
                    username=s.channel.username,
                    profile_picture=to_absolute_url(s.channel.profile_picture),
                    verified=bool(s.channel.verified),
                    subscriber_count=s.channel.subscriber_count,
                    video_count=counts.get(s.channel_id, 0)
                )
            )
            for s in subscriptions
        ]

    @staticmethod
    @transactional_readonly
    def get_my_videos(user_id: str, include_private: bool = False,
                      limit: int = 20, offset: int = 0) -> VideoListDto:
        user = db.session.query(User).filter_by(user_id=user_id).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)

        query = db.session.query(Video).filter(Video.user_id == user_id)

        # 비공개 영상은 크리에이터가 요청한 경우에만 포함
        if not (include_private and user.is_creator):
            query = query.filter(Video.is_public.is_(True))

        total = query.count()
        videos = query.options(joinedload(Video.user)).order_by(
            desc(Video.created_at)
        ).offset(offset).limit(limit).all()

        return to_video_list(videos, limit, offset, total)

    @staticmethod
    @transactional_readonly
    def get_watch_history(user_id: str, limit: int = 20, offset: int = 0) -> WatchHistoryListDto:
        base_query = db.session.query(WatchHistory).filter(WatchHistory.user_id == user_id)
        total = base_query.count()

        entries = base_query.options(
            joinedload(WatchHistory.video).joinedload(Video.user)
        ).order_by(desc(WatchHistory.watched_at)).offset(offset).limit(limit).all()

        counts = comment_counts([e.video_id for e in entries])

        return WatchHistoryListDto(
            history=[
                WatchHistoryItemDto(
                    watch_history_id=e.watch_history_id,
                    watched_at=e.watched_at,
                    watch_time=e.watch_time,
                    video=summary_dto(e.video, counts.get(e.video_id, 0))
                )
                for e in entries
            ],
            total=total,
            limit=limit,
            offset=offset,
            has_next=(offset + len(entries)) < total
        )

    @staticmethod
    def add_watch_history(user_id: str, video_id: str, watch_time: int = 0) -> WatchHistoryItemDto:
        try:
            return UserService._upsert_watch_history(user_id, video_id, watch_time)
        except IntegrityError:
            #NOTE: 동시 요청이 먼저 행을 만든 경우 (uk_history_user_video) -> 수정 경로로 재시도
            logger.warning(f"시청 기록 생성 충돌, 재시도: user_id={user_id} video_id={video_id}")
            return UserService._upsert_watch_history(user_id, video_id, watch_time)

    @staticmethod
    @transactional
    def _upsert_watch_history(user_id: str, video_id: str, watch_time: int) -> WatchHistoryItemDto:
        video = db.session.query(Video).filter_by(video_id=video_id).first()
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        entry = db.session.query(WatchHistory).filter_by(
            user_id=user_id,
            video_id=video_id
        ).first()

        now = datetime.utcnow()
        if entry:
            # 재시청: 기존 행 갱신
            entry.watched_at = now
            entry.watch_time = watch_time
        else:
            entry = WatchHistory(
                user_id=user_id,
                video_id=video_id,
                watch_time=watch_time,
                watched_at=now
            )
            db.session.add(entry)

        db.session.flush()

        return WatchHistoryItemDto(
            watch_history_id=entry.watch_history_id,
            watched_at=entry.watched_at,
            watch_time=entry.watch_time,
            video=summary_dto(video, comment_counts([video_id]).get(video_id, 0))
        )
