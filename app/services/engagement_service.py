from typing import Optional

from sqlalchemy.exc import IntegrityError

from common.extensions import db
from common.decorator.db_decorators import transactional, transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.utils.logging_utils import get_logger
from app.models.user import User
from app.models.video import Video
from app.models.video_like import VideoLike
from app.models.subscription import Subscription
from app.dto.engagement import ReactionCountDto, SubscriptionStateDto

logger = get_logger('engagement_service')


def _reaction_label(is_like: Optional[bool]) -> Optional[str]:
    if is_like is None:
        return None
    return 'like' if is_like else 'dislike'


def _reaction_counter(is_like: bool):
    return Video.like_count if is_like else Video.dislike_count


class EngagementService:
    """
    좋아요/싫어요, 구독, 조회수 처리

    비정규화 카운터(video.like_count, user.subscriber_count 등)는 항상
    VideoLike/Subscription 행 변경과 같은 트랜잭션 안에서 SQL 레벨 증감으로 갱신한다.
    """

    @staticmethod
    def set_reaction(user_id: str, video_id: str, is_like: bool) -> ReactionCountDto:
        try:
            return EngagementService._apply_reaction(user_id, video_id, is_like)
        except IntegrityError:
            #NOTE: 동시 요청이 먼저 행을 만든 경우 (uk_like_user_video) -> 한 번만 다시 수행하면 수정 경로로 처리됨
            logger.warning(f"반응 생성 충돌, 재시도: user_id={user_id} video_id={video_id}")
            return EngagementService._apply_reaction(user_id, video_id, is_like)

    @staticmethod
    @transactional
    def _apply_reaction(user_id: str, video_id: str, is_like: bool) -> ReactionCountDto:
        video_exists = db.session.query(Video.video_id).filter_by(video_id=video_id).first()
        if not video_exists:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        like = db.session.query(VideoLike).filter_by(
            user_id=user_id,
            video_id=video_id
        ).first()

        if like is None:
            db.session.add(VideoLike(user_id=user_id, video_id=video_id, is_like=is_like))
            db.session.flush()
            deltas = {_reaction_counter(is_like): 1}
            current = is_like
        elif like.is_like == is_like:
            # 같은 반응을 다시 누르면 취소
            db.session.delete(like)
            deltas = {_reaction_counter(is_like): -1}
            current = None
        else:
            previous = like.is_like
            like.is_like = is_like
            deltas = {
                _reaction_counter(previous): -1,
                _reaction_counter(is_like): 1
            }
            current = is_like

        db.session.query(Video).filter(Video.video_id == video_id).update(
            {column: column + delta for column, delta in deltas.items()},
            synchronize_session=False
        )

        likes, dislikes = db.session.query(Video.like_count, Video.dislike_count).filter(
            Video.video_id == video_id
        ).one()

        logger.info(
            f"반응 변경: user_id={user_id} video_id={video_id} "
            f"reaction={_reaction_label(current)} likes={likes} dislikes={dislikes}"
        )

        return ReactionCountDto(
            likes=likes,
            dislikes=dislikes,
            user_reaction=_reaction_label(current)
        )

    @staticmethod
    @transactional_readonly
    def get_reaction_state(user_id: Optional[str], video_id: str) -> Optional[str]:
        if not user_id:
            return None

        is_like = db.session.query(VideoLike.is_like).filter_by(
            user_id=user_id,
            video_id=video_id
        ).scalar()

        return _reaction_label(is_like)

    @staticmethod
    def set_subscription(subscriber_id: str, channel_id: str, subscribe: bool) -> SubscriptionStateDto:
        if subscriber_id == channel_id:
            raise BusinessError(APIError.SUBSCRIBE_SELF)

        try:
            return EngagementService._apply_subscription(subscriber_id, channel_id, subscribe)
        except IntegrityError:
            logger.warning(f"구독 생성 충돌, 재시도: user_id={subscriber_id} channel_id={channel_id}")
            return EngagementService._apply_subscription(subscriber_id, channel_id, subscribe)

    @staticmethod
    @transactional
    def _apply_subscription(subscriber_id: str, channel_id: str, subscribe: bool) -> SubscriptionStateDto:
        channel_exists = db.session.query(User.user_id).filter_by(user_id=channel_id).first()
        if not channel_exists:
            raise BusinessError(APIError.CHANNEL_NOT_FOUND)

        existing = db.session.query(Subscription).filter_by(
            user_id=subscriber_id,
            channel_id=channel_id
        ).first()

        delta = 0
        if subscribe:
            if existing is None:
                db.session.add(Subscription(user_id=subscriber_id, channel_id=channel_id))
                db.session.flush()
                delta = 1
                message = '구독되었습니다.'
            else:
                message = '이미 구독 중입니다.'
        else:
            if existing is not None:
                db.session.delete(existing)
                delta = -1
                message = '구독이 취소되었습니다.'
            else:
                message = '구독 중이 아닙니다.'

        if delta:
            db.session.query(User).filter(User.user_id == channel_id).update(
                {User.subscriber_count: User.subscriber_count + delta},
                synchronize_session=False
            )

        #NOTE: 응답은 요청 값이 아니라 쓰기 후 실제 상태를 다시 읽어서 구성
        is_subscribed = db.session.query(Subscription.subscription_id).filter_by(
            user_id=subscriber_id,
            channel_id=channel_id
        ).first() is not None
        subscriber_count = db.session.query(User.subscriber_count).filter(
            User.user_id == channel_id
        ).scalar()

        logger.info(
            f"구독 변경: user_id={subscriber_id} channel_id={channel_id} "
            f"subscribed={is_subscribed} subscribers={subscriber_count}"
        )

        return SubscriptionStateDto(
            is_subscribed=is_subscribed,
            subscriber_count=subscriber_count,
            message=message
        )

    @staticmethod
    @transactional_readonly
    def is_subscribed(user_id: Optional[str], channel_id: str) -> bool:
        if not user_id:
            return False

        return db.session.query(Subscription.subscription_id).filter_by(
            user_id=user_id,
            channel_id=channel_id
        ).first() is not None

    @staticmethod
    @transactional
    def record_view(video_id: str, viewer_user_id: Optional[str] = None) -> int:
        owner_id = db.session.query(Video.user_id).filter_by(video_id=video_id).scalar()
        if owner_id is None:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        # 본인 영상 조회는 집계하지 않음
        if viewer_user_id is None or viewer_user_id != owner_id:
            db.session.query(Video).filter(Video.video_id == video_id).update(
                {Video.view_count: Video.view_count + 1},
                synchronize_session=False
            )
            db.session.query(User).filter(User.user_id == owner_id).update(
                {User.total_views: User.total_views + 1},
                synchronize_session=False
            )

        return db.session.query(Video.view_count).filter(Video.video_id == video_id).scalar()
