import json
from typing import Optional, List, Dict

from sqlalchemy import desc, func, or_
from sqlalchemy.orm import joinedload
from werkzeug.datastructures import FileStorage

from common.extensions import db
from common.decorator.db_decorators import transactional, transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.enum.video_category import ALL_CATEGORIES
from common.utils.file_utils import validate_upload, save_upload, delete_upload, to_absolute_url
from common.utils.logging_utils import get_logger
from app.models.user import User
from app.models.video import Video
from app.models.comment import Comment
from app.services.engagement_service import EngagementService
from app.dto.video import VideoChannelDto, VideoSummaryDto, VideoDetailDto, VideoListDto

logger = get_logger('video_service')

RELATED_VIDEO_LIMIT = 10

VIDEO_SORT_ORDERS = {
    'createdAt': [desc(Video.created_at)],
    'views': [desc(Video.view_count)],
    'likes': [desc(Video.like_count)],
}


def parse_tags(raw) -> List[str]:
    """JSON 배열 문자열, 콤마 구분 문자열, 리스트 모두 허용"""
    if not raw:
        return []

    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = raw.split(',')
        if isinstance(parsed, str):
            parsed = [parsed]
        raw = parsed

    if not isinstance(raw, (list, tuple)):
        return []

    return [str(tag).strip() for tag in raw if str(tag).strip()]


def comment_counts(video_ids: List[str]) -> Dict[str, int]:
    if not video_ids:
        return {}

    return dict(
        db.session.query(Comment.video_id, func.count(Comment.comment_id)).filter(
            Comment.video_id.in_(video_ids)
        ).group_by(Comment.video_id).all()
    )


def channel_dto(user: User, detailed: bool = False) -> VideoChannelDto:
    dto = VideoChannelDto(
        channel_id=user.user_id,
        name=user.display_name,
        profile_picture=to_absolute_url(user.profile_picture),
        verified=bool(user.verified),
        subscriber_count=user.subscriber_count
    )
    if detailed:
        dto.banner_image = to_absolute_url(user.banner_image)
        dto.description = user.description
        dto.total_views = user.total_views
        dto.created_at = user.created_at
    return dto


def summary_dto(video: Video, comment_count: int = 0, dto_class=VideoSummaryDto, detailed_channel=False, **extra):
    return dto_class(
        video_id=video.video_id,
        title=video.title,
        description=video.description,
        thumbnail_url=to_absolute_url(video.thumbnail_url),
        video_url=to_absolute_url(video.video_url),
        duration=video.duration,
        category=video.category,
        tags=list(video.tags or []),
        view_count=video.view_count,
        like_count=video.like_count,
        dislike_count=video.dislike_count,
        is_public=bool(video.is_public),
        created_at=video.created_at,
        updated_at=video.updated_at,
        channel=channel_dto(video.user, detailed=detailed_channel),
        comment_count=comment_count,
        **extra
    )


def to_video_list(videos: List[Video], limit: int, offset: int, total: int) -> VideoListDto:
    counts = comment_counts([v.video_id for v in videos])
    return VideoListDto(
        videos=[summary_dto(v, counts.get(v.video_id, 0)) for v in videos],
        limit=limit,
        offset=offset,
        total=total,
        has_next=(offset + len(videos)) < total
    )


class VideoService:

    @staticmethod
    @transactional_readonly
    def list_videos(category: Optional[str] = None, channel_id: Optional[str] = None,
                    sort_by: str = 'createdAt', limit: int = 20, offset: int = 0) -> VideoListDto:
        query = db.session.query(Video).filter(Video.is_public.is_(True))

        if category and category != ALL_CATEGORIES:
            query = query.filter(Video.category == category)

        if channel_id:
            query = query.filter(Video.user_id == channel_id)

        total = query.count()

        videos = query.options(joinedload(Video.user)).order_by(
            *VIDEO_SORT_ORDERS.get(sort_by, VIDEO_SORT_ORDERS['createdAt'])
        ).offset(offset).limit(limit).all()

        return to_video_list(videos, limit, offset, total)

    @staticmethod
    def get_video_detail(video_id: str, viewer_id: Optional[str] = None) -> VideoDetailDto:
        video = VideoService._get_visible_video(video_id, viewer_id)

        # 재생 화면 조회 자체가 조회수 이벤트 (본인 조회 제외)
        EngagementService.record_view(video.video_id, viewer_id)

        return VideoService._build_detail(video_id, viewer_id)

    @staticmethod
    @transactional_readonly
    def _get_visible_video(video_id: str, viewer_id: Optional[str]) -> Video:
        video = db.session.query(Video).filter_by(video_id=video_id).first()
        if not video:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        if not video.is_public and video.user_id != viewer_id:
            raise BusinessError(APIError.VIDEO_PRIVATE)

        return video

    @staticmethod
    @transactional_readonly
    def _build_detail(video_id: str, viewer_id: Optional[str]) -> VideoDetailDto:
        video = db.session.query(Video).options(joinedload(Video.user)).filter_by(video_id=video_id).one()

        return summary_dto(
            video,
            video.comment_count,
            dto_class=VideoDetailDto,
            detailed_channel=True,
            user_reaction=EngagementService.get_reaction_state(viewer_id, video_id),
            is_subscribed=EngagementService.is_subscribed(viewer_id, video.user_id)
        )

    @staticmethod
    @transactional_readonly
    def get_related_videos(video_id: str) -> List[VideoSummaryDto]:
        current = db.session.query(Video.category, Video.user_id).filter_by(video_id=video_id).first()
        if not current:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        videos = db.session.query(Video).options(joinedload(Video.user)).filter(
            Video.video_id != video_id,
            Video.is_public.is_(True),
            or_(
                Video.category == current.category,
                Video.user_id == current.user_id
            )
        ).order_by(desc(Video.view_count)).limit(RELATED_VIDEO_LIMIT).all()

        counts = comment_counts([v.video_id for v in videos])
        return [summary_dto(v, counts.get(v.video_id, 0)) for v in videos]

    @staticmethod
    @transactional
    def upload_video(user_id: str, title: str, description: str, category: str,
                     video_file: Optional[FileStorage], thumbnail_file: Optional[FileStorage] = None,
                     tags=None, is_public: bool = True, duration: Optional[str] = None) -> VideoSummaryDto:
        user = db.session.query(User).filter_by(user_id=user_id).first()
        if not user:
            raise BusinessError(APIError.USER_NOT_FOUND)
        if not user.is_creator:
            raise BusinessError(APIError.CREATOR_REQUIRED)

        if not video_file or not video_file.filename:
            raise BusinessError(APIError.VIDEO_FILE_REQUIRED)

        has_thumbnail = bool(thumbnail_file and thumbnail_file.filename)

        #NOTE: 저장 전에 두 파일 모두 검사, 하나라도 거절되면 디스크에 아무것도 남기지 않음
        validate_upload(video_file, 'videos')
        if has_thumbnail:
            validate_upload(thumbnail_file, 'thumbnails')

        saved_urls = []
        try:
            video_url = save_upload(video_file, 'videos')
            saved_urls.append(video_url)
            thumbnail_url = None
            if has_thumbnail:
                thumbnail_url = save_upload(thumbnail_file, 'thumbnails')
                saved_urls.append(thumbnail_url)

            video = Video(
                user_id=user_id,
                title=title.strip(),
                description=description,
                category=category,
                tags=parse_tags(tags),
                video_url=video_url,
                thumbnail_url=thumbnail_url,
                duration=duration,
                is_public=bool(is_public)
            )
            db.session.add(video)
            db.session.flush()
        except Exception:
            # DB는 transactional이 롤백, 이미 저장된 파일은 여기서 정리
            for url in saved_urls:
                delete_upload(url)
            raise

        logger.info(f"영상 업로드: video_id={video.video_id} user_id={user_id} url={video_url}")

        return summary_dto(video)
