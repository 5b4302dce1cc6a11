import json
from datetime import datetime, timedelta
from typing import Optional, List

from sqlalchemy import desc, or_, func, select, literal
from sqlalchemy.orm import joinedload

from common.extensions import db
from common.decorator.db_decorators import transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.enum.video_category import ALL_CATEGORIES
from app.models.user import User
from app.models.video import Video
from app.services.video_service import summary_dto, comment_counts
from app.services.channel_service import public_video_counts, to_channel_dto
from app.dto.search import SearchResultDto

UPLOAD_DATE_WINDOWS = {
    'hour': timedelta(hours=1),
    'today': timedelta(days=1),
    'week': timedelta(days=7),
    'month': timedelta(days=30),
    'year': timedelta(days=365),
}

SEARCH_SORT_ORDERS = {
    # relevance ~ 조회수, 좋아요, 최신순
    'relevance': [desc(Video.view_count), desc(Video.like_count), desc(Video.created_at)],
    'upload_date': [desc(Video.created_at)],
    'view_count': [desc(Video.view_count)],
    'rating': [desc(Video.like_count)],
}

# type=all 일 때 함께 내려주는 채널 수
ALL_TYPE_CHANNEL_LIMIT = 5

SUGGESTION_MIN_LENGTH = 2
SUGGESTION_VIDEO_LIMIT = 5
SUGGESTION_CHANNEL_LIMIT = 3
SUGGESTION_LIMIT = 8


def _contains(column, term):
    return func.lower(column).contains(term.lower(), autoescape=True)


def _has_tag(term):
    """tags JSON 배열에 term이 원소로 정확히 들어있는지 (대소문자 구분)"""
    #NOTE: JSON 포함 연산은 DB마다 달라서 방언별로 분기 (MySQL: JSON_CONTAINS, SQLite: json_each)
    if db.session.get_bind().dialect.name == 'mysql':
        return func.json_contains(Video.tags, json.dumps(term)) == 1

    elements = func.json_each(Video.tags).table_valued('value')
    return select(literal(1)).select_from(elements).where(elements.c.value == term).correlate(Video).exists()


class SearchService:
    """
    단순 필터 쿼리 기반 검색 (토큰화/형태소 분석/역색인 없음)
    """

    @staticmethod
    @transactional_readonly
    def search(query: str, search_type: str = 'video', category: Optional[str] = None,
               upload_date: Optional[str] = None, sort_by: str = 'relevance',
               limit: int = 20, offset: int = 0, now: Optional[datetime] = None) -> SearchResultDto:
        term = (query or '').strip()
        if not term:
            raise BusinessError(APIError.SEARCH_QUERY_REQUIRED)

        result = SearchResultDto(query=term, type=search_type)

        if search_type in ('video', 'all'):
            result.videos = SearchService._search_videos(
                term, category, upload_date, sort_by, limit, offset, now or datetime.utcnow()
            )

        if search_type in ('channel', 'all'):
            if search_type == 'all':
                result.channels = SearchService._search_channels(term, ALL_TYPE_CHANNEL_LIMIT, 0)
            else:
                result.channels = SearchService._search_channels(term, limit, offset)

        result.total_results = len(result.videos or []) + len(result.channels or [])
        return result

    @staticmethod
    def _search_videos(term, category, upload_date, sort_by, limit, offset, now) -> List:
        candidates = db.session.query(Video).filter(Video.is_public.is_(True))

        if category and category != ALL_CATEGORIES:
            candidates = candidates.filter(Video.category == category)

        window = UPLOAD_DATE_WINDOWS.get(upload_date)
        if window:
            candidates = candidates.filter(Video.created_at >= now - window)

        page = candidates.filter(
            or_(_contains(Video.title, term), _contains(Video.description, term), _has_tag(term))
        ).options(joinedload(Video.user)).order_by(
            *SEARCH_SORT_ORDERS.get(sort_by, SEARCH_SORT_ORDERS['relevance'])
        ).offset(offset).limit(limit).all()

        counts = comment_counts([v.video_id for v in page])
        return [summary_dto(v, counts.get(v.video_id, 0)) for v in page]

    @staticmethod
    def _search_channels(term, limit, offset) -> List:
        channels = db.session.query(User).filter(
            User.is_creator.is_(True),
            or_(
                _contains(User.username, term),
                _contains(User.channel_name, term),
                _contains(User.description, term)
            )
        ).order_by(
            desc(User.subscriber_count), desc(User.total_views), desc(User.created_at)
        ).offset(offset).limit(limit).all()

        counts = public_video_counts([c.user_id for c in channels])
        return [to_channel_dto(c, counts.get(c.user_id, 0)) for c in channels]

    @staticmethod
    @transactional_readonly
    def suggestions(query: Optional[str]) -> List[str]:
        term = (query or '').strip()
        if len(term) < SUGGESTION_MIN_LENGTH:
            return []

        titles = db.session.query(Video.title).filter(
            Video.is_public.is_(True),
            _contains(Video.title, term)
        ).order_by(desc(Video.view_count)).limit(SUGGESTION_VIDEO_LIMIT).all()

        channels = db.session.query(User.channel_name, User.username).filter(
            User.is_creator.is_(True),
            or_(_contains(User.username, term), _contains(User.channel_name, term))
        ).order_by(desc(User.subscriber_count)).limit(SUGGESTION_CHANNEL_LIMIT).all()

        suggestions = [row.title for row in titles]
        suggestions += [row.channel_name or row.username for row in channels]
        return suggestions[:SUGGESTION_LIMIT]
