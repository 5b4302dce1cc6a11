from marshmallow import Schema, fields, validate

from app.schemas.channel import ChannelSchema
from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.video import VideoSummarySchema
from common.enum.video_category import CategoryEnum, ALL_CATEGORIES


class SearchQuerySchema(PaginationQuerySchema):
    q = fields.String(load_default='', metadata={'description': '검색어 (비어 있으면 400)'})
    type = fields.String(
        load_default='video',
        validate=validate.OneOf(['video', 'channel', 'all']),
        metadata={'description': '검색 대상 (video, channel, all)'}
    )
    category = fields.String(
        validate=validate.OneOf(CategoryEnum.values() + [ALL_CATEGORIES], error="지원하지 않는 카테고리입니다."),
        metadata={'description': '카테고리 필터 (영상 검색)'}
    )
    upload_date = fields.String(
        validate=validate.OneOf(['hour', 'today', 'week', 'month', 'year']),
        metadata={'description': '업로드 기간 필터 (hour, today, week, month, year)'}
    )
    sort_by = fields.String(
        load_default='relevance',
        validate=validate.OneOf(['relevance', 'upload_date', 'view_count', 'rating']),
        metadata={'description': '정렬 기준 (relevance, upload_date, view_count, rating)'}
    )


class SearchResponseSchema(Schema):
    query = fields.String(metadata={'description': '검색어 (공백 제거)'})
    type = fields.String(metadata={'description': '검색 대상'})
    videos = fields.List(fields.Nested(VideoSummarySchema), allow_none=True, metadata={'description': '영상 결과'})
    channels = fields.List(fields.Nested(ChannelSchema), allow_none=True, metadata={'description': '채널 결과'})
    total_results = fields.Integer(metadata={'description': '이번 응답의 결과 수'})


class SuggestionQuerySchema(Schema):
    q = fields.String(load_default='', metadata={'description': '입력 중인 검색어 (2자 이상일 때 제안)'})


class SuggestionResponseSchema(Schema):
    suggestions = fields.List(fields.String(), metadata={'description': '추천 검색어 (최대 8개)'})
