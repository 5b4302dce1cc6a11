from marshmallow import Schema, fields, validate
from flask_smorest.fields import Upload

from app.schemas.common_schema import PaginationQuerySchema
from common.enum.video_category import CategoryEnum, ALL_CATEGORIES

CATEGORY_VALIDATOR = validate.OneOf(CategoryEnum.values(), error="지원하지 않는 카테고리입니다.")


class VideoChannelSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널(업로더) ID'})
    name = fields.String(metadata={'description': '채널명'})
    profile_picture = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    verified = fields.Boolean(metadata={'description': '인증 채널 여부'})
    subscriber_count = fields.Integer(allow_none=True, metadata={'description': '구독자 수'})
    banner_image = fields.String(allow_none=True, metadata={'description': '배너 이미지 URL (상세 조회)'})
    description = fields.String(allow_none=True, metadata={'description': '채널 설명 (상세 조회)'})
    total_views = fields.Integer(allow_none=True, metadata={'description': '채널 전체 조회수 (상세 조회)'})
    created_at = fields.DateTime(allow_none=True, metadata={'description': '채널 생성일 (상세 조회)'})


class VideoSummarySchema(Schema):
    video_id = fields.String(metadata={'description': '영상 ID (UUID)'})
    title = fields.String(metadata={'description': '영상 제목'})
    description = fields.String(allow_none=True, metadata={'description': '영상 설명'})
    thumbnail_url = fields.String(allow_none=True, metadata={'description': '썸네일 URL'})
    video_url = fields.String(metadata={'description': '영상 파일 URL'})
    duration = fields.String(allow_none=True, metadata={'description': '영상 길이'})
    category = fields.String(metadata={'description': '카테고리'})
    tags = fields.List(fields.String(), metadata={'description': '태그 목록'})
    view_count = fields.Integer(metadata={'description': '조회수'})
    like_count = fields.Integer(metadata={'description': '좋아요 수'})
    dislike_count = fields.Integer(metadata={'description': '싫어요 수'})
    comment_count = fields.Integer(metadata={'description': '댓글 수 (답글 포함)'})
    is_public = fields.Boolean(metadata={'description': '공개 여부'})
    created_at = fields.DateTime(metadata={'description': '업로드 일시'})
    updated_at = fields.DateTime(metadata={'description': '수정 일시'})
    channel = fields.Nested(VideoChannelSchema, metadata={'description': '업로더 채널'})


class VideoDetailSchema(VideoSummarySchema):
    user_reaction = fields.String(allow_none=True, metadata={'description': '내 반응 (like, dislike, null)'})
    is_subscribed = fields.Boolean(metadata={'description': '업로더 채널 구독 여부'})


class VideoListResponseSchema(Schema):
    videos = fields.List(fields.Nested(VideoSummarySchema), metadata={'description': '영상 목록'})
    total = fields.Integer(metadata={'description': '전체 개수'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    offset = fields.Integer(metadata={'description': '건너뛴 개수'})
    has_next = fields.Boolean(metadata={'description': '다음 페이지 존재 여부'})


class RelatedVideoListResponseSchema(Schema):
    videos = fields.List(fields.Nested(VideoSummarySchema), metadata={'description': '관련 영상 (최대 10개)'})


class VideoListQuerySchema(PaginationQuerySchema):
    category = fields.String(
        validate=validate.OneOf(CategoryEnum.values() + [ALL_CATEGORIES], error="지원하지 않는 카테고리입니다."),
        metadata={'description': '카테고리 (All이면 전체)'}
    )
    channel_id = fields.String(metadata={'description': '채널(업로더) ID, 지정 시 해당 채널 영상만'})
    sort_by = fields.String(
        load_default='createdAt',
        validate=validate.OneOf(['createdAt', 'views', 'likes']),
        metadata={'description': '정렬 기준 (createdAt, views, likes)'}
    )


class VideoUploadFormSchema(Schema):
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, max=200),
        metadata={'description': '영상 제목'}
    )
    description = fields.String(required=True, metadata={'description': '영상 설명'})
    category = fields.String(required=True, validate=CATEGORY_VALIDATOR, metadata={'description': '카테고리'})
    tags = fields.String(metadata={'description': '태그 (JSON 배열 문자열 또는 콤마 구분)'})
    is_public = fields.Boolean(load_default=True, metadata={'description': '공개 여부'})
    duration = fields.String(validate=validate.Length(max=20), metadata={'description': '영상 길이 (예: 12:34)'})


class VideoUploadFilesSchema(Schema):
    video = Upload(metadata={'description': '영상 파일'})
    thumbnail = Upload(metadata={'description': '썸네일 이미지'})


class ReactionRequestSchema(Schema):
    is_like = fields.Boolean(required=True, metadata={'description': 'true: 좋아요, false: 싫어요'})


class ReactionResponseSchema(Schema):
    likes = fields.Integer(metadata={'description': '좋아요 수'})
    dislikes = fields.Integer(metadata={'description': '싫어요 수'})
    user_reaction = fields.String(allow_none=True, metadata={'description': '내 반응 (like, dislike, null)'})
