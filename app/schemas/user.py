from marshmallow import Schema, fields, validate
from flask_smorest.fields import Upload

from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.video import VideoSummarySchema


class UserProfileSchema(Schema):
    user_id = fields.String(metadata={'description': '사용자 고유 UUID'})
    email = fields.Email(allow_none=True, metadata={'description': '이메일 (본인 조회일 때만)'})
    username = fields.String(metadata={'description': '사용자 이름'})
    first_name = fields.String(metadata={'description': '이름'})
    last_name = fields.String(metadata={'description': '성'})
    full_name = fields.String(metadata={'description': '전체 이름'})
    profile_picture = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    banner_image = fields.String(allow_none=True, metadata={'description': '배너 이미지 URL'})
    description = fields.String(allow_none=True, metadata={'description': '채널 설명'})
    is_creator = fields.Boolean(metadata={'description': '크리에이터 여부'})
    verified = fields.Boolean(metadata={'description': '인증 채널 여부'})
    channel_name = fields.String(allow_none=True, metadata={'description': '채널명'})
    subscriber_count = fields.Integer(metadata={'description': '구독자 수'})
    total_views = fields.Integer(metadata={'description': '채널 전체 조회수'})
    video_count = fields.Integer(metadata={'description': '공개 영상 수'})
    created_at = fields.DateTime(metadata={'description': '가입일'})


class UpdateProfileFormSchema(Schema):
    first_name = fields.String(validate=validate.Length(min=1, max=50), metadata={'description': '이름'})
    last_name = fields.String(validate=validate.Length(min=1, max=50), metadata={'description': '성'})
    username = fields.String(validate=validate.Length(min=3, max=50), metadata={'description': '사용자 이름'})
    description = fields.String(validate=validate.Length(max=5000), metadata={'description': '채널 설명'})
    channel_name = fields.String(
        validate=validate.Length(min=1, max=100),
        metadata={'description': '채널명 (크리에이터만 반영)'}
    )


class UpdateProfileFilesSchema(Schema):
    profile_picture = Upload(metadata={'description': '프로필 이미지 파일'})
    banner_image = Upload(metadata={'description': '배너 이미지 파일'})


class SubscribedChannelSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널(사용자) ID'})
    name = fields.String(metadata={'description': '채널명'})
    username = fields.String(metadata={'description': '사용자 이름'})
    profile_picture = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    verified = fields.Boolean(metadata={'description': '인증 채널 여부'})
    subscriber_count = fields.Integer(metadata={'description': '구독자 수'})
    video_count = fields.Integer(metadata={'description': '공개 영상 수'})


class SubscriptionItemSchema(Schema):
    subscription_id = fields.String(metadata={'description': '구독 ID'})
    subscribed_at = fields.DateTime(metadata={'description': '구독 일시'})
    channel = fields.Nested(SubscribedChannelSchema, metadata={'description': '구독한 채널'})


class SubscriptionListResponseSchema(Schema):
    subscriptions = fields.List(fields.Nested(SubscriptionItemSchema), metadata={'description': '구독 목록'})


class MyVideosQuerySchema(PaginationQuerySchema):
    include_private = fields.Boolean(
        load_default=False,
        metadata={'description': '비공개 영상 포함 여부 (크리에이터만 반영)'}
    )


class WatchHistoryItemSchema(Schema):
    watch_history_id = fields.String(metadata={'description': '시청 기록 ID'})
    watched_at = fields.DateTime(metadata={'description': '마지막 시청 일시'})
    watch_time = fields.Integer(metadata={'description': '시청 시간 (초)'})
    video = fields.Nested(VideoSummarySchema, metadata={'description': '영상'})


class WatchHistoryListResponseSchema(Schema):
    history = fields.List(fields.Nested(WatchHistoryItemSchema), metadata={'description': '시청 기록 (최근 순)'})
    total = fields.Integer(metadata={'description': '전체 개수'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    offset = fields.Integer(metadata={'description': '건너뛴 개수'})
    has_next = fields.Boolean(metadata={'description': '다음 페이지 존재 여부'})


class AddWatchHistoryRequestSchema(Schema):
    video_id = fields.String(required=True, metadata={'description': '영상 ID'})
    watch_time = fields.Integer(
        load_default=0,
        validate=validate.Range(min=0),
        metadata={'description': '시청 시간 (초)'}
    )
