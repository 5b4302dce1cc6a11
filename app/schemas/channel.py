from marshmallow import Schema, fields, validate

from app.schemas.common_schema import PaginationQuerySchema


class ChannelSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널(사용자) ID'})
    name = fields.String(metadata={'description': '채널명 (없으면 사용자 이름)'})
    username = fields.String(metadata={'description': '사용자 이름'})
    profile_picture = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    banner_image = fields.String(allow_none=True, metadata={'description': '배너 이미지 URL'})
    description = fields.String(allow_none=True, metadata={'description': '채널 설명'})
    verified = fields.Boolean(metadata={'description': '인증 채널 여부'})
    subscriber_count = fields.Integer(metadata={'description': '구독자 수'})
    total_views = fields.Integer(metadata={'description': '채널 전체 조회수'})
    video_count = fields.Integer(metadata={'description': '공개 영상 수'})
    created_at = fields.DateTime(metadata={'description': '채널 생성일'})
    is_subscribed = fields.Boolean(metadata={'description': '구독 여부'})


class ChannelListQuerySchema(Schema):
    ids = fields.String(required=True, metadata={'description': '채널 ID 목록 (콤마 구분)'})


class ChannelListResponseSchema(Schema):
    channels = fields.List(fields.Nested(ChannelSchema), metadata={'description': '채널 목록'})


class ChannelVideosQuerySchema(PaginationQuerySchema):
    sort_by = fields.String(
        load_default='createdAt',
        validate=validate.OneOf(['createdAt', 'views', 'likes']),
        metadata={'description': '정렬 기준 (createdAt, views, likes)'}
    )


class SubscribeRequestSchema(Schema):
    subscribe = fields.Boolean(required=True, metadata={'description': 'true: 구독, false: 구독 취소'})


class SubscriptionStateResponseSchema(Schema):
    is_subscribed = fields.Boolean(metadata={'description': '구독 여부'})
    subscriber_count = fields.Integer(metadata={'description': '구독자 수'})
    message = fields.String(metadata={'description': '안내 메시지'})
