from flask import g
from flask_smorest import Blueprint

from app.schemas.channel import (
    ChannelListQuerySchema, ChannelListResponseSchema, ChannelSchema,
    ChannelVideosQuerySchema, SubscribeRequestSchema, SubscriptionStateResponseSchema
)
from app.schemas.video import VideoListResponseSchema
from app.services.channel_service import ChannelService
from app.services.engagement_service import EngagementService
from common.decorator.auth_decorators import login_required, login_optional, public_route

channel_blueprint = Blueprint(
    'channel',
    __name__,
    url_prefix='/api/channels',
    description='채널 조회 / 구독 API'
)


@channel_blueprint.route('', methods=['GET'])
@public_route
@channel_blueprint.arguments(ChannelListQuerySchema, location='query')
@channel_blueprint.response(200, ChannelListResponseSchema)
def get_channels(args):
    channel_ids = [cid.strip() for cid in args['ids'].split(',') if cid.strip()]

    return {"channels": ChannelService.get_channels(channel_ids)}


@channel_blueprint.route('/<string:channel_id>', methods=['GET'])
@login_optional
@channel_blueprint.response(200, ChannelSchema)
@channel_blueprint.doc(security=[{"BearerAuth": []}])
def get_channel(channel_id):
    return ChannelService.get_channel(channel_id, g.user_id)


@channel_blueprint.route('/<string:channel_id>/subscribe', methods=['POST'])
@login_required
@channel_blueprint.arguments(SubscribeRequestSchema)
@channel_blueprint.response(200, SubscriptionStateResponseSchema)
@channel_blueprint.doc(security=[{"BearerAuth": []}])
def subscribe(data, channel_id):
    return EngagementService.set_subscription(g.user_id, channel_id, data['subscribe'])


@channel_blueprint.route('/<string:channel_id>/videos', methods=['GET'])
@public_route
@channel_blueprint.arguments(ChannelVideosQuerySchema, location='query')
@channel_blueprint.response(200, VideoListResponseSchema)
def get_channel_videos(args, channel_id):
    return ChannelService.get_channel_videos(
        channel_id,
        sort_by=args['sort_by'],
        limit=args['limit'],
        offset=args['offset']
    )
