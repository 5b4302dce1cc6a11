from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import PaginationQuerySchema
from app.schemas.user import (
    UserProfileSchema, UpdateProfileFormSchema, UpdateProfileFilesSchema,
    SubscriptionListResponseSchema, MyVideosQuerySchema,
    WatchHistoryListResponseSchema, WatchHistoryItemSchema, AddWatchHistoryRequestSchema
)
from app.schemas.video import VideoListResponseSchema
from app.services.user_service import UserService
from common.decorator.auth_decorators import login_required, login_optional

user_blueprint = Blueprint(
    'user',
    __name__,
    url_prefix='/api/users',
    description='사용자 프로필 / 구독 목록 / 시청 기록 API'
)


@user_blueprint.route('/profile', methods=['PUT'])
@login_required
@user_blueprint.arguments(UpdateProfileFormSchema, location='form')
@user_blueprint.arguments(UpdateProfileFilesSchema, location='files')
@user_blueprint.response(200, UserProfileSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def update_profile(form, files):
    return UserService.update_profile(
        g.user_id,
        first_name=form.get('first_name'),
        last_name=form.get('last_name'),
        username=form.get('username'),
        description=form.get('description'),
        channel_name=form.get('channel_name'),
        profile_picture=files.get('profile_picture'),
        banner_image=files.get('banner_image')
    )


@user_blueprint.route('/me/subscriptions', methods=['GET'])
@login_required
@user_blueprint.arguments(PaginationQuerySchema, location='query')
@user_blueprint.response(200, SubscriptionListResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_my_subscriptions(args):
    return {
        "subscriptions": UserService.get_subscriptions(g.user_id, args['limit'], args['offset'])
    }


@user_blueprint.route('/me/videos', methods=['GET'])
@login_required
@user_blueprint.arguments(MyVideosQuerySchema, location='query')
@user_blueprint.response(200, VideoListResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_my_videos(args):
    return UserService.get_my_videos(
        g.user_id,
        include_private=args['include_private'],
        limit=args['limit'],
        offset=args['offset']
    )


@user_blueprint.route('/me/watch-history', methods=['GET'])
@login_required
@user_blueprint.arguments(PaginationQuerySchema, location='query')
@user_blueprint.response(200, WatchHistoryListResponseSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_watch_history(args):
    return UserService.get_watch_history(g.user_id, args['limit'], args['offset'])


@user_blueprint.route('/me/watch-history', methods=['POST'])
@login_required
@user_blueprint.arguments(AddWatchHistoryRequestSchema)
@user_blueprint.response(200, WatchHistoryItemSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def add_watch_history(data):
    return UserService.add_watch_history(g.user_id, data['video_id'], data['watch_time'])


@user_blueprint.route('/<string:user_id>', methods=['GET'])
@login_optional
@user_blueprint.response(200, UserProfileSchema)
@user_blueprint.doc(security=[{"BearerAuth": []}])
def get_user_profile(user_id):
    # 본인 프로필일 때만 이메일 포함
    return UserService.get_profile(user_id, include_email=(g.user_id == user_id))
