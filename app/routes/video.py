from flask import g
from flask_smorest import Blueprint

from app.schemas.video import (
    VideoListQuerySchema, VideoListResponseSchema,
    VideoDetailSchema, VideoSummarySchema, RelatedVideoListResponseSchema,
    VideoUploadFormSchema, VideoUploadFilesSchema,
    ReactionRequestSchema, ReactionResponseSchema
)
from app.services.engagement_service import EngagementService
from app.services.video_service import VideoService
from common.decorator.auth_decorators import login_required, login_optional, creator_required, public_route

video_blueprint = Blueprint(
    'video',
    __name__,
    url_prefix='/api/videos',
    description='영상 목록 / 상세 / 업로드 / 좋아요 API'
)


@video_blueprint.route('', methods=['GET'])
@public_route
@video_blueprint.arguments(VideoListQuerySchema, location='query')
@video_blueprint.response(200, VideoListResponseSchema)
def get_videos(args):
    return VideoService.list_videos(
        category=args.get('category'),
        channel_id=args.get('channel_id'),
        sort_by=args['sort_by'],
        limit=args['limit'],
        offset=args['offset']
    )


@video_blueprint.route('/upload', methods=['POST'])
@login_required
@creator_required
@video_blueprint.arguments(VideoUploadFormSchema, location='form')
@video_blueprint.arguments(VideoUploadFilesSchema, location='files')
@video_blueprint.response(201, VideoSummarySchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def upload_video(form, files):
    return VideoService.upload_video(
        user_id=g.user_id,
        title=form['title'],
        description=form['description'],
        category=form['category'],
        video_file=files.get('video'),
        thumbnail_file=files.get('thumbnail'),
        tags=form.get('tags'),
        is_public=form['is_public'],
        duration=form.get('duration')
    )


@video_blueprint.route('/<string:video_id>', methods=['GET'])
@login_optional
@video_blueprint.response(200, VideoDetailSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_detail(video_id):
    return VideoService.get_video_detail(video_id, g.user_id)


@video_blueprint.route('/<string:video_id>/related', methods=['GET'])
@public_route
@video_blueprint.response(200, RelatedVideoListResponseSchema)
def get_related_videos(video_id):
    return {"videos": VideoService.get_related_videos(video_id)}


@video_blueprint.route('/<string:video_id>/like', methods=['POST'])
@login_required
@video_blueprint.arguments(ReactionRequestSchema)
@video_blueprint.response(200, ReactionResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def set_reaction(data, video_id):
    return EngagementService.set_reaction(g.user_id, video_id, data['is_like'])
