from flask import g
from flask_smorest import Blueprint

from app.schemas.comment import (
    CommentListResponseSchema, ReplyListResponseSchema, ReplyListQuerySchema,
    CommentSchema, AddCommentRequestSchema, UpdateCommentRequestSchema
)
from app.schemas.common_schema import PaginationQuerySchema, SuccessResponseSchema
from app.services.comment_service import CommentService
from common.decorator.auth_decorators import login_required, login_optional

comment_blueprint = Blueprint(
    'comment',
    __name__,
    url_prefix='/api',
    description='댓글 / 답글 API'
)


@comment_blueprint.route('/videos/<string:video_id>/comments', methods=['GET'])
@login_optional
@comment_blueprint.arguments(PaginationQuerySchema, location='query')
@comment_blueprint.response(200, CommentListResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def get_comments(args, video_id):
    return CommentService.list_top_level_comments(
        video_id,
        limit=args['limit'],
        offset=args['offset'],
        viewer_id=g.user_id
    )


@comment_blueprint.route('/videos/<string:video_id>/comments', methods=['POST'])
@login_required
@comment_blueprint.arguments(AddCommentRequestSchema)
@comment_blueprint.response(201, CommentSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def add_comment(data, video_id):
    return CommentService.add_comment(video_id, g.user_id, data['text'], data.get('parent_id'))


@comment_blueprint.route('/comments/<string:comment_id>', methods=['PUT'])
@login_required
@comment_blueprint.arguments(UpdateCommentRequestSchema)
@comment_blueprint.response(200, CommentSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def update_comment(data, comment_id):
    return CommentService.update_comment(comment_id, g.user_id, data['text'])


@comment_blueprint.route('/comments/<string:comment_id>', methods=['DELETE'])
@login_required
@comment_blueprint.response(200, SuccessResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def delete_comment(comment_id):
    CommentService.delete_comment(comment_id, g.user_id)

    return {
        "result": "success",
        "message": "댓글이 삭제되었습니다."
    }


@comment_blueprint.route('/comments/<string:comment_id>/replies', methods=['GET'])
@login_optional
@comment_blueprint.arguments(ReplyListQuerySchema, location='query')
@comment_blueprint.response(200, ReplyListResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def get_replies(args, comment_id):
    return CommentService.list_replies(
        comment_id,
        limit=args['limit'],
        offset=args['offset'],
        viewer_id=g.user_id
    )
