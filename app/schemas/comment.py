from marshmallow import Schema, fields, validate

from app.schemas.common_schema import PaginationQuerySchema


class CommentAuthorSchema(Schema):
    user_id = fields.String(metadata={'description': '작성자 ID'})
    username = fields.String(metadata={'description': '작성자 이름'})
    profile_picture = fields.String(allow_none=True, metadata={'description': '작성자 프로필 이미지'})
    verified = fields.Boolean(metadata={'description': '인증 채널 여부'})


class CommentSchema(Schema):
    comment_id = fields.String(metadata={'description': '댓글 ID'})
    video_id = fields.String(metadata={'description': '영상 ID'})
    parent_id = fields.String(allow_none=True, metadata={'description': '부모 댓글 ID (답글일 때)'})
    content = fields.String(metadata={'description': '댓글 내용'})
    like_count = fields.Integer(metadata={'description': '좋아요 수'})
    dislike_count = fields.Integer(metadata={'description': '싫어요 수'})
    created_at = fields.DateTime(metadata={'description': '작성 일시'})
    updated_at = fields.DateTime(metadata={'description': '수정 일시'})
    user = fields.Nested(CommentAuthorSchema, metadata={'description': '작성자'})
    is_mine = fields.Boolean(metadata={'description': '내 댓글 여부'})


class CommentThreadSchema(CommentSchema):
    replies = fields.List(fields.Nested(CommentSchema), metadata={'description': '답글 미리보기 (오래된 순, 최대 3개)'})
    reply_count = fields.Integer(metadata={'description': '전체 답글 수'})


class CommentListResponseSchema(Schema):
    comments = fields.List(fields.Nested(CommentThreadSchema), metadata={'description': '최상위 댓글 (최신 순)'})
    total = fields.Integer(metadata={'description': '최상위 댓글 수'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    offset = fields.Integer(metadata={'description': '건너뛴 개수'})
    has_next = fields.Boolean(metadata={'description': '다음 페이지 존재 여부'})


class ReplyListResponseSchema(Schema):
    replies = fields.List(fields.Nested(CommentSchema), metadata={'description': '답글 (오래된 순)'})
    total = fields.Integer(metadata={'description': '전체 답글 수'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    offset = fields.Integer(metadata={'description': '건너뛴 개수'})
    has_next = fields.Boolean(metadata={'description': '다음 페이지 존재 여부'})


class ReplyListQuerySchema(PaginationQuerySchema):
    limit = fields.Integer(
        load_default=10,
        validate=validate.Range(min=1, max=100),
        metadata={'description': '페이지 크기 (1~100)'}
    )


class AddCommentRequestSchema(Schema):
    #NOTE: 빈 문자열/길이 초과는 서비스에서 BusinessError(400)로 처리
    text = fields.String(required=True, metadata={'description': '댓글 내용 (공백 제외 1~1000자)'})
    parent_id = fields.String(allow_none=True, load_default=None, metadata={'description': '답글 대상 댓글 ID'})


class UpdateCommentRequestSchema(Schema):
    text = fields.String(required=True, metadata={'description': '수정할 댓글 내용'})
