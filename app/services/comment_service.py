from typing import Optional, List, Dict

from sqlalchemy import desc, asc, func
from sqlalchemy.orm import joinedload

from common.extensions import db
from common.decorator.db_decorators import transactional, transactional_readonly
from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError
from common.utils.file_utils import to_absolute_url
from common.utils.logging_utils import get_logger
from app.models.video import Video
from app.models.comment import Comment
from app.dto.comment import (
    CommentAuthorDto, CommentDto, CommentThreadDto,
    CommentListDto, ReplyListDto
)

logger = get_logger('comment_service')

# 최상위 댓글 목록에 미리 붙여서 내려주는 답글 수
REPLY_PREVIEW_SIZE = 3


def _validate_content(text: Optional[str]) -> str:
    content = (text or '').strip()
    if not content:
        raise BusinessError(APIError.COMMENT_TEXT_REQUIRED)
    if len(content) > Comment.MAX_CONTENT_LENGTH:
        raise BusinessError(APIError.COMMENT_TEXT_TOO_LONG)
    return content


def _to_dto(comment: Comment, viewer_id: Optional[str] = None, dto_class=CommentDto, **extra):
    author = comment.user
    return dto_class(
        comment_id=comment.comment_id,
        video_id=comment.video_id,
        parent_id=comment.parent_id,
        content=comment.content,
        like_count=comment.like_count,
        dislike_count=comment.dislike_count,
        created_at=comment.created_at,
        updated_at=comment.updated_at,
        user=CommentAuthorDto(
            user_id=author.user_id,
            username=author.username,
            profile_picture=to_absolute_url(author.profile_picture),
            verified=bool(author.verified)
        ),
        is_mine=bool(viewer_id) and viewer_id == comment.user_id,
        **extra
    )


def _reply_previews(parent_ids: List[str], viewer_id: Optional[str]) -> Dict[str, List[CommentDto]]:
    """부모별 가장 오래된 답글 REPLY_PREVIEW_SIZE개를 한 번의 쿼리로 조회"""
    if not parent_ids:
        return {}

    rank = func.row_number().over(
        partition_by=Comment.parent_id,
        order_by=(asc(Comment.created_at), asc(Comment.comment_id))
    ).label('reply_rank')

    ranked = db.session.query(Comment.comment_id.label('comment_id'), rank).filter(
        Comment.parent_id.in_(parent_ids)
    ).subquery()

    replies = db.session.query(Comment).options(joinedload(Comment.user)).join(
        ranked, Comment.comment_id == ranked.c.comment_id
    ).filter(
        ranked.c.reply_rank <= REPLY_PREVIEW_SIZE
    ).order_by(asc(Comment.created_at), asc(Comment.comment_id)).all()

    previews: Dict[str, List[CommentDto]] = {}
    for reply in replies:
        previews.setdefault(reply.parent_id, []).append(_to_dto(reply, viewer_id))
    return previews


class CommentService:
    """
    댓글 / 답글 처리

    답글은 1단계까지만 허용한다. 모델의 parent_id 자기참조 자체는 깊이 제한이 없지만
    답글에 다시 답글을 다는 요청은 서비스에서 거절한다.
    """

    @staticmethod
    @transactional
    def add_comment(video_id: str, author_id: str, text: str, parent_id: Optional[str] = None) -> CommentDto:
        content = _validate_content(text)

        video_exists = db.session.query(Video.video_id).filter_by(video_id=video_id).first()
        if not video_exists:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        if parent_id:
            parent = db.session.query(Comment).filter_by(comment_id=parent_id).first()

            #NOTE: 다른 영상의 댓글은 유효한 대상이 아니므로 없는 것과 동일하게 처리
            if not parent or parent.video_id != video_id:
                raise BusinessError(APIError.PARENT_COMMENT_NOT_FOUND)

            if parent.parent_id is not None:
                raise BusinessError(APIError.COMMENT_REPLY_DEPTH)

        comment = Comment(
            video_id=video_id,
            user_id=author_id,
            parent_id=parent_id or None,
            content=content
        )
        db.session.add(comment)
        db.session.flush()

        logger.info(f"댓글 작성: comment_id={comment.comment_id} video_id={video_id} parent_id={parent_id}")

        return _to_dto(comment, author_id)

    @staticmethod
    @transactional_readonly
    def list_top_level_comments(video_id: str, limit: int = 20, offset: int = 0,
                                viewer_id: Optional[str] = None) -> CommentListDto:
        video_exists = db.session.query(Video.video_id).filter_by(video_id=video_id).first()
        if not video_exists:
            raise BusinessError(APIError.VIDEO_NOT_FOUND)

        base_query = db.session.query(Comment).filter(
            Comment.video_id == video_id,
            Comment.parent_id.is_(None)
        )

        total = base_query.count()

        comments = base_query.options(joinedload(Comment.user)).order_by(
            desc(Comment.created_at)
        ).offset(offset).limit(limit).all()

        parent_ids = [c.comment_id for c in comments]
        reply_counts = {}
        if parent_ids:
            reply_counts = dict(
                db.session.query(Comment.parent_id, func.count(Comment.comment_id)).filter(
                    Comment.parent_id.in_(parent_ids)
                ).group_by(Comment.parent_id).all()
            )

        previews = _reply_previews([pid for pid in parent_ids if reply_counts.get(pid)], viewer_id)

        threads = [
            _to_dto(
                comment,
                viewer_id,
                dto_class=CommentThreadDto,
                replies=previews.get(comment.comment_id, []),
                reply_count=reply_counts.get(comment.comment_id, 0)
            )
            for comment in comments
        ]

        return CommentListDto(
            comments=threads,
            total=total,
            limit=limit,
            offset=offset,
            has_next=(offset + len(threads)) < total
        )

    @staticmethod
    @transactional_readonly
    def list_replies(parent_id: str, limit: int = 10, offset: int = 0,
                     viewer_id: Optional[str] = None) -> ReplyListDto:
        parent_exists = db.session.query(Comment.comment_id).filter_by(comment_id=parent_id).first()
        if not parent_exists:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)

        base_query = db.session.query(Comment).filter(Comment.parent_id == parent_id)
        total = base_query.count()

        replies = base_query.options(joinedload(Comment.user)).order_by(
            asc(Comment.created_at), asc(Comment.comment_id)
        ).offset(offset).limit(limit).all()

        return ReplyListDto(
            replies=[_to_dto(reply, viewer_id) for reply in replies],
            total=total,
            limit=limit,
            offset=offset,
            has_next=(offset + len(replies)) < total
        )

    @staticmethod
    @transactional
    def update_comment(comment_id: str, requester_id: str, text: str) -> CommentDto:
        comment = db.session.query(Comment).filter_by(comment_id=comment_id).first()
        if not comment:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)

        if comment.user_id != requester_id:
            raise BusinessError(APIError.COMMENT_FORBIDDEN)

        comment.content = _validate_content(text)
        db.session.flush()

        return _to_dto(comment, requester_id)

    @staticmethod
    @transactional
    def delete_comment(comment_id: str, requester_id: str):
        comment = db.session.query(Comment).filter_by(comment_id=comment_id).first()
        if not comment:
            raise BusinessError(APIError.COMMENT_NOT_FOUND)

        if comment.user_id != requester_id:
            raise BusinessError(APIError.COMMENT_FORBIDDEN)

        reply_count = len(comment.replies)

        # replies는 cascade='all, delete-orphan'으로 함께 삭제됨
        db.session.delete(comment)

        logger.info(f"댓글 삭제: comment_id={comment_id} (답글 {reply_count}개 포함)")
