from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class CommentAuthorDto:
    user_id: str
    username: str
    profile_picture: Optional[str]
    verified: bool


@dataclass
class CommentDto:
    comment_id: str
    video_id: str
    parent_id: Optional[str]
    content: str
    like_count: int
    dislike_count: int
    created_at: datetime
    updated_at: datetime
    user: CommentAuthorDto
    is_mine: bool = False


@dataclass
class CommentThreadDto(CommentDto):
    replies: List[CommentDto] = field(default_factory=list)
    reply_count: int = 0


@dataclass
class CommentListDto:
    comments: List[CommentThreadDto]
    total: int
    limit: int
    offset: int
    has_next: bool


@dataclass
class ReplyListDto:
    replies: List[CommentDto]
    total: int
    limit: int
    offset: int
    has_next: bool
