from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class VideoChannelDto:
    channel_id: str
    name: str
    profile_picture: Optional[str]
    verified: bool
    subscriber_count: Optional[int] = None
    banner_image: Optional[str] = None
    description: Optional[str] = None
    total_views: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class VideoSummaryDto:
    video_id: str
    title: str
    description: Optional[str]
    thumbnail_url: Optional[str]
    video_url: str
    duration: Optional[str]
    category: str
    tags: List[str]
    view_count: int
    like_count: int
    dislike_count: int
    is_public: bool
    created_at: datetime
    updated_at: datetime
    channel: VideoChannelDto
    comment_count: int = 0


@dataclass
class VideoDetailDto(VideoSummaryDto):
    user_reaction: Optional[str] = None  # 'like' | 'dislike' | None
    is_subscribed: bool = False


@dataclass
class VideoListDto:
    videos: List[VideoSummaryDto] = field(default_factory=list)
    limit: int = 20
    offset: int = 0
    total: int = 0
    has_next: bool = False
