from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from app.dto.video import VideoSummaryDto


@dataclass
class UserProfileDto:
    user_id: str
    username: str
    first_name: str
    last_name: str
    full_name: str
    profile_picture: Optional[str]
    banner_image: Optional[str]
    description: Optional[str]
    is_creator: bool
    verified: bool
    channel_name: Optional[str]
    subscriber_count: int
    total_views: int
    video_count: int
    created_at: datetime
    email: Optional[str] = None  # 본인 조회일 때만


@dataclass
class SubscribedChannelDto:
    channel_id: str
    name: str
    username: str
    profile_picture: Optional[str]
    verified: bool
    subscriber_count: int
    video_count: int


@dataclass
class SubscriptionItemDto:
    subscription_id: str
    subscribed_at: datetime
    channel: SubscribedChannelDto


@dataclass
class WatchHistoryItemDto:
    watch_history_id: str
    watched_at: datetime
    watch_time: int
    video: VideoSummaryDto


@dataclass
class WatchHistoryListDto:
    history: List[WatchHistoryItemDto]
    total: int
    limit: int
    offset: int
    has_next: bool
