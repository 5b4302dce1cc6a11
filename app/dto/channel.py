from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ChannelDto:
    channel_id: str
    name: str
    username: str
    profile_picture: Optional[str]
    banner_image: Optional[str]
    description: Optional[str]
    verified: bool
    subscriber_count: int
    total_views: int
    video_count: int
    created_at: datetime
    is_subscribed: bool = False
