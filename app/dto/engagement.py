from dataclasses import dataclass
from typing import Optional


@dataclass
class ReactionCountDto:
    likes: int
    dislikes: int
    user_reaction: Optional[str]  # 'like' | 'dislike' | None


@dataclass
class SubscriptionStateDto:
    is_subscribed: bool
    subscriber_count: int
    message: str
