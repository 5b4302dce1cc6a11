from dataclasses import dataclass, field
from typing import List, Optional

from app.dto.channel import ChannelDto
from app.dto.video import VideoSummaryDto


@dataclass
class SearchResultDto:
    query: str
    type: str
    videos: Optional[List[VideoSummaryDto]] = None
    channels: Optional[List[ChannelDto]] = None
    total_results: int = 0
