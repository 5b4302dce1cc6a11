"""
스케줄러 Job 클래스 모듈
"""

from .refresh_token_cleanup_job import RefreshTokenCleanupJob

__all__ = [
    'RefreshTokenCleanupJob'
]
