from datetime import datetime
from typing import Optional

from app.models.refresh_token import RefreshToken
from common.decorator.db_decorators import transactional
from common.extensions import db
from common.utils.logging_utils import get_logger

logger = get_logger('refresh_token_cleanup_job')


class RefreshTokenCleanupJob:
    """
    만료된 리프레시 토큰 행 정리
    (재발급 시 만료 토큰은 거절만 하고 삭제하지 않으므로 여기서 일괄 삭제)
    """

    def __init__(self, now: Optional[datetime] = None):
        self.now = now

    @transactional
    def execute(self) -> int:
        cutoff = self.now or datetime.utcnow()

        deleted = db.session.query(RefreshToken).filter(
            RefreshToken.expires_at <= cutoff
        ).delete(synchronize_session=False)

        logger.info(f"만료된 리프레시 토큰 {deleted}개 삭제 (기준: {cutoff.isoformat()})")

        return deleted
