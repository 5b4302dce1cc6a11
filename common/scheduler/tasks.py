"""
스케줄 작업 정의 및 등록
- 만료된 리프레시 토큰 정리
"""

from common.extensions import scheduler
from common.scheduler.jobs import RefreshTokenCleanupJob
from common.utils.logging_utils import get_logger

logger = get_logger('scheduler_tasks')


def register_scheduled_tasks():
    """
    모든 스케줄 작업을 등록하는 함수
    """
    # 매일 새벽 4시에 만료된 리프레시 토큰 삭제
    scheduler.add_job(
        id='cleanup_expired_refresh_tokens',
        func=execute_refresh_token_cleanup_job,
        trigger='cron',
        hour=4,
        minute=0,
        replace_existing=True
    )

    logger.info("모든 스케줄 작업이 등록되었습니다.")
    logger.info("만료 리프레시 토큰 정리: 매일 04:00")


def execute_refresh_token_cleanup_job():
    """만료 리프레시 토큰 정리 Job 실행 (Flask 앱 컨텍스트 내에서)"""
    with scheduler.app.app_context():
        try:
            logger.info("만료 리프레시 토큰 정리 작업 시작")
            RefreshTokenCleanupJob().execute()
            logger.info("만료 리프레시 토큰 정리 작업 완료")
        except Exception as e:
            # 다음 실행 주기에 다시 시도
            logger.error(f"만료 리프레시 토큰 정리 작업 실패: {str(e)}", exc_info=True)
