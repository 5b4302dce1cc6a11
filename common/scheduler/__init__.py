"""
Scheduler 초기화
Flask-APScheduler 기반 백그라운드 작업 (SCHEDULER_ENABLED일 때만 기동)
"""
from flask import Flask
from common.extensions import scheduler
from common.utils.logging_utils import get_logger

logger = get_logger('scheduler')


def init_scheduler(app: Flask):
    # SCHEDULER_TIMEZONE / SCHEDULER_API_ENABLED 는 Config에서 읽음
    scheduler.init_app(app)

    from common.scheduler.tasks import register_scheduled_tasks
    register_scheduled_tasks()

    #NOTE: 디버그 리로더 등으로 create_app이 다시 불려도 한 번만 시작
    if not scheduler.running:
        scheduler.start()
        logger.info(f"스케줄러 시작 (timezone={app.config.get('SCHEDULER_TIMEZONE')})")


__all__ = ['init_scheduler']
