import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path

from flask import g, request

LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(name)s (%(filename)s:%(lineno)d): %(message)s'


def setup_logger(app=None, log_level=None, log_dir='logs', file_logging=True):
    if log_level is None:
        log_level = logging.INFO

    root_logger = logging.getLogger('vidtube')
    root_logger.setLevel(log_level)

    if app:
        app.logger.setLevel(log_level)

    if root_logger.handlers:
        return root_logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    #NOTE: 테스트 환경에서는 파일 로그를 남기지 않음
    if file_logging:
        path = Path(log_dir)
        path.mkdir(exist_ok=True)

        # 10MB 단위 로테이션, 최대 5개
        file_handler = RotatingFileHandler(
            path / 'vidtube.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)

        error_handler = RotatingFileHandler(
            path / 'error.log',
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(error_handler)

    return root_logger


def register_access_log(app):
    access_logger = get_logger('access')

    @app.before_request
    def _start_timer():
        g.request_started_at = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop('request_started_at', None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        access_logger.info(
            f"{request.method} {request.full_path.rstrip('?')} {response.status_code} {elapsed_ms:.1f}ms"
        )
        return response


def get_logger(name=None):
    if name:
        return logging.getLogger(f'vidtube.{name}')
    return logging.getLogger('vidtube')
