"""
Routes package
Flask Blueprint들을 관리하는 패키지
"""

from app.routes.auth import auth_blueprint
from app.routes.video import video_blueprint
from app.routes.comment import comment_blueprint
from app.routes.channel import channel_blueprint
from app.routes.user import user_blueprint
from app.routes.search import search_blueprint
from app.routes.base import base_blueprint

__all__ = [
    'auth_blueprint',
    'video_blueprint',
    'comment_blueprint',
    'channel_blueprint',
    'user_blueprint',
    'search_blueprint',
    'base_blueprint'
]
