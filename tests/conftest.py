import itertools

import pytest

from app import create_app
from app.models.user import User
from app.models.video import Video
from common.extensions import db
from common.utils import create_access_token
from common.utils.file_utils import ensure_upload_dirs


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    # api(flask-smorest)가 모듈 전역이라 앱은 세션당 한 번만 생성
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path_factory.mktemp('uploads'))
    ensure_upload_dirs(app.config['UPLOAD_FOLDER'])
    return app


@pytest.fixture(autouse=True)
def database(app):
    with app.app_context():
        db.create_all()
        yield db
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(database):
    sequence = itertools.count(1)

    def _make_user(is_creator=False, **overrides):
        n = next(sequence)
        fields = {
            'email': f'user{n}@example.com',
            'username': f'user{n}',
            'password': 'not-a-real-hash',
            'first_name': 'Test',
            'last_name': f'User{n}',
            'is_creator': is_creator,
            'channel_name': f'Channel {n}' if is_creator else None,
        }
        fields.update(overrides)

        user = User(**fields)
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture
def make_video(database):
    sequence = itertools.count(1)

    def _make_video(owner, **overrides):
        n = next(sequence)
        fields = {
            'user_id': owner.user_id,
            'title': f'Video {n}',
            'description': f'description {n}',
            'category': 'Music',
            'tags': [],
            'video_url': f'/uploads/videos/video{n}.mp4',
            'is_public': True,
        }
        fields.update(overrides)

        video = Video(**fields)
        db.session.add(video)
        db.session.commit()
        return video

    return _make_video


@pytest.fixture
def auth_header():
    def _auth_header(user):
        return {'Authorization': f'Bearer {create_access_token(user.user_id)}'}

    return _auth_header
