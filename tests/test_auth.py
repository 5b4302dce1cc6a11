from datetime import datetime, timedelta

import pytest

from app.models.refresh_token import RefreshToken
from common.extensions import db
from common.scheduler.jobs import RefreshTokenCleanupJob
from common.utils import create_refresh_token

REGISTER_BODY = {
    'email': 'creator@example.com',
    'username': 'creator',
    'password': 'password123',
    'first_name': 'Ada',
    'last_name': 'Lovelace',
    'is_creator': True,
}


@pytest.fixture
def registered(client):
    response = client.post('/api/auth/register', json=REGISTER_BODY)
    assert response.status_code == 201
    return response.get_json()


class TestRegisterLogin:

    def test_register_returns_tokens_and_default_channel_name(self, registered):
        assert registered['access_token']
        assert registered['refresh_token']
        assert registered['user']['email'] == 'creator@example.com'
        assert registered['user']['is_creator'] is True
        assert registered['user']['channel_name'] == 'Ada Lovelace'
        assert db.session.query(RefreshToken).count() == 1

    def test_duplicate_email_and_username(self, client, registered):
        response = client.post('/api/auth/register', json={**REGISTER_BODY, 'username': 'someone'})
        assert response.status_code == 409
        assert response.get_json()['code'] == 'A005'

        response = client.post('/api/auth/register', json={**REGISTER_BODY, 'email': 'other@example.com'})
        assert response.status_code == 409
        assert response.get_json()['code'] == 'A006'

    def test_register_validation(self, client):
        response = client.post('/api/auth/register', json={'email': 'not-an-email'})

        assert response.status_code == 422
        assert response.get_json()['result'] == 'fail'

    def test_login(self, client, registered):
        response = client.post('/api/auth/login', json={'email': 'creator@example.com', 'password': 'password123'})

        assert response.status_code == 200
        assert response.get_json()['user']['username'] == 'creator'

    def test_login_wrong_password(self, client, registered):
        response = client.post('/api/auth/login', json={'email': 'creator@example.com', 'password': 'wrong-password'})

        assert response.status_code == 401
        assert response.get_json()['code'] == 'A003'

    def test_me_requires_token(self, client, registered):
        assert client.get('/api/auth/me').status_code == 401

        response = client.get('/api/auth/me', headers={'Authorization': f"Bearer {registered['access_token']}"})
        assert response.status_code == 200
        assert response.get_json()['username'] == 'creator'

    def test_invalid_token(self, client):
        response = client.get('/api/auth/me', headers={'Authorization': 'Bearer garbage'})

        assert response.status_code == 401
        assert response.get_json()['code'] == 'A002'


class TestRefresh:

    def test_refresh_rotates_token(self, client, registered):
        response = client.post('/api/auth/refresh', json={'refresh_token': registered['refresh_token']})
        assert response.status_code == 200
        rotated = response.get_json()
        assert rotated['refresh_token'] != registered['refresh_token']

        # 이전 리프레시 토큰은 더 이상 사용할 수 없음
        response = client.post('/api/auth/refresh', json={'refresh_token': registered['refresh_token']})
        assert response.status_code == 401

    def test_unknown_refresh_token_rejected(self, client, registered):
        user_id = registered['user']['user_id']
        unknown = create_refresh_token(user_id)

        response = client.post('/api/auth/refresh', json={'refresh_token': unknown})

        assert response.status_code == 401
        assert response.get_json()['code'] == 'A002'

    def test_access_token_cannot_refresh(self, client, registered):
        response = client.post('/api/auth/refresh', json={'refresh_token': registered['access_token']})

        assert response.status_code == 401

    def test_logout_revokes_refresh_tokens(self, client, registered):
        headers = {'Authorization': f"Bearer {registered['access_token']}"}

        response = client.post('/api/auth/logout', headers=headers)
        assert response.status_code == 200
        assert db.session.query(RefreshToken).count() == 0

        response = client.post('/api/auth/refresh', json={'refresh_token': registered['refresh_token']})
        assert response.status_code == 401


class TestRefreshTokenCleanupJob:

    def test_deletes_only_expired_rows(self, make_user):
        user = make_user()
        now = datetime.utcnow()
        db.session.add_all([
            RefreshToken(token='expired-token', user_id=user.user_id, expires_at=now - timedelta(minutes=1)),
            RefreshToken(token='live-token', user_id=user.user_id, expires_at=now + timedelta(days=1)),
        ])
        db.session.commit()

        deleted = RefreshTokenCleanupJob(now=now).execute()

        assert deleted == 1
        assert [t.token for t in db.session.query(RefreshToken).all()] == ['live-token']
