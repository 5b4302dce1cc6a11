import io
import os

from app.models.video import Video
from common.extensions import db


class TestBaseRoutes:

    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json()['status'] == 'ok'

    def test_api_status_checks_database(self, client):
        response = client.get('/api/status')

        assert response.status_code == 200
        assert response.get_json()['database'] == 'connected'


class TestVideoRoutes:

    def test_detail_counts_view_and_returns_read_back_count(self, client, make_user, make_video, auth_header):
        owner = make_user(is_creator=True)
        viewer = make_user()
        video = make_video(owner)

        response = client.get(f'/api/videos/{video.video_id}', headers=auth_header(viewer))
        assert response.status_code == 200
        body = response.get_json()
        assert body['view_count'] == 1
        assert body['channel']['channel_id'] == owner.user_id
        assert body['user_reaction'] is None
        assert body['is_subscribed'] is False

        # 본인 조회는 집계하지 않음
        response = client.get(f'/api/videos/{video.video_id}', headers=auth_header(owner))
        assert response.get_json()['view_count'] == 1

    def test_private_video_forbidden_for_others(self, client, make_user, make_video, auth_header):
        owner = make_user(is_creator=True)
        video = make_video(owner, is_public=False)

        response = client.get(f'/api/videos/{video.video_id}')
        assert response.status_code == 403
        assert response.get_json()['code'] == 'V002'

        assert client.get(f'/api/videos/{video.video_id}', headers=auth_header(owner)).status_code == 200

    def test_missing_video(self, client):
        response = client.get('/api/videos/no-such-video')

        assert response.status_code == 404
        assert response.get_json() == {
            'result': 'fail',
            'message': '영상을 찾을 수 없습니다.',
            'code': 'V001',
            'data': None
        }

    def test_like_toggle(self, client, make_user, make_video, auth_header):
        video = make_video(make_user(is_creator=True))
        viewer = make_user()
        url = f'/api/videos/{video.video_id}/like'

        body = client.post(url, json={'is_like': True}, headers=auth_header(viewer)).get_json()
        assert (body['likes'], body['dislikes'], body['user_reaction']) == (1, 0, 'like')

        body = client.post(url, json={'is_like': True}, headers=auth_header(viewer)).get_json()
        assert (body['likes'], body['dislikes'], body['user_reaction']) == (0, 0, None)

    def test_like_requires_login(self, client, make_user, make_video):
        video = make_video(make_user(is_creator=True))

        response = client.post(f'/api/videos/{video.video_id}/like', json={'is_like': True})

        assert response.status_code == 401

    def test_list_and_related(self, client, make_user, make_video):
        owner = make_user(is_creator=True)
        first = make_video(owner, category='Music')
        second = make_video(owner, category='Gaming')
        make_video(owner, is_public=False)

        body = client.get('/api/videos?limit=10').get_json()
        assert body['total'] == 2

        body = client.get('/api/videos?category=Gaming').get_json()
        assert [v['video_id'] for v in body['videos']] == [second.video_id]

        body = client.get(f'/api/videos/{first.video_id}/related').get_json()
        assert [v['video_id'] for v in body['videos']] == [second.video_id]

    def test_list_filters_by_channel(self, client, make_user, make_video):
        first_channel = make_user(is_creator=True)
        second_channel = make_user(is_creator=True)
        own = make_video(first_channel)
        make_video(second_channel)

        body = client.get(f'/api/videos?channel_id={first_channel.user_id}').get_json()

        assert body['total'] == 1
        assert [v['video_id'] for v in body['videos']] == [own.video_id]

    def test_upload_requires_creator(self, client, make_user, auth_header):
        viewer = make_user()

        response = client.post(
            '/api/videos/upload',
            data={'title': 't', 'description': 'd', 'category': 'Music'},
            headers=auth_header(viewer),
            content_type='multipart/form-data'
        )

        assert response.status_code == 403
        assert response.get_json()['code'] == 'A007'

    def test_upload_and_serve_file(self, client, make_user, auth_header):
        creator = make_user(is_creator=True)

        response = client.post(
            '/api/videos/upload',
            data={
                'title': 'My clip',
                'description': 'first upload',
                'category': 'Music',
                'tags': 'music, live',
                'is_public': 'true',
                'video': (io.BytesIO(b'fake video bytes'), 'clip.mp4'),
            },
            headers=auth_header(creator),
            content_type='multipart/form-data'
        )

        assert response.status_code == 201
        body = response.get_json()
        assert body['tags'] == ['music', 'live']
        assert body['video_url'].startswith('http://localhost/uploads/videos/')

        stored = db.session.query(Video).filter_by(video_id=body['video_id']).one()
        assert stored.video_url.startswith('/uploads/videos/')

        served = client.get(stored.video_url)
        assert served.status_code == 200
        assert served.data == b'fake video bytes'
        served.close()

    def test_upload_without_file(self, client, make_user, auth_header):
        creator = make_user(is_creator=True)

        response = client.post(
            '/api/videos/upload',
            data={'title': 't', 'description': 'd', 'category': 'Music'},
            headers=auth_header(creator),
            content_type='multipart/form-data'
        )

        assert response.status_code == 400
        assert response.get_json()['code'] == 'V003'

    def test_rejected_thumbnail_leaves_no_files(self, app, client, make_user, auth_header):
        creator = make_user(is_creator=True)
        videos_dir = os.path.join(app.config['UPLOAD_FOLDER'], 'videos')
        before = set(os.listdir(videos_dir))

        response = client.post(
            '/api/videos/upload',
            data={
                'title': 't',
                'description': 'd',
                'category': 'Music',
                'video': (io.BytesIO(b'fake video bytes'), 'clip.mp4'),
                'thumbnail': (io.BytesIO(b'not an image'), 'thumb.exe'),
            },
            headers=auth_header(creator),
            content_type='multipart/form-data'
        )

        assert response.status_code == 400
        assert response.get_json()['code'] == 'V004'
        assert db.session.query(Video).count() == 0
        assert set(os.listdir(videos_dir)) == before


class TestCommentRoutes:

    def test_comment_flow(self, client, make_user, make_video, auth_header):
        video = make_video(make_user(is_creator=True))
        author = make_user()
        stranger = make_user()

        response = client.post(
            f'/api/videos/{video.video_id}/comments',
            json={'text': 'hello'},
            headers=auth_header(author)
        )
        assert response.status_code == 201
        comment_id = response.get_json()['comment_id']

        response = client.post(
            f'/api/videos/{video.video_id}/comments',
            json={'text': 'reply', 'parent_id': comment_id},
            headers=auth_header(stranger)
        )
        assert response.status_code == 201

        body = client.get(f'/api/videos/{video.video_id}/comments').get_json()
        assert body['total'] == 1
        assert body['comments'][0]['reply_count'] == 1

        response = client.put(f'/api/comments/{comment_id}', json={'text': 'edited'}, headers=auth_header(stranger))
        assert response.status_code == 403
        assert response.get_json()['code'] == 'M002'

        response = client.put(f'/api/comments/{comment_id}', json={'text': 'edited'}, headers=auth_header(author))
        assert response.get_json()['content'] == 'edited'

        body = client.get(f'/api/comments/{comment_id}/replies').get_json()
        assert body['total'] == 1

        response = client.delete(f'/api/comments/{comment_id}', headers=auth_header(author))
        assert response.status_code == 200
        assert client.get(f'/api/videos/{video.video_id}/comments').get_json()['total'] == 0

    def test_blank_text_is_business_error(self, client, make_user, make_video, auth_header):
        video = make_video(make_user(is_creator=True))
        author = make_user()

        response = client.post(
            f'/api/videos/{video.video_id}/comments',
            json={'text': '   '},
            headers=auth_header(author)
        )

        assert response.status_code == 400
        assert response.get_json()['code'] == 'M004'

    def test_missing_text_is_schema_error(self, client, make_user, make_video, auth_header):
        video = make_video(make_user(is_creator=True))
        author = make_user()

        response = client.post(f'/api/videos/{video.video_id}/comments', json={}, headers=auth_header(author))

        assert response.status_code == 422

    def test_comment_requires_login(self, client, make_user, make_video):
        video = make_video(make_user(is_creator=True))

        response = client.post(f'/api/videos/{video.video_id}/comments', json={'text': 'hi'})

        assert response.status_code == 401


class TestChannelAndUserRoutes:

    def test_subscribe(self, client, make_user, auth_header):
        channel = make_user(is_creator=True)
        fan = make_user()

        response = client.post(
            f'/api/channels/{channel.user_id}/subscribe',
            json={'subscribe': True},
            headers=auth_header(fan)
        )
        assert response.status_code == 200
        assert response.get_json()['is_subscribed'] is True
        assert response.get_json()['subscriber_count'] == 1

        body = client.get(f'/api/channels/{channel.user_id}', headers=auth_header(fan)).get_json()
        assert body['is_subscribed'] is True

    def test_self_subscribe(self, client, make_user, auth_header):
        channel = make_user(is_creator=True)

        response = client.post(
            f'/api/channels/{channel.user_id}/subscribe',
            json={'subscribe': True},
            headers=auth_header(channel)
        )

        assert response.status_code == 400
        assert response.get_json()['code'] == 'U003'

    def test_channels_by_ids(self, client, make_user):
        first = make_user(is_creator=True)
        second = make_user(is_creator=True)

        body = client.get(f'/api/channels?ids={first.user_id},{second.user_id}').get_json()

        assert {c['channel_id'] for c in body['channels']} == {first.user_id, second.user_id}

    def test_watch_history(self, client, make_user, make_video, auth_header):
        video = make_video(make_user(is_creator=True))
        viewer = make_user()
        headers = auth_header(viewer)

        client.post('/api/users/me/watch-history', json={'video_id': video.video_id, 'watch_time': 10}, headers=headers)
        response = client.post(
            '/api/users/me/watch-history',
            json={'video_id': video.video_id, 'watch_time': 42},
            headers=headers
        )
        assert response.status_code == 200

        body = client.get('/api/users/me/watch-history', headers=headers).get_json()
        assert body['total'] == 1
        assert body['history'][0]['watch_time'] == 42

    def test_public_profile_hides_email(self, client, make_user, auth_header):
        user = make_user()

        assert client.get(f'/api/users/{user.user_id}').get_json()['email'] is None
        assert client.get(f'/api/users/{user.user_id}', headers=auth_header(user)).get_json()['email'] == user.email


class TestSearchRoutes:

    def test_empty_query(self, client):
        response = client.get('/api/search')

        assert response.status_code == 400
        assert response.get_json()['code'] == 'S001'

    def test_search_and_suggestions(self, client, make_user, make_video):
        make_video(make_user(is_creator=True), title='Guitar lesson')

        body = client.get('/api/search?q=guitar').get_json()
        assert [v['title'] for v in body['videos']] == ['Guitar lesson']

        body = client.get('/api/search/suggestions?q=gu').get_json()
        assert body['suggestions'] == ['Guitar lesson']
