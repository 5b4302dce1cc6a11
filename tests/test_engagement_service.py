import pytest
from sqlalchemy.exc import IntegrityError

from app.models.subscription import Subscription
from app.models.video import Video
from app.models.video_like import VideoLike
from app.services.engagement_service import EngagementService
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db


def _like_rows(video_id):
    return db.session.query(VideoLike).filter_by(video_id=video_id).all()


class TestSetReaction:

    def test_like_toggle_then_dislike_scenario(self, make_user, make_video):
        owner = make_user(is_creator=True)
        viewer = make_user()
        video = make_video(owner)

        result = EngagementService.set_reaction(viewer.user_id, video.video_id, True)
        assert (result.likes, result.dislikes) == (1, 0)
        assert result.user_reaction == 'like'

        result = EngagementService.set_reaction(viewer.user_id, video.video_id, True)
        assert (result.likes, result.dislikes) == (0, 0)
        assert result.user_reaction is None
        assert _like_rows(video.video_id) == []

        result = EngagementService.set_reaction(viewer.user_id, video.video_id, False)
        assert (result.likes, result.dislikes) == (0, 1)
        assert result.user_reaction == 'dislike'

    def test_like_then_dislike_flips_single_row(self, make_user, make_video):
        owner = make_user(is_creator=True)
        viewer = make_user()
        video = make_video(owner)

        EngagementService.set_reaction(viewer.user_id, video.video_id, True)
        result = EngagementService.set_reaction(viewer.user_id, video.video_id, False)

        assert (result.likes, result.dislikes) == (0, 1)
        rows = _like_rows(video.video_id)
        assert len(rows) == 1
        assert rows[0].is_like is False

    def test_counters_match_rows_across_users(self, make_user, make_video):
        owner = make_user(is_creator=True)
        video = make_video(owner)
        viewers = [make_user() for _ in range(3)]

        EngagementService.set_reaction(viewers[0].user_id, video.video_id, True)
        EngagementService.set_reaction(viewers[1].user_id, video.video_id, True)
        result = EngagementService.set_reaction(viewers[2].user_id, video.video_id, False)

        assert (result.likes, result.dislikes) == (2, 1)
        stored = db.session.query(Video).filter_by(video_id=video.video_id).one()
        assert stored.like_count == sum(1 for r in _like_rows(video.video_id) if r.is_like)
        assert stored.dislike_count == sum(1 for r in _like_rows(video.video_id) if not r.is_like)

    def test_missing_video(self, make_user):
        viewer = make_user()

        with pytest.raises(BusinessError) as exc:
            EngagementService.set_reaction(viewer.user_id, 'no-such-video', True)

        assert exc.value.error_enum == APIError.VIDEO_NOT_FOUND

    def test_insert_race_is_replayed_on_update_path(self, make_user, make_video, monkeypatch):
        owner = make_user(is_creator=True)
        viewer = make_user()
        video = make_video(owner)
        video_id, viewer_id = video.video_id, viewer.user_id

        original = EngagementService._apply_reaction
        calls = []

        def racing_apply(user_id, target_video_id, is_like):
            calls.append(is_like)
            if len(calls) == 1:
                # 동시에 들어온 "좋아요" 요청이 먼저 행을 만든 상황
                db.session.add(VideoLike(user_id=user_id, video_id=target_video_id, is_like=True))
                db.session.query(Video).filter_by(video_id=target_video_id).update(
                    {Video.like_count: Video.like_count + 1}, synchronize_session=False
                )
                db.session.commit()
                raise IntegrityError('INSERT INTO video_like', {}, Exception('duplicate'))
            return original(user_id, target_video_id, is_like)

        monkeypatch.setattr(EngagementService, '_apply_reaction', staticmethod(racing_apply))

        result = EngagementService.set_reaction(viewer_id, video_id, False)

        assert len(calls) == 2
        assert (result.likes, result.dislikes) == (0, 1)
        assert len(_like_rows(video_id)) == 1


class TestSetSubscription:

    def test_subscribe_is_idempotent(self, make_user):
        channel = make_user(is_creator=True)
        fan = make_user()

        first = EngagementService.set_subscription(fan.user_id, channel.user_id, True)
        second = EngagementService.set_subscription(fan.user_id, channel.user_id, True)

        assert first.is_subscribed and second.is_subscribed
        assert second.subscriber_count == 1
        assert db.session.query(Subscription).count() == 1

    def test_unsubscribe_and_noop(self, make_user):
        channel = make_user(is_creator=True)
        fan = make_user()

        EngagementService.set_subscription(fan.user_id, channel.user_id, True)
        result = EngagementService.set_subscription(fan.user_id, channel.user_id, False)
        assert result.is_subscribed is False
        assert result.subscriber_count == 0

        result = EngagementService.set_subscription(fan.user_id, channel.user_id, False)
        assert result.is_subscribed is False
        assert result.subscriber_count == 0

    def test_self_subscription_rejected(self, make_user):
        channel = make_user(is_creator=True)

        with pytest.raises(BusinessError) as exc:
            EngagementService.set_subscription(channel.user_id, channel.user_id, True)

        assert exc.value.error_enum == APIError.SUBSCRIBE_SELF
        assert exc.value.status == 400

    def test_missing_channel(self, make_user):
        fan = make_user()

        with pytest.raises(BusinessError) as exc:
            EngagementService.set_subscription(fan.user_id, 'no-such-channel', True)

        assert exc.value.error_enum == APIError.CHANNEL_NOT_FOUND

    def test_is_subscribed(self, make_user):
        channel = make_user(is_creator=True)
        fan = make_user()

        assert EngagementService.is_subscribed(fan.user_id, channel.user_id) is False
        assert EngagementService.is_subscribed(None, channel.user_id) is False

        EngagementService.set_subscription(fan.user_id, channel.user_id, True)
        assert EngagementService.is_subscribed(fan.user_id, channel.user_id) is True


class TestRecordView:

    def test_viewer_increments_video_and_channel(self, make_user, make_video):
        owner = make_user(is_creator=True)
        viewer = make_user()
        video = make_video(owner)

        assert EngagementService.record_view(video.video_id, viewer.user_id) == 1
        assert EngagementService.record_view(video.video_id, None) == 2

        db.session.refresh(owner)
        assert owner.total_views == 2

    def test_owner_view_not_counted(self, make_user, make_video):
        owner = make_user(is_creator=True)
        video = make_video(owner)

        assert EngagementService.record_view(video.video_id, owner.user_id) == 0

        db.session.refresh(owner)
        assert owner.total_views == 0

    def test_missing_video(self):
        with pytest.raises(BusinessError) as exc:
            EngagementService.record_view('no-such-video', None)

        assert exc.value.error_enum == APIError.VIDEO_NOT_FOUND
