from datetime import datetime, timedelta

import pytest

from app.models.watch_history import WatchHistory
from app.services.channel_service import ChannelService
from app.services.engagement_service import EngagementService
from app.services.user_service import UserService
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.extensions import db


class TestWatchHistory:

    def test_rewatch_keeps_single_row(self, make_user, make_video):
        viewer = make_user()
        video = make_video(make_user(is_creator=True))

        first = UserService.add_watch_history(viewer.user_id, video.video_id, 30)
        second = UserService.add_watch_history(viewer.user_id, video.video_id, 95)

        rows = db.session.query(WatchHistory).filter_by(user_id=viewer.user_id).all()
        assert len(rows) == 1
        assert rows[0].watch_time == 95
        assert second.watch_history_id == first.watch_history_id
        assert second.watched_at >= first.watched_at

    def test_missing_video(self, make_user):
        viewer = make_user()

        with pytest.raises(BusinessError) as exc:
            UserService.add_watch_history(viewer.user_id, 'no-such-video', 10)

        assert exc.value.error_enum == APIError.VIDEO_NOT_FOUND

    def test_history_most_recent_first(self, make_user, make_video):
        viewer = make_user()
        owner = make_user(is_creator=True)
        first_video = make_video(owner)
        second_video = make_video(owner)

        UserService.add_watch_history(viewer.user_id, first_video.video_id)
        UserService.add_watch_history(viewer.user_id, second_video.video_id)
        db.session.query(WatchHistory).filter_by(video_id=first_video.video_id).update(
            {WatchHistory.watched_at: datetime.utcnow() - timedelta(days=1)},
            synchronize_session=False
        )
        db.session.commit()

        result = UserService.get_watch_history(viewer.user_id)

        assert [h.video.video_id for h in result.history] == [second_video.video_id, first_video.video_id]
        assert result.total == 2


class TestProfile:

    def test_username_conflict(self, make_user):
        taken = make_user()
        user = make_user()

        with pytest.raises(BusinessError) as exc:
            UserService.update_profile(user.user_id, username=taken.username)

        assert exc.value.error_enum == APIError.AUTH_DUPLICATE_USERNAME

    def test_channel_name_only_for_creators(self, make_user):
        viewer = make_user()
        creator = make_user(is_creator=True)

        assert UserService.update_profile(viewer.user_id, channel_name='Nope').channel_name is None
        assert UserService.update_profile(creator.user_id, channel_name='New Name').channel_name == 'New Name'

    def test_email_only_for_self(self, make_user):
        user = make_user()

        assert UserService.get_profile(user.user_id).email is None
        assert UserService.get_profile(user.user_id, include_email=True).email == user.email

    def test_missing_user(self):
        with pytest.raises(BusinessError) as exc:
            UserService.get_profile('no-such-user')

        assert exc.value.error_enum == APIError.USER_NOT_FOUND


class TestUserLists:

    def test_private_videos_only_for_creators(self, make_user, make_video):
        creator = make_user(is_creator=True)
        make_video(creator, is_public=True)
        make_video(creator, is_public=False)

        assert UserService.get_my_videos(creator.user_id).total == 1
        assert UserService.get_my_videos(creator.user_id, include_private=True).total == 2

        viewer = make_user()
        make_video(viewer, is_public=False)
        assert UserService.get_my_videos(viewer.user_id, include_private=True).total == 0

    def test_subscriptions_list(self, make_user, make_video):
        channel = make_user(is_creator=True)
        make_video(channel)
        fan = make_user()
        EngagementService.set_subscription(fan.user_id, channel.user_id, True)

        subscriptions = UserService.get_subscriptions(fan.user_id)

        assert len(subscriptions) == 1
        assert subscriptions[0].channel.channel_id == channel.user_id
        assert subscriptions[0].channel.subscriber_count == 1
        assert subscriptions[0].channel.video_count == 1


class TestChannels:

    def test_channel_with_subscription_state(self, make_user, make_video):
        channel = make_user(is_creator=True)
        make_video(channel)
        make_video(channel, is_public=False)
        fan = make_user()
        EngagementService.set_subscription(fan.user_id, channel.user_id, True)

        dto = ChannelService.get_channel(channel.user_id, fan.user_id)

        assert dto.is_subscribed is True
        assert dto.subscriber_count == 1
        assert dto.video_count == 1
        assert ChannelService.get_channel(channel.user_id).is_subscribed is False

    def test_missing_channel(self):
        with pytest.raises(BusinessError) as exc:
            ChannelService.get_channel_videos('no-such-channel')

        assert exc.value.error_enum == APIError.CHANNEL_NOT_FOUND
