from datetime import datetime, timedelta

import pytest

from app.services.search_service import SearchService
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def creator(make_user):
    return make_user(is_creator=True, channel_name='Kitchen Lab')


class TestVideoSearch:

    def test_title_and_description_match_case_insensitively(self, creator, make_video):
        by_title = make_video(creator, title='Learn PYTHON fast', created_at=NOW)
        by_description = make_video(creator, title='Other', description='a python tutorial', created_at=NOW)
        make_video(creator, title='Cooking pasta', description='no match here', created_at=NOW)

        result = SearchService.search('Python', now=NOW)

        assert {v.video_id for v in result.videos} == {by_title.video_id, by_description.video_id}
        assert result.channels is None
        assert result.total_results == 2

    def test_tag_requires_exact_element(self, creator, make_video):
        tagged = make_video(creator, title='Untitled', description='', tags=['python', 'tutorial'], created_at=NOW)

        assert [v.video_id for v in SearchService.search('python', now=NOW).videos] == [tagged.video_id]
        assert SearchService.search('pyth', now=NOW).videos == []

    def test_tag_matches_are_paged_in_query(self, creator, make_video):
        popular = make_video(creator, title='A', description='', tags=['python'], view_count=50, created_at=NOW)
        quiet = make_video(creator, title='B', description='', tags=['python'], view_count=5, created_at=NOW)
        make_video(creator, title='C', description='', tags=['java'], view_count=100, created_at=NOW)

        first = SearchService.search('python', sort_by='view_count', limit=1, offset=0, now=NOW)
        second = SearchService.search('python', sort_by='view_count', limit=1, offset=1, now=NOW)

        assert [v.video_id for v in first.videos] == [popular.video_id]
        assert [v.video_id for v in second.videos] == [quiet.video_id]

    def test_private_videos_excluded(self, creator, make_video):
        make_video(creator, title='secret python', is_public=False, created_at=NOW)

        assert SearchService.search('python', now=NOW).videos == []

    def test_upload_date_window(self, creator, make_video):
        recent = make_video(creator, title='python recent', created_at=NOW - timedelta(days=2))
        old = make_video(creator, title='python old', created_at=NOW - timedelta(days=10))

        week = SearchService.search('python', upload_date='week', now=NOW)
        month = SearchService.search('python', upload_date='month', now=NOW)

        assert [v.video_id for v in week.videos] == [recent.video_id]
        assert {v.video_id for v in month.videos} == {recent.video_id, old.video_id}

    def test_category_filter(self, creator, make_video):
        music = make_video(creator, title='python song', category='Music', created_at=NOW)
        make_video(creator, title='python lecture', category='Education', created_at=NOW)

        result = SearchService.search('python', category='Music', now=NOW)
        assert [v.video_id for v in result.videos] == [music.video_id]

        result = SearchService.search('python', category='All', now=NOW)
        assert len(result.videos) == 2

    def test_sort_by_view_count(self, creator, make_video):
        low = make_video(creator, title='python a', view_count=5, created_at=NOW)
        high = make_video(creator, title='python b', view_count=50, created_at=NOW)

        result = SearchService.search('python', sort_by='view_count', now=NOW)

        assert [v.video_id for v in result.videos] == [high.video_id, low.video_id]

    @pytest.mark.parametrize('query', ['', '   ', None])
    def test_empty_query_rejected(self, query):
        with pytest.raises(BusinessError) as exc:
            SearchService.search(query)

        assert exc.value.error_enum == APIError.SEARCH_QUERY_REQUIRED


class TestChannelSearch:

    def test_channels_sorted_by_subscribers(self, make_user):
        small = make_user(is_creator=True, channel_name='Python Small', subscriber_count=3)
        big = make_user(is_creator=True, channel_name='Python Big', subscriber_count=30)
        make_user(is_creator=False, username='python_viewer')

        result = SearchService.search('python', search_type='channel')

        assert [c.channel_id for c in result.channels] == [big.user_id, small.user_id]
        assert result.videos is None

    def test_all_type_returns_both(self, creator, make_video):
        video = make_video(creator, title='Kitchen tour', created_at=NOW)

        result = SearchService.search('kitchen', search_type='all', now=NOW)

        assert [v.video_id for v in result.videos] == [video.video_id]
        assert [c.channel_id for c in result.channels] == [creator.user_id]
        assert result.total_results == 2


class TestSuggestions:

    def test_short_query_returns_nothing(self, creator, make_video):
        make_video(creator, title='Kitchen tour')

        assert SearchService.suggestions('k') == []
        assert SearchService.suggestions(None) == []

    def test_titles_and_channel_names(self, creator, make_video):
        make_video(creator, title='Kitchen tour')

        suggestions = SearchService.suggestions('kit')

        assert 'Kitchen tour' in suggestions
        assert 'Kitchen Lab' in suggestions
        assert len(suggestions) <= 8
