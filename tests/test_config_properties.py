"""Property-based tests for configuration management."""

import os
from unittest.mock import patch

from hypothesis import given
from hypothesis import strategies as st

from pinfeed.config import MAX_ITEM_COUNT, MIN_ITEM_COUNT, Config, sanitize_item_count


class TestConfigProperties:
    """Property-based tests for Config."""

    @given(st.one_of(st.integers(), st.text(), st.none(), st.floats()))
    def test_item_count_always_in_range(self, raw):
        assert MIN_ITEM_COUNT <= sanitize_item_count(raw) <= MAX_ITEM_COUNT

    @given(st.integers(min_value=1, max_value=50))
    def test_in_range_counts_are_kept(self, count):
        assert sanitize_item_count(count) == count

    @given(
        st.text(
            alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd")),
            min_size=1,
            max_size=30,
        )
    )
    def test_username_from_environment(self, username):
        env = {"PINTEREST_USERNAME": username, "SETTINGS_FILE": "/nonexistent/settings.json"}
        with patch.dict(os.environ, env, clear=True):
            assert Config().get_username() == username
