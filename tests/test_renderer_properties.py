"""Property-based tests for the HTML renderer."""

import re

from hypothesis import given
from hypothesis import strategies as st

from pinfeed.models import FeedItem
from pinfeed.renderer import Renderer

ALT_PATTERN = re.compile(r'alt="([^"]*)"')


class TestRendererProperties:
    """Property-based tests for Renderer."""

    @given(st.lists(st.text(max_size=60), min_size=1, max_size=10))
    def test_titles_never_break_the_alt_attribute(self, titles):
        """
        For any titles, each rendered alt attribute stays inside its quotes
        and no raw markup characters leak from the title.
        """
        items = [
            FeedItem("https://i.pinimg.com/a.jpg", "https://e.com/a", title)
            for title in titles
        ]

        output = Renderer().render(items)

        alts = ALT_PATTERN.findall(output)
        assert len(alts) == len(titles)
        for alt in alts:
            assert "<" not in alt
            assert ">" not in alt
