"""Property-based tests for image item extraction."""

from hypothesis import given
from hypothesis import strategies as st

from pinfeed.extractor import ItemExtractor
from pinfeed.models import ParsedItem

slugs = st.text(
    alphabet=st.characters(whitelist_categories=("Ll", "Nd")), min_size=1, max_size=12
)

parsed_items = st.builds(
    lambda slug, has_image: ParsedItem(
        description_html=(
            f'<a href="/pin/{slug}/"><img src="http://x/{slug}.jpg"></a>{slug}'
            if has_image
            else f"<p>{slug}</p>"
        ),
        link=f"https://example.com/pin/{slug}",
        title=slug,
    ),
    slugs,
    st.booleans(),
)


class TestItemExtractorProperties:
    """Property-based tests for ItemExtractor."""

    @given(st.lists(parsed_items, max_size=30), st.integers(min_value=1, max_value=50))
    def test_result_is_capped_image_subsequence(self, items, max_items):
        """
        Every extracted item carries an image, the result never exceeds the
        cap or the number of image-bearing items, and feed order is kept.
        """
        extractor = ItemExtractor()

        result = extractor.extract(items, max_items)

        with_image = [i for i in items if "<img" in i.description_html]
        assert len(result) == min(max_items, len(with_image))
        assert [r.link for r in result] == [i.link for i in with_image[: len(result)]]
        assert all(r.image_url for r in result)

    @given(st.lists(parsed_items, max_size=20), st.integers(min_value=1, max_value=50))
    def test_extraction_is_deterministic(self, items, max_items):
        extractor = ItemExtractor()

        assert extractor.extract(items, max_items) == extractor.extract(items, max_items)
