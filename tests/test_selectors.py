"""Unit tests for candidate selection."""

from bs4 import BeautifulSoup

from deeper_api.scrapers.selectors import select_candidates


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestPrimaryStrategy:

    def test_known_container_classes_in_document_order(self):
        soup = soup_of("""
        <div class="drama-item" id="a"></div>
        <div class="card" id="b"></div>
        <div class="item" id="c"></div>
        """)
        selection = select_candidates(soup)

        assert selection.strategy == "primary"
        assert [el["id"] for el in selection] == ["a", "b", "c"]

    def test_generic_content_tag(self):
        selection = select_candidates(soup_of('<article id="x"><h3>Title</h3></article>'))

        assert selection.strategy == "primary"
        assert len(selection) == 1

    def test_element_matching_two_markers_selected_once(self):
        selection = select_candidates(soup_of('<div class="card item" id="a"></div>'))

        assert len(selection) == 1

    def test_primary_preferred_over_fallback(self):
        """Anchor-with-image patterns are ignored once a known container exists."""
        soup = soup_of("""
        <nav><a href="/"><img src="/logo.png" alt="Deeper Home"></a></nav>
        <div class="card" id="only"><h3>Queen of Tears</h3></div>
        <a href="/promo"><img src="/promo.png" alt="Promo Banner"></a>
        """)
        selection = select_candidates(soup)

        assert selection.strategy == "primary"
        assert [el.get("id") for el in selection] == ["only"]


class TestFallbackStrategy:

    def test_anchors_wrapping_images(self):
        soup = soup_of("""
        <div class="grid">
          <a href="/d/1" id="one"><img src="/1.jpg"></a>
          <a href="/about">About us</a>
          <a href="/d/2" id="two"><span><img data-src="/2.jpg"></span></a>
        </div>
        """)
        selection = select_candidates(soup)

        assert selection.strategy == "fallback"
        assert [el["id"] for el in selection] == ["one", "two"]

    def test_unrecognized_page_yields_nothing(self):
        selection = select_candidates(soup_of("<p>Maintenance</p><a href='/x'>text only</a>"))

        assert selection.strategy == "none"
        assert len(selection) == 0
        assert list(selection) == []
