"""Tests for post-processing rendered page HTML."""

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from linktoarchive.postprocess import PagePostprocessor, postprocess_html, should_skip_anchor
from linktoarchive.renderer import render_inline_link

PAGE = (
    '<div class="mw-parser-output">'
    "<p>See "
    '<a rel="nofollow" class="external text" href="https://example.com/page">Example</a>'
    " and "
    '<a class="external free" href="https://example.onion/">https://example.onion/</a>.'
    "</p>"
    '<p><a href="/wiki/Internal">internal</a></p>'
    "</div>"
)


def _archive_links(html):
    return BeautifulSoup(html, "html.parser").select("a.mw-archive-link")


def test_regular_and_onion_links_are_annotated(catalog):
    result = postprocess_html(PAGE, lookup=catalog)

    assert result.annotated == 2
    links = _archive_links(result.html)
    assert [a["href"] for a in links] == [
        "https://web.archive.org/web/https://example.com/page",
        "https://archive.today/https://example.com/page",
        "https://example.onion/",
    ]
    assert [a["class"] for a in links] == [
        ["mw-archive-link", "archive-web"],
        ["mw-archive-link", "archive-today"],
        ["mw-archive-link", "archive-onion"],
    ]
    assert [a.get_text() for a in links] == ["[archive.org]", "[archive.today]", "[onion]"]
    assert links[0]["title"] == "Link to archived version on web.archive.org"
    assert links[2]["title"] == "This is an .onion link"


def test_archive_links_follow_the_original_separated_by_spaces(catalog):
    html = '<p><a class="external" href="https://example.com/">x</a>.</p>'
    result = postprocess_html(html, lookup=catalog)

    original = BeautifulSoup(result.html, "html.parser").find("a", class_="external")
    siblings = list(original.next_siblings)
    assert siblings[0] == " "
    assert siblings[1]["class"] == ["mw-archive-link", "archive-web"]
    assert siblings[2] == " "
    assert siblings[3]["class"] == ["mw-archive-link", "archive-today"]
    assert siblings[4] == "."


def test_rel_and_target_default_when_missing(catalog):
    html = '<a class="external" href="https://example.com/">x</a>'
    web = _archive_links(postprocess_html(html, lookup=catalog).html)[0]
    assert web["rel"] == ["noopener", "noreferrer"]
    assert web["target"] == "_blank"


def test_rel_and_target_copied_from_original(catalog):
    html = '<a class="external" rel="nofollow" target="_top" href="https://example.com/">x</a>'
    for anchor in _archive_links(postprocess_html(html, lookup=catalog).html):
        assert anchor["rel"] == ["nofollow"]
        assert anchor["target"] == "_top"


def test_skipped_links_are_untouched(catalog):
    html = (
        '<a class="external" href="https://wiki.example/index.php?title=A&amp;action=edit">edit</a>'
        '<a class="external" href="mailto:someone@example.com">mail</a>'
        '<a class="external" href="https://example.com/"><img src="/thumb.png" alt=""></a>'
        '<a class="external image" href="https://example.com/img">image</a>'
        '<a class="external archive-processed" href="https://example.com/done">done</a>'
        '<a class="external" href="">empty</a>'
    )
    result = postprocess_html(html, lookup=catalog)
    assert result.annotated == 0
    assert result.html == html


def test_second_pass_adds_nothing(catalog):
    first = postprocess_html(PAGE, lookup=catalog)
    second = postprocess_html(first.html, lookup=catalog)

    assert second.annotated == 0
    assert second.html == first.html
    assert len(_archive_links(second.html)) == 3


def test_content_without_markup_passes_through(catalog):
    assert postprocess_html("", lookup=catalog).html == ""
    assert postprocess_html(None, lookup=catalog).html == ""
    assert postprocess_html("plain text https://example.com/", lookup=catalog).html == (
        "plain text https://example.com/"
    )


def test_unbalanced_markup_is_still_annotated(catalog):
    html = '<p>Broken <b><a class="external" href="https://example.com/x">link'
    result = postprocess_html(html, lookup=catalog)
    assert result.annotated == 1
    assert "https://web.archive.org/web/https://example.com/x" in result.html


def test_parser_failure_returns_original_markup(monkeypatch, catalog, caplog):
    def rejecting_parser(*args, **kwargs):
        raise ParserRejectedMarkup("markup rejected")

    monkeypatch.setattr("linktoarchive.postprocess.BeautifulSoup", rejecting_parser)

    with caplog.at_level("WARNING", logger="linktoarchive.postprocess"):
        result = PagePostprocessor(lookup=catalog).process(PAGE)

    assert result.html == PAGE
    assert result.annotated == 0
    assert "could not parse" in caplog.text


def test_should_skip_anchor_detects_existing_archive_sibling():
    soup = BeautifulSoup(
        '<a class="external" href="https://example.com/">x</a> '
        '<a class="mw-archive-link archive-web" href="https://web.archive.org/web/https://example.com/">[a]</a>'
        '<a class="external" href="https://example.org/">y</a>',
        "html.parser",
    )
    first, _, second = soup.find_all("a")
    assert should_skip_anchor(first) is True
    assert should_skip_anchor(second) is False


def test_strategies_emit_equivalent_archive_anchors(catalog):
    url = "https://example.com/page"
    attribs = {"class": "external text", "rel": "nofollow"}

    inline = render_inline_link(url, "Example", attribs, "text", lookup=catalog)
    page = f'<a class="external text" rel="nofollow" href="{url}">Example</a>'
    processed = postprocess_html(page, lookup=catalog)

    inline_anchors = BeautifulSoup(inline.html, "html.parser").select("sup a")
    processed_anchors = _archive_links(processed.html)
    assert [a.attrs for a in inline_anchors] == [a.attrs for a in processed_anchors]
    assert [a.get_text() for a in inline_anchors] == [a.get_text() for a in processed_anchors]


def test_custom_external_class(catalog):
    from linktoarchive.models import LinkToArchiveConfig

    settings = LinkToArchiveConfig.from_dict({"links": {"external_class": "extlink"}})
    html = '<a class="extlink" href="https://example.com/">x</a><a class="external" href="https://example.org/">y</a>'
    result = PagePostprocessor(settings, catalog).process(html)
    assert result.annotated == 1
    assert [a["href"] for a in _archive_links(result.html)][0] == "https://web.archive.org/web/https://example.com/"


def test_rejected_region_does_not_block_the_rest_of_the_page(catalog):
    html = (
        '<p><a class="external" href="https://a.example/">a</a></p>'
        "<p><![foo bar]></p>"
        '<p><a class="external" href="https://b.example/">b</a></p>'
    )
    result = postprocess_html(html, lookup=catalog)

    assert result.annotated == 2
    hrefs = [a["href"] for a in _archive_links(result.html)]
    assert "https://web.archive.org/web/https://a.example/" in hrefs
    assert "https://archive.today/https://b.example/" in hrefs


def test_lenient_reparse_keeps_fragment_shape(monkeypatch, catalog):
    real_soup = BeautifulSoup

    def strict_parser_rejects(markup, features=None, *args, **kwargs):
        if features == "html.parser":
            raise ParserRejectedMarkup("markup rejected")
        return real_soup(markup, features, *args, **kwargs)

    monkeypatch.setattr("linktoarchive.postprocess.BeautifulSoup", strict_parser_rejects)

    html = '<p>See <a class="external" href="https://example.com/">x</a></p>'
    result = PagePostprocessor(lookup=catalog).process(html)

    assert result.annotated == 1
    assert result.html.startswith("<p>See ")
    assert "<body" not in result.html
    assert "<html" not in result.html
    assert len(_archive_links(result.html)) == 2


def test_default_lookup_uses_message_catalog():
    result = postprocess_html('<a class="external" href="https://example.onion/">x</a>')

    onion = _archive_links(result.html)[0]
    assert onion.get_text() == "[onion]"
    assert onion["title"] == "This is an .onion link"
