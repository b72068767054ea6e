from page_analyzer.checker.extractor import extract_markup
from page_analyzer.models import PageMarkup

FULL_PAGE = """
<!DOCTYPE html>
<html>
<head>
    <title>  Test Page Title  </title>
    <meta name="description" content="  Test page description ">
</head>
<body>
    <h1>Test <span>H1</span> Header</h1>
    <h1>Second header</h1>
</body>
</html>
"""


def test_extract_markup_reads_first_title_h1_and_description() -> None:
    markup = extract_markup(FULL_PAGE)

    assert markup == PageMarkup(
        title="Test Page Title",
        h1="Test H1 Header",
        description="Test page description",
    )


def test_extract_markup_defaults_to_empty_strings() -> None:
    markup = extract_markup("<html><body><p>No seo here</p></body></html>")

    assert markup.title == ""
    assert markup.h1 == ""
    assert markup.description == ""


def test_extract_markup_ignores_description_without_content() -> None:
    html = '<meta name="description"><meta name="keywords" content="a, b">'
    assert extract_markup(html).description == ""


def test_extract_markup_matches_description_name_case_insensitively() -> None:
    html = '<META NAME="Description" CONTENT="Shouty page">'
    assert extract_markup(html).description == "Shouty page"


def test_extract_markup_tolerates_broken_markup() -> None:
    html = "<html><head><title>Broken page</title><meta name=description content='x'><body><h1>Half <b>bold</h1><p>unclosed <div>"
    markup = extract_markup(html)

    assert markup == PageMarkup(title="Broken page", h1="Half bold", description="x")


def test_extract_markup_joins_inline_elements_without_extra_spaces() -> None:
    markup = extract_markup("<title>Shop</title><h1>Price: $<span>10</span>.99</h1>")

    assert markup.title == "Shop"
    assert markup.h1 == "Price: $10.99"


def test_extract_markup_collapses_inner_whitespace() -> None:
    markup = extract_markup("<title> Shop \n  Name </title><h1>\n  Multi\n   line\t<em>header</em>  </h1>")

    assert markup.title == "Shop Name"
    assert markup.h1 == "Multi line header"


def test_extract_markup_handles_empty_and_missing_body() -> None:
    assert extract_markup("") == PageMarkup()
    assert extract_markup(None) == PageMarkup()
