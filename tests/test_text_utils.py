from app.utils.text import (
    calculate_reading_time,
    create_slug,
    generate_meta_description,
    is_valid_slug,
    strip_html,
    truncate_text,
)


def test_create_slug_basic():
    assert create_slug("Hello, World!") == "hello-world"
    assert create_slug("  --Already-Slugged--  ") == "already-slugged"


def test_create_slug_transliterates():
    assert create_slug("Yapay Zeka ve Öğrenme Şekilleri") == "yapay-zeka-ve-ogrenme-sekilleri"
    assert create_slug("Café Crème Brûlée") == "cafe-creme-brulee"
    assert create_slug("Straße") == "strasse"


def test_create_slug_empty_when_nothing_usable():
    assert create_slug("!!!") == ""
    assert create_slug("日本語") == ""


def test_is_valid_slug():
    assert is_valid_slug("a-b-c1")
    assert not is_valid_slug("-a")
    assert not is_valid_slug("a--b")
    assert not is_valid_slug("A")


def test_reading_time():
    assert calculate_reading_time("") == 0
    assert calculate_reading_time("<p>" + "w " * 200 + "</p>") == 1
    assert calculate_reading_time("<p>" + "w " * 201 + "</p>") == 2


def test_strip_html():
    assert strip_html("<h2>Title</h2><p>Body <strong>bold</strong></p>") == "TitleBody bold"


def test_meta_description_fits_limit():
    text = "<p>" + "lorem ipsum " * 40 + "</p>"
    description = generate_meta_description(text)
    assert len(description) <= 160
    assert description.endswith("...")
    assert generate_meta_description("<p>Short</p>") == "Short"


def test_truncate_text():
    assert truncate_text("abc", 5) == "abc"
    assert truncate_text("abcdef", 3) == "abc..."
