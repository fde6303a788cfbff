import pytest

from services.link_router import (
    LinkType,
    classify,
    extract_file_id,
    extract_urls,
    is_google_link,
)

SLIDES_ID = "1KocQY1Q3rQfZGl8BTNSG8fEqGh-XpUq0"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://drive.google.com/file/d/abc_DEF-123/view?usp=sharing", "abc_DEF-123"),
        ("https://docs.google.com/presentation/d/pres-ID_1/edit#slide=id.p", "pres-ID_1"),
        ("https://docs.google.com/document/d/docID42/edit?tab=t.0", "docID42"),
        ("https://docs.google.com/spreadsheets/d/sheet_9/edit#gid=0", "sheet_9"),
        ("https://drive.google.com/open?id=openID-7&authuser=0", "openID-7"),
        ("https://drive.google.com/uc?id=ucID_3&export=download", "ucID_3"),
        ("https://drive.google.com/uc?export=download&id=ucID_4", "ucID_4"),
    ],
)
def test_extract_file_id_from_known_shapes(url, expected):
    assert extract_file_id(url) == expected


def test_classify_slides_link_with_tracking_params():
    url = f"https://docs.google.com/presentation/d/{SLIDES_ID}/edit?usp=drive_link"
    link = classify(url)
    assert link.is_google_hosted is True
    assert link.file_id == SLIDES_ID
    assert link.link_type is LinkType.GOOGLE


def test_path_pattern_wins_over_id_param():
    url = "https://drive.google.com/file/d/pathID/view?id=queryID"
    assert extract_file_id(url) == "pathID"


def test_is_google_link_ignores_case_and_whitespace():
    assert is_google_link("   HTTPS://DRIVE.GOOGLE.COM/file/d/x/view  ")
    assert is_google_link("see docs.google.com/document/d/x")
    assert not is_google_link("https://example.com/file.pdf")


def test_classify_google_link_without_id():
    link = classify("https://drive.google.com/weird/no-id-here")
    assert link.is_google_hosted is True
    assert link.file_id is None


def test_classify_direct_link_skips_extraction():
    link = classify("https://cdn.example.com/file/d/looks-like-drive/a.pdf")
    assert link.is_google_hosted is False
    assert link.file_id is None
    assert link.link_type is LinkType.DIRECT


def test_extract_file_id_keeps_original_case():
    assert extract_file_id("https://drive.google.com/file/d/MiXeDcAsE/view") == "MiXeDcAsE"


def test_extract_file_id_empty():
    assert extract_file_id("   ") is None


def test_extract_urls_strips_trailing_punctuation():
    text = "check this: https://drive.google.com/file/d/abc/view, thanks!"
    assert extract_urls(text) == ["https://drive.google.com/file/d/abc/view"]
