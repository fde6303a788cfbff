from services.link_converter import MediaType, resolve
from utils.message_builder import (
    TYPE_CALLBACK_PREFIX,
    VIEWER_TOGGLE_CALLBACK,
    build_keyboard,
    render_help,
    render_result,
)

SLIDES = "https://docs.google.com/presentation/d/abc_123/edit"


def _buttons(markup):
    return [button for row in markup.inline_keyboard for button in row]


def test_render_error_only():
    text = render_result(resolve("", MediaType.PDF), MediaType.PDF)
    assert text.startswith("❌")
    assert "Preview URL" not in text


def test_render_result_shows_urls_in_code_spans():
    result = resolve(SLIDES, MediaType.PDF)
    text = render_result(result, MediaType.PDF)
    assert f"`{result.export_url}`" in text
    assert f"`{result.preview_url}`" in text
    assert "abc\\_123" not in text  # IDs inside code spans are not escaped


def test_keyboard_has_viewer_toggle_only_for_ppt():
    ppt = build_keyboard(resolve(SLIDES, MediaType.PPT), MediaType.PPT, office_viewer_enabled=True)
    pdf = build_keyboard(resolve(SLIDES, MediaType.PDF), MediaType.PDF)

    ppt_data = [b.callback_data for b in _buttons(ppt)]
    pdf_data = [b.callback_data for b in _buttons(pdf)]
    assert VIEWER_TOGGLE_CALLBACK in ppt_data
    assert VIEWER_TOGGLE_CALLBACK not in pdf_data
    assert f"{TYPE_CALLBACK_PREFIX}audio" in pdf_data


def test_keyboard_marks_selected_type():
    markup = build_keyboard(resolve(SLIDES, MediaType.PDF), MediaType.PDF)
    selected = [b.text for b in _buttons(markup) if b.text.startswith("✅")]
    assert selected == ["✅ PDF"]


def test_keyboard_link_buttons():
    result = resolve(SLIDES, MediaType.PDF)
    urls = [b.url for b in _buttons(build_keyboard(result, MediaType.PDF)) if b.url]
    assert urls == [result.export_url, result.preview_url]


def test_keyboard_skips_non_http_links():
    result = resolve("not a url at all", MediaType.IMAGE)
    assert not [b for b in _buttons(build_keyboard(result, MediaType.IMAGE)) if b.url]


def test_help_lists_every_type():
    text = render_help()
    for media_type in MediaType:
        assert f"`{media_type.value}`" in text


def test_help_includes_type_descriptions():
    text = render_help()
    assert "Portable Document Format" in text
    assert "Sound content in formats like MP3" in text
