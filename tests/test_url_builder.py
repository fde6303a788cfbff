from urllib.parse import parse_qs, urlsplit

from services import url_builder


def test_drive_templates():
    assert url_builder.drive_direct_download("X") == "https://drive.google.com/uc?export=download&id=X"
    assert url_builder.drive_direct_view("X") == "https://drive.google.com/uc?export=view&id=X"


def test_docs_templates():
    assert url_builder.slides_export_pptx("X") == "https://docs.google.com/presentation/d/X/export/pptx"
    assert url_builder.slides_export_pdf("X") == "https://docs.google.com/presentation/d/X/export/pdf"
    assert url_builder.document_export_pdf("X") == "https://docs.google.com/document/d/X/export?format=pdf"
    assert (
        url_builder.slides_embed("X")
        == "https://docs.google.com/presentation/d/X/embed?start=false&loop=false&delayms=3000"
    )


def test_encode_uri_component_matches_javascript():
    assert url_builder.encode_uri_component("a b/c?d=e&f") == "a%20b%2Fc%3Fd%3De%26f"
    assert url_builder.encode_uri_component("-_.!~*'()") == "-_.!~*'()"
    assert url_builder.encode_uri_component("é") == "%C3%A9"


def test_docs_viewer_wraps_encoded_url():
    url = "https://drive.google.com/uc?export=download&id=X"
    assert url_builder.docs_viewer(url) == (
        "https://docs.google.com/gview?embedded=true"
        "&url=https%3A%2F%2Fdrive.google.com%2Fuc%3Fexport%3Ddownload%26id%3DX"
    )


def test_viewer_parameter_decodes_to_original():
    original = "https://files.example.com/decks/Q3 plan+final.pptx?sig=a/b&v=2#p1"

    gview = parse_qs(urlsplit(url_builder.docs_viewer(original)).query)
    office = parse_qs(urlsplit(url_builder.office_viewer(original)).query)

    assert gview["url"] == [original]
    assert office["src"] == [original]
