from starlette.requests import Request

from fileguard.utils import (
    client_identifier,
    forwarded_client,
    has_allowed_prefix,
    media_headers,
    normalize_request_path,
)


def make_request(client=("198.51.100.4", 5123), headers=None) -> Request:
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    scope = {"type": "http", "method": "GET", "path": "/", "headers": raw_headers}
    if client is not None:
        scope["client"] = client
    return Request(scope)


def test_normalize_collapses_dot_segments():
    assert normalize_request_path("/videos/./intro.mp4") == "/videos/intro.mp4"
    assert normalize_request_path("/videos/../pdfs/week1.pdf") == "/pdfs/week1.pdf"
    assert normalize_request_path("//videos//intro.mp4") == "/videos/intro.mp4"


def test_normalize_strips_leading_parent_segments():
    assert normalize_request_path("../../etc/passwd") == "etc/passwd"
    assert normalize_request_path("..\\..\\secret.txt") == "secret.txt"
    assert normalize_request_path("/../../videos/intro.mp4") == "/videos/intro.mp4"


def test_normalized_path_never_starts_with_parent_segment():
    for raw in ("../a", "../../../a/b", "./../../x", "../..//../y", "a/../../../z"):
        assert not normalize_request_path(raw).startswith("../")


def test_normalize_keeps_trailing_separator():
    assert normalize_request_path("/videos/") == "/videos/"
    assert normalize_request_path("") == "."


def test_allowed_prefixes():
    assert has_allowed_prefix("/videos/intro.mp4")
    assert has_allowed_prefix("/gallery/campus.jpg")
    assert not has_allowed_prefix("/videos")
    assert not has_allowed_prefix("videos/intro.mp4")
    assert not has_allowed_prefix("/videosx/intro.mp4")
    assert not has_allowed_prefix("/secret.txt")


def test_client_identifier_uses_source_address():
    assert client_identifier(make_request()) == "198.51.100.4"


def test_client_identifier_falls_back_to_unknown():
    assert client_identifier(make_request(client=None)) == "unknown"


def test_forwarded_header_only_used_behind_trusted_proxy():
    request = make_request(headers={"X-Forwarded-For": "10.9.9.9, 203.0.113.7"})
    assert client_identifier(request) == "198.51.100.4"
    assert client_identifier(request, trust_proxy=True) == "203.0.113.7"


def test_forwarded_client_takes_entry_added_by_proxy():
    assert forwarded_client("203.0.113.7") == "203.0.113.7"
    assert forwarded_client("spoofed, 10.0.0.1 ,203.0.113.7 ") == "203.0.113.7"
    assert forwarded_client("203.0.113.7, ") is None
    assert forwarded_client(None) is None


def test_media_headers_for_video_and_pdf():
    video = media_headers("/videos/intro.MP4")
    assert video["Accept-Ranges"] == "bytes"
    assert video["Cache-Control"] == "public, max-age=31536000"

    pdf = media_headers("/pdfs/week1.pdf")
    assert pdf["Content-Disposition"] == 'inline; filename="week1.pdf"'
    assert "Accept-Ranges" not in pdf

    image = media_headers("/gallery/campus.jpg")
    assert image == {"Cross-Origin-Resource-Policy": "cross-origin"}


def test_media_headers_encode_non_ascii_pdf_names():
    pdf = media_headers("/pdfs/한국어.pdf")
    assert pdf["Content-Disposition"].startswith("inline; filename*=utf-8''")
    pdf["Content-Disposition"].encode("latin-1")
