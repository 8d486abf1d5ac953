import pytest

from batch_ocr.services.sniffer import (
    FileKind,
    classify,
    determine_mime_type,
    is_image,
    mime_type_for,
)

PNG_SIG = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


@pytest.mark.parametrize("data", [b"", b"%", b"%P", b"%PD", b"\xff\xd8", b"\x89PN"])
def test_short_buffers_are_unknown(data):
    assert classify(data) is FileKind.UNKNOWN


def test_none_is_unknown():
    assert classify(None) is FileKind.UNKNOWN


def test_pdf_signature_wins_regardless_of_trailing_bytes():
    assert classify(b"%PDF") is FileKind.PDF
    assert classify(b"%PDF-1.7\n\xff\xd8\xff garbage") is FileKind.PDF


def test_jpeg_signature():
    assert classify(b"\xff\xd8\xff") is FileKind.JPEG
    assert classify(b"\xff\xd8\xff\xe0\x00\x10JFIF") is FileKind.JPEG


def test_png_signature_needs_all_eight_bytes():
    assert classify(PNG_SIG) is FileKind.PNG
    assert classify(PNG_SIG + b"IHDR") is FileKind.PNG
    assert classify(PNG_SIG[:7]) is FileKind.UNKNOWN


def test_real_images(docs):
    assert classify(docs.build_png_bytes()) is FileKind.PNG
    assert classify(docs.build_jpeg_bytes()) is FileKind.JPEG
    assert classify(docs.build_pdf_bytes("hello")) is FileKind.PDF


def test_is_image():
    assert is_image(b"\xff\xd8\xff\xe0") is True
    assert is_image(PNG_SIG) is True
    assert is_image(b"%PDF-1.4") is False
    assert is_image(b"GIF89a") is False


def test_mime_types():
    assert mime_type_for(FileKind.PDF) == "application/pdf"
    assert mime_type_for(FileKind.JPEG) == "image/jpeg"
    assert mime_type_for(FileKind.PNG) == "image/png"
    assert mime_type_for(FileKind.UNKNOWN) == "application/octet-stream"
    assert determine_mime_type(b"plain text") == "application/octet-stream"
