import pytest

from storagehub.utils import derive_file_type, drive_content, parse_drive_content


@pytest.mark.parametrize("name,expected", [
    ("report.v2.tar.gz", "gz"),
    ("README", "file"),
    ("photo.JPG", "JPG"),
    (".bashrc", "bashrc"),
    ("trailing.", "file"),
    ("", "file"),
])
def test_derive_file_type(name, expected):
    assert derive_file_type(name) == expected


def test_drive_content_is_parseable():
    content = drive_content("1AbC_xyz")
    assert content == "Drive File ID: 1AbC_xyz"
    assert parse_drive_content(content) == "1AbC_xyz"


def test_inline_content_has_no_drive_id():
    assert parse_drive_content("just some text") is None
    assert parse_drive_content(None) is None
