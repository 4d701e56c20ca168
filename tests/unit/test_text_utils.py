from formio_import.shared.utils.text_utils import TextUtils


def test_utf16_length_matches_code_units() -> None:
    assert TextUtils.utf16_length("Førenamn") == 8
    assert TextUtils.utf16_length("😀") == 2
    assert TextUtils.utf16_length("a😀b") == 4


def test_utf16_length_of_empty_values() -> None:
    assert TextUtils.utf16_length("") == 0
    assert TextUtils.utf16_length(None) == 0
