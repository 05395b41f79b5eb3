"""Tests for appdrawer.errors."""

from pathlib import Path

from PIL import UnidentifiedImageError

from appdrawer.errors import (
    ERROR_MESSAGES,
    IconErrorCode,
    IconLoadError,
    classify_exception,
    format_error_for_user,
)


def test_every_code_has_a_message():
    assert set(ERROR_MESSAGES) == set(IconErrorCode)


def test_default_message_and_cause_details():
    cause = FileNotFoundError(2, "No such file or directory")
    error = IconLoadError(IconErrorCode.IO_FAILURE, name="app", path=Path("/x/app.png"), cause=cause)
    assert error.message == ERROR_MESSAGES[IconErrorCode.IO_FAILURE]
    assert "No such file" in error.details["original"]
    text = str(error)
    assert "Icon: app" in text
    assert "File: /x/app.png" in text


def test_to_dict():
    error = IconLoadError(IconErrorCode.NOT_FOUND, name="ghost")
    assert error.to_dict() == {
        "code": "NOT_FOUND",
        "message": ERROR_MESSAGES[IconErrorCode.NOT_FOUND],
        "name": "ghost",
        "path": None,
        "details": {},
    }


def test_error_is_raisable():
    try:
        raise IconLoadError(IconErrorCode.DECODE_FAILURE)
    except IconLoadError as exc:
        assert exc.code is IconErrorCode.DECODE_FAILURE


class TestClassifyException:
    def test_unidentified_image(self):
        error = classify_exception(UnidentifiedImageError("cannot identify image file"))
        assert error.code is IconErrorCode.DECODE_FAILURE

    def test_truncated_image(self):
        error = classify_exception(OSError("image file is truncated"))
        assert error.code is IconErrorCode.DECODE_FAILURE

    def test_missing_file(self):
        error = classify_exception(FileNotFoundError(2, "No such file"), name="a")
        assert error.code is IconErrorCode.IO_FAILURE
        assert error.name == "a"

    def test_os_error_with_errno(self):
        assert classify_exception(OSError(5, "I/O error")).code is IconErrorCode.IO_FAILURE

    def test_value_error(self):
        assert classify_exception(ValueError("bad")).code is IconErrorCode.DECODE_FAILURE

    def test_passthrough(self):
        original = IconLoadError(IconErrorCode.NOT_FOUND)
        assert classify_exception(original) is original

    def test_unknown_exception_keeps_type_name(self):
        error = classify_exception(RuntimeError("boom"))
        assert error.code is IconErrorCode.DECODE_FAILURE
        assert error.message.startswith("RuntimeError")


def test_format_error_for_user():
    error = IconLoadError(IconErrorCode.NOT_FOUND, name="ghost", path=Path("/a/ghost.svg"))
    text = format_error_for_user(error)
    assert "(ghost)" in text
    assert "ghost.svg" in text
    assert format_error_for_user(ValueError("x")).startswith(ERROR_MESSAGES[IconErrorCode.DECODE_FAILURE])
