import struct

import pytest

from core.enums import RegistryValueType
from extractors.exceptions import DecodeError, TruncatedValueError, UnsupportedTypeError
from extractors.system.registry.values import (
    DecodedValue,
    ValueKind,
    decode_recent_docs_blob,
    decode_value,
)


def _utf16(text: str) -> bytes:
    return text.encode("utf-16-le")


class TestStringValues:
    """REG_SZ / REG_EXPAND_SZ decoding."""

    def test_reg_sz_stops_at_first_nul(self):
        decoded = decode_value(RegistryValueType.REG_SZ, _utf16("cmd\\1\x00leftover"))
        assert decoded == DecodedValue(ValueKind.TEXT, "cmd\\1")

    def test_reg_expand_sz(self):
        decoded = decode_value(RegistryValueType.REG_EXPAND_SZ, _utf16("%SystemRoot%\\notepad.exe\x00"))
        assert decoded.kind is ValueKind.TEXT
        assert decoded.value == "%SystemRoot%\\notepad.exe"

    def test_unterminated_string(self):
        assert decode_value(1, _utf16("abc")).value == "abc"

    def test_odd_trailing_byte_is_dropped(self):
        assert decode_value(1, b"a\x00b\x00c").value == "ab"

    def test_empty_string(self):
        assert decode_value(1, b"").value == ""


class TestIntegerValues:
    """REG_DWORD / REG_QWORD decoding."""

    def test_dword(self):
        decoded = decode_value(RegistryValueType.REG_DWORD, struct.pack("<I", 0xDEADBEEF))
        assert decoded == DecodedValue(ValueKind.UINT32, 0xDEADBEEF)

    def test_dword_reads_first_four_bytes(self):
        assert decode_value(4, b"\x02\x00\x00\x00\xff\xff").value == 2

    def test_qword(self):
        decoded = decode_value(RegistryValueType.REG_QWORD, struct.pack("<Q", 2 ** 40 + 1))
        assert decoded == DecodedValue(ValueKind.UINT64, 2 ** 40 + 1)

    def test_short_dword_raises(self):
        with pytest.raises(TruncatedValueError) as excinfo:
            decode_value(RegistryValueType.REG_DWORD, b"\x01\x00\x00")
        assert excinfo.value.required == 4
        assert excinfo.value.actual == 3

    def test_two_byte_qword_raises(self):
        with pytest.raises(TruncatedValueError, match="REG_QWORD requires at least 8 bytes, got 2"):
            decode_value(RegistryValueType.REG_QWORD, b"\x01\x00")


class TestMultiStringValues:
    def test_multi_sz_stops_at_empty_segment(self):
        decoded = decode_value(RegistryValueType.REG_MULTI_SZ, _utf16("a\x00b\x00\x00c\x00"))
        assert decoded == DecodedValue(ValueKind.MULTI_TEXT, ("a", "b"))

    def test_multi_sz_as_text(self):
        decoded = decode_value(7, _utf16("USBSTOR\\Disk\x00GenDisk\x00\x00"))
        assert decoded.as_text == "USBSTOR\\Disk; GenDisk"

    def test_empty_multi_sz(self):
        assert decode_value(7, b"").value == ()


class TestUnsupportedTypes:
    @pytest.mark.parametrize("type_tag", [0, 3, 5, 6, 8, 99])
    def test_unsupported_tag_raises(self, type_tag):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            decode_value(type_tag, b"\x00\x00\x00\x00")
        assert excinfo.value.type_tag == type_tag

    def test_decode_errors_share_base_class(self):
        assert issubclass(UnsupportedTypeError, DecodeError)
        assert issubclass(TruncatedValueError, DecodeError)


class TestRecentDocsBlob:
    def test_filename_before_shell_item(self):
        blob = _utf16("report.docx\x00") + b"\x14\x00\x1f\x50\xe0\x4f"
        assert decode_recent_docs_blob(blob) == "report.docx"

    def test_empty_leading_segment(self):
        assert decode_recent_docs_blob(b"\x00\x00\x14\x00") == ""

    def test_unicode_filename(self):
        assert decode_recent_docs_blob(_utf16("Übersicht.pdf\x00")) == "Übersicht.pdf"
