import pytest

from extractors._shared.appid_loader import (
    UNKNOWN_APP,
    AppIdTable,
    load_appid_table,
    parse_appid_rows,
)
from extractors.exceptions import ConfigurationError


class TestBundledTable:
    """Tests for the AppID table shipped with the package."""

    def test_resolve_known_appid(self):
        table = load_appid_table()
        assert table.resolve("5D696D521DE238C3") == "Google Chrome"

    def test_resolve_is_case_insensitive(self):
        table = load_appid_table()
        assert table.resolve("9b9cdc69c1c24e2b") == "Microsoft Edge"

    def test_unknown_and_empty(self):
        table = load_appid_table()
        assert table.resolve("0000000000000000") == UNKNOWN_APP
        assert table.resolve("") == UNKNOWN_APP

    def test_bundled_table_is_cached(self):
        assert load_appid_table() is load_appid_table()


class TestParseRows:
    def test_header_skipped_and_malformed_rows_ignored(self):
        entries = parse_appid_rows([
            "ID,Application",
            "aaaaaaaaaaaaaaaa,App A",
            "bbbbbbbbbbbbbbbb",
            "cccccccccccccccc,App C,extra",
            "dddddddddddddddd,App D",
        ])

        assert entries == {"AAAAAAAAAAAAAAAA": "App A", "DDDDDDDDDDDDDDDD": "App D"}

    def test_empty_input(self):
        assert parse_appid_rows([]) == {}

    def test_quoted_names_with_commas(self):
        entries = parse_appid_rows(["ID,Application", 'eeeeeeeeeeeeeeee,"Tool, Pro"'])
        assert entries["EEEEEEEEEEEEEEEE"] == "Tool, Pro"


class TestCustomTable:
    def test_load_from_path(self, tmp_path):
        csv_path = tmp_path / "appids.csv"
        csv_path.write_text("ID,Application\n1234567890abcdef,Custom Tool\n", encoding="utf-8")

        table = load_appid_table(csv_path)

        assert len(table) == 1
        assert table.resolve("1234567890ABCDEF") == "Custom Tool"

    def test_missing_path_raises(self, tmp_path):
        with pytest.raises(ConfigurationError, match="AppID table not readable"):
            load_appid_table(tmp_path / "missing.csv")

    def test_table_from_mapping(self):
        table = AppIdTable({" abc ": " Name "})
        assert table.resolve("ABC") == "Name"
