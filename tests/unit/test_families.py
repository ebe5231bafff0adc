"""Tests for Family Detection
=========================

Unit tests for inferring font family queries from variable font filenames.
"""

from pathlib import Path

import pytest

from iconfont.core.exceptions import SourceDirectoryNotFoundError
from iconfont.fonts.families import (
    detect_families,
    detect_families_in_directory,
    family_query,
)


class TestFamilyQuery:
    """Test family_query."""

    def test_material_symbols(self):
        assert family_query("MaterialSymbolsOutlined.ttf") == "Material+Symbols+Outlined"

    def test_acronym_run(self):
        assert family_query("ABCDef.ttf") == "ABC+Def"

    def test_without_extension(self):
        assert family_query("NotoSansJP") == "Noto+Sans+JP"

    def test_empty(self):
        assert family_query(" .ttf") == ""


class TestDetectFamilies:
    """Test detect_families."""

    def test_single_family(self):
        assert detect_families(["MaterialSymbolsOutlined.ttf"]) == ["Material+Symbols+Outlined"]

    def test_allow_list_filters_out(self):
        result = detect_families(
            ["MaterialSymbolsOutlined.ttf"], allow_list={"Material+Symbols+Rounded"}
        )
        assert result == []

    def test_allow_list_keeps_listed(self):
        result = detect_families(
            [
                "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf",
                "MaterialSymbolsRounded[FILL,GRAD,opsz,wght].ttf",
            ],
            allow_list=["Material+Symbols+Rounded"],
        )
        assert result == ["Material+Symbols+Rounded"]

    def test_first_occurrence_order_and_dedup(self):
        """Test that duplicates collapse onto the position of their first file."""
        result = detect_families(
            [
                "MaterialSymbolsSharp[FILL,GRAD,opsz,wght].ttf",
                "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf",
                "MaterialSymbolsSharp.ttf",
                "MaterialSymbolsRounded[FILL,GRAD,opsz,wght].ttf",
                "MaterialSymbolsOutlined.ttf",
            ]
        )
        assert result == [
            "Material+Symbols+Sharp",
            "Material+Symbols+Outlined",
            "Material+Symbols+Rounded",
        ]

    def test_only_truetype_files_count(self):
        """Test that companion files never create families."""
        result = detect_families(
            [
                "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].woff2",
                "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].codepoints",
                "MaterialSymbolsRounded.TTF",
                "README.md",
            ]
        )
        assert result == []

    def test_empty_queries_are_dropped(self):
        assert detect_families([" .ttf"]) == []

    def test_generic_font_names(self):
        result = detect_families(["some-icon-font.ttf", "IBMPlexMono[wght].ttf"])
        assert result == ["Some+Icon+Font", "IBM+Plex+Mono"]

    def test_accepts_generator(self):
        names = (name for name in ["MaterialSymbolsOutlined.ttf"])
        assert detect_families(names) == ["Material+Symbols+Outlined"]


class TestDetectFamiliesInDirectory:
    """Test detect_families_in_directory."""

    def test_reads_directory(self, tmp_path: Path):
        for name in [
            "MaterialSymbolsRounded[FILL,GRAD,opsz,wght].ttf",
            "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].ttf",
            "MaterialSymbolsOutlined[FILL,GRAD,opsz,wght].woff2",
        ]:
            (tmp_path / name).write_bytes(b"")

        result = detect_families_in_directory(tmp_path)

        # Directory listings are sorted before detection
        assert result == ["Material+Symbols+Outlined", "Material+Symbols+Rounded"]

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(SourceDirectoryNotFoundError, match="Source directory not found"):
            detect_families_in_directory(tmp_path / "missing")
