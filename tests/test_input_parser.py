"""Tests for input parsing module."""

import json

import pandas as pd
import pytest

from protein_match.input_parser import InputParser, load_proteins
from protein_match.models import ProteinCollection, ProteinRecord


class TestInputParser:
    """Test cases for input parsing."""

    @pytest.fixture
    def parser(self):
        """Create an InputParser instance."""
        return InputParser()

    def test_parse_fasta_file(self, parser, tmp_path):
        """Test parsing one-line-per-sequence FASTA."""
        test_file = tmp_path / "proteins.fasta"
        test_file.write_text(
            ">sp|P01|alpha Alpha protein\nMKTAYIAKQR\n"
            ">sp|P02|beta\nMEOWMEOW\n"
        )

        proteins = parser.parse_file(test_file)

        assert isinstance(proteins, ProteinCollection)
        assert list(proteins) == [
            ProteinRecord("sp|P01|alpha Alpha protein", "MKTAYIAKQR"),
            ProteinRecord("sp|P02|beta", "MEOWMEOW"),
        ]
        assert parser.last_format == "fasta"

    def test_fasta_skips_blank_lines(self, parser, tmp_path):
        """Test that blank lines between and inside records are skipped."""
        test_file = tmp_path / "proteins.fa"
        test_file.write_text("\n>first\n\nAAAA\n\n\n>second\nCCCC\n\n")

        proteins = parser.parse_file(test_file)

        assert proteins.descriptions == ("first", "second")
        assert [r.sequence for r in proteins] == ["AAAA", "CCCC"]

    def test_fasta_orphan_lines(self, parser, tmp_path):
        """Test sequence lines without a description and dangling descriptions."""
        test_file = tmp_path / "proteins.faa"
        test_file.write_text("ORPHAN\n>lost\n>kept\nMMMM\nEXTRA\n>dangling\n")

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("kept", "MMMM")]

    def test_fasta_empty_description(self, parser, tmp_path):
        """Test that a bare '>' gives an empty description."""
        test_file = tmp_path / "proteins.fasta"
        test_file.write_text(">\nMEOW\n")

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("", "MEOW")]

    def test_fasta_windows_line_endings(self, parser, tmp_path):
        """Test CRLF files."""
        test_file = tmp_path / "proteins.fasta"
        test_file.write_bytes(b">p1\r\nMEOW\r\n>p2\r\nMOVE\r\n")

        proteins = parser.parse_file(test_file)

        assert [r.sequence for r in proteins] == ["MEOW", "MOVE"]
        assert proteins.descriptions == ("p1", "p2")

    def test_fasta_without_trailing_newline(self, parser, tmp_path):
        """Test that the last record is kept without a final newline."""
        test_file = tmp_path / "proteins.fasta"
        test_file.write_text(">p1\nMEOW")

        assert len(parser.parse_file(test_file)) == 1

    def test_unknown_suffix_is_fasta(self, parser, tmp_path):
        """Test that unrecognized suffixes are read as FASTA."""
        test_file = tmp_path / "proteins.seq"
        test_file.write_text(">p1\nMEOW\n")

        assert len(parser.parse_file(test_file)) == 1
        assert parser.last_format == "fasta"

    def test_parse_text(self, parser):
        """Test parsing FASTA held in memory."""
        proteins = parser.parse_text(">a\nAB\n>b\nCD")
        assert proteins.descriptions == ("a", "b")

    def test_parse_csv_file(self, parser, tmp_path):
        """Test parsing CSV file with header."""
        test_file = tmp_path / "proteins.csv"
        test_file.write_text("Description,Sequence\np1,ABCD\np2,ABCE\n")

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("p1", "ABCD"), ProteinRecord("p2", "ABCE")]
        assert parser.last_format == "csv"
        assert parser.last_delimiter == ","

    def test_parse_tsv_file_with_aliases(self, parser, tmp_path):
        """Test TSV with alternative column names in any order."""
        test_file = tmp_path / "proteins.tsv"
        test_file.write_text("seq\tname\textra\nMEOW\tcat\tx\nMOVE\tverb\ty\n")

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("cat", "MEOW"), ProteinRecord("verb", "MOVE")]
        assert parser.last_delimiter == "\t"

    def test_tsv_with_pipe_descriptions(self, parser, tmp_path):
        """Test that UniProt-style descriptions do not change the delimiter."""
        test_file = tmp_path / "proteins.tsv"
        test_file.write_text(
            "description\tsequence\n"
            "sp|P01|ALPHA_HUMAN\tMKTAYIAK\n"
            "sp|P02|BETA_HUMAN\tMEOWMEOW\n"
        )

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [
            ProteinRecord("sp|P01|ALPHA_HUMAN", "MKTAYIAK"),
            ProteinRecord("sp|P02|BETA_HUMAN", "MEOWMEOW"),
        ]
        assert parser.last_delimiter == "\t"

    def test_csv_delimiter_from_header(self, parser, tmp_path):
        """Test semicolon CSV whose rows hold more commas than the header."""
        test_file = tmp_path / "proteins.csv"
        test_file.write_text(
            "description;sequence\n"
            "alpha, beta, gamma, fused;MKTAYIAK\n"
        )

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("alpha, beta, gamma, fused", "MKTAYIAK")]
        assert parser.last_delimiter == ";"

    def test_csv_without_sequence_column(self, parser, tmp_path):
        """Test that a header without a sequence column is rejected."""
        test_file = tmp_path / "proteins.csv"
        test_file.write_text("gene,organism\nTP53,human\n")

        with pytest.raises(ValueError, match="No sequence column"):
            parser.parse_file(test_file)

    def test_parse_json_list(self, parser, tmp_path):
        """Test parsing JSON list of objects and pairs."""
        test_file = tmp_path / "proteins.json"
        test_file.write_text(json.dumps([
            {"description": "p1", "sequence": "ABCD"},
            {"Name": "p2", "Seq": "ABCE"},
            ["p3", "ABCD"],
        ]))

        proteins = parser.parse_file(test_file)

        assert proteins.descriptions == ("p1", "p2", "p3")
        assert parser.last_format == "json"

    def test_parse_json_object(self, parser, tmp_path):
        """Test parsing JSON object holding a protein list."""
        test_file = tmp_path / "proteins.json"
        test_file.write_text(json.dumps({"proteins": [{"sequence": "MEOW"}]}))

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("", "MEOW")]

    def test_parse_json_missing_sequence(self, parser, tmp_path):
        """Test that records without a sequence are rejected."""
        test_file = tmp_path / "proteins.json"
        test_file.write_text(json.dumps([{"description": "p1"}]))

        with pytest.raises(ValueError, match="no sequence"):
            parser.parse_file(test_file)

    def test_parse_excel_file(self, parser, tmp_path):
        """Test parsing Excel workbook."""
        pytest.importorskip("openpyxl")
        test_file = tmp_path / "proteins.xlsx"
        pd.DataFrame({
            "Description": ["p1", "p2"],
            "Sequence": ["ABCD", "ABCE"],
        }).to_excel(test_file, index=False)

        proteins = parser.parse_file(test_file)

        assert list(proteins) == [ProteinRecord("p1", "ABCD"), ProteinRecord("p2", "ABCE")]
        assert parser.last_format == "excel"

    def test_file_not_found(self, parser):
        """Test handling of non-existent file."""
        with pytest.raises(FileNotFoundError):
            parser.parse_file("nonexistent.fasta")

    def test_empty_file(self, parser, tmp_path):
        """Test that an empty file yields an empty collection."""
        test_file = tmp_path / "empty.fasta"
        test_file.write_text("")

        assert len(parser.parse_file(test_file)) == 0

    def test_encoding_detection(self, parser, tmp_path):
        """Test reading a UTF-8 file with BOM."""
        test_file = tmp_path / "proteins.fasta"
        test_file.write_bytes(b"\xef\xbb\xbf>p1\nMEOW\n")

        proteins = parser.parse_file(test_file)

        assert proteins.descriptions == ("p1",)
        assert parser.get_format_info()["encoding"] == "utf-8-sig"


def test_load_proteins(tmp_path):
    """Test the convenience loader."""
    test_file = tmp_path / "proteins.fasta"
    test_file.write_text(">p1\nMEOW\n")

    assert load_proteins(test_file)[0].sequence == "MEOW"
