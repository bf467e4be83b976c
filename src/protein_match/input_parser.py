"""Input parsing for protein record files."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import pandas as pd

from .models import ProteinCollection, ProteinRecord

logger = logging.getLogger(__name__)


class InputParser:
    """Parser for protein record files in several formats."""

    # Common encodings to try
    ENCODINGS = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252', 'iso-8859-1']

    # Common delimiters
    DELIMITERS = [',', '\t', ';']

    # Header names accepted for each column, most specific first
    DESCRIPTION_COLUMNS = ['description', 'header', 'name', 'id']
    SEQUENCE_COLUMNS = ['sequence', 'seq', 'protein']

    def __init__(self):
        """Initialize the parser."""
        self.last_format = None
        self.last_encoding = None
        self.last_delimiter = None

    def parse_file(self, file_path: Union[str, Path],
                   encoding: Optional[str] = None,
                   delimiter: Optional[str] = None) -> ProteinCollection:
        """
        Parse a file into an ordered collection of protein records.

        Args:
            file_path: Path to input file
            encoding: File encoding (auto-detected if None)
            delimiter: Delimiter for CSV files (auto-detected if None)

        Returns:
            Records in file order

        Raises:
            ValueError: If the file content cannot be interpreted
            FileNotFoundError: If file doesn't exist
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {file_path}")

        suffix = path.suffix.lower()

        if suffix in ['.csv', '.tsv']:
            records = self._parse_csv_file(path, encoding, delimiter)
        elif suffix in ['.xlsx', '.xls']:
            records = self._parse_excel_file(path)
        elif suffix == '.json':
            records = self._parse_json_file(path, encoding)
        else:
            records = self._parse_fasta_file(path, encoding)

        logger.info(f"Loaded {len(records)} proteins from {path} ({self.last_format})")
        return ProteinCollection(records)

    def parse_text(self, text: str) -> ProteinCollection:
        """Parse FASTA-formatted text already held in memory."""
        self.last_format = 'fasta'
        return ProteinCollection(self._read_fasta_lines(text.splitlines()))

    def _parse_fasta_file(self, path: Path, encoding: Optional[str] = None) -> List[ProteinRecord]:
        """Parse a FASTA file with exactly one line per sequence."""
        encoding = encoding or self._detect_encoding(path)

        with open(path, 'r', encoding=encoding) as f:
            records = self._read_fasta_lines(f)

        self.last_format = 'fasta'
        self.last_encoding = encoding
        return records

    def _read_fasta_lines(self, lines) -> List[ProteinRecord]:
        """Pair each '>' description line with the sequence line after it.

        Blank lines are skipped. A sequence line with no description before
        it is ignored, as is a description with no sequence after it.
        """
        records = []
        description = None

        for line in lines:
            line = line.rstrip('\r\n')
            if not line:
                continue

            if line.startswith('>'):
                if description is not None:
                    logger.warning(f"Description without sequence skipped: {description!r}")
                description = line[1:]
            elif description is not None:
                records.append(ProteinRecord(description, line))
                description = None
            else:
                logger.debug(f"Sequence line without description ignored: {line[:30]!r}")

        if description is not None:
            logger.warning(f"Description without sequence skipped: {description!r}")

        return records

    def _parse_csv_file(self, path: Path,
                        encoding: Optional[str] = None,
                        delimiter: Optional[str] = None) -> List[ProteinRecord]:
        """Parse CSV/TSV file with description and sequence columns."""
        encoding = encoding or self._detect_encoding(path)
        delimiter = delimiter or self._detect_delimiter(path, encoding)

        with open(path, 'r', encoding=encoding, newline='') as f:
            reader = csv.reader(f, delimiter=delimiter)
            header = next(reader, None)
            if not header:
                records = []
            else:
                desc_col, seq_col = self._find_columns(header)
                records = [
                    ProteinRecord(row[desc_col].strip(), row[seq_col].strip())
                    for row in reader
                    if len(row) > max(desc_col, seq_col) and row[seq_col].strip()
                ]

        self.last_format = 'csv'
        self.last_encoding = encoding
        self.last_delimiter = delimiter
        return records

    def _parse_excel_file(self, path: Path) -> List[ProteinRecord]:
        """Parse every sheet of an Excel workbook using pandas."""
        records = []

        xls = pd.ExcelFile(path)

        for sheet_name in xls.sheet_names:
            df = pd.read_excel(xls, sheet_name=sheet_name, dtype=str)
            if df.empty:
                continue

            desc_col, seq_col = self._find_columns(list(df.columns))
            df = df.dropna(subset=[df.columns[seq_col]])

            for description, sequence in zip(df.iloc[:, desc_col].fillna(''), df.iloc[:, seq_col]):
                records.append(ProteinRecord(description.strip(), sequence.strip()))

        self.last_format = 'excel'
        return records

    def _parse_json_file(self, path: Path, encoding: Optional[str] = None) -> List[ProteinRecord]:
        """Parse JSON list of records, or an object holding one."""
        encoding = encoding or self._detect_encoding(path)

        with open(path, 'r', encoding=encoding) as f:
            data = json.load(f)

        if isinstance(data, dict):
            for key in ['proteins', 'records', 'sequences']:
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
            else:
                raise ValueError(f"No protein list found in {path}")

        if not isinstance(data, list):
            raise ValueError(f"Unsupported JSON structure in {path}")

        records = []
        for item in data:
            if isinstance(item, dict):
                records.append(self._record_from_mapping(item))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                records.append(ProteinRecord(str(item[0]), str(item[1])))
            else:
                raise ValueError(f"Unsupported record in {path}: {item!r}")

        self.last_format = 'json'
        self.last_encoding = encoding
        return records

    def _record_from_mapping(self, item: Dict[str, Any]) -> ProteinRecord:
        """Build a record from a dict using the accepted key names."""
        keys = {key.lower(): key for key in item}

        description = next((item[keys[k]] for k in self.DESCRIPTION_COLUMNS if k in keys), '')
        sequence = next((item[keys[k]] for k in self.SEQUENCE_COLUMNS if k in keys), None)

        if sequence is None:
            raise ValueError(f"Record has no sequence field: {item!r}")

        return ProteinRecord(str(description), str(sequence))

    def _find_columns(self, header_row: List[Any]) -> Tuple[int, int]:
        """Find the description and sequence column indices of a header."""
        names = [str(cell).lower().strip() if cell is not None else '' for cell in header_row]

        def find(candidates: List[str]) -> Optional[int]:
            for candidate in candidates:
                if candidate in names:
                    return names.index(candidate)
            return None

        seq_col = find(self.SEQUENCE_COLUMNS)
        if seq_col is None:
            raise ValueError(f"No sequence column in header: {header_row}")

        desc_col = find(self.DESCRIPTION_COLUMNS)
        if desc_col is None:
            # Fall back to the first column that is not the sequence
            desc_col = 1 if seq_col == 0 and len(names) > 1 else 0

        return desc_col, seq_col

    def _detect_encoding(self, path: Path) -> str:
        """Detect file encoding."""
        with open(path, 'rb') as f:
            bom = f.read(3)
            if bom == b'\xef\xbb\xbf':  # UTF-8 BOM
                return 'utf-8-sig'

        for encoding in self.ENCODINGS:
            try:
                with open(path, 'r', encoding=encoding) as f:
                    f.read(1024)  # Read first 1KB
                return encoding
            except (UnicodeDecodeError, UnicodeError):
                continue

        return 'utf-8'

    def _detect_delimiter(self, path: Path, encoding: str) -> str:
        """Detect CSV delimiter.

        TSV files are always tab separated. Otherwise the most frequent
        candidate in the header line wins; data rows are not counted.
        """
        if path.suffix.lower() == '.tsv':
            return '\t'

        with open(path, 'r', encoding=encoding) as f:
            header = f.readline()

        counts = {delim: header.count(delim) for delim in self.DELIMITERS}

        if max(counts.values()) > 0:
            return max(counts.items(), key=lambda x: x[1])[0]

        return ','

    def get_format_info(self) -> Dict[str, Any]:
        """Get information about the last parsed file."""
        return {
            'format': self.last_format,
            'encoding': self.last_encoding,
            'delimiter': self.last_delimiter
        }


def load_proteins(file_path: Union[str, Path]) -> ProteinCollection:
    """Convenience function to load proteins from a file."""
    return InputParser().parse_file(file_path)
