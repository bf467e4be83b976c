"""Output formatting for match results."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from .engines import Engine
from .models import BestMatch


class OutputFormatter:
    """Formatter for ranked match results."""

    # Column headers
    COLUMNS = [
        "Rank",
        "Index",
        "Description",
        "Length",
        "LCS Score",
        "Similarity",
        "Engine",
    ]

    FORMATS = ['tsv', 'csv', 'json', 'fasta']

    def __init__(self, query: str, engine: Union[Engine, str] = Engine.DP, include_sequence: bool = False):
        """
        Initialize the formatter.

        Args:
            query: Query sequence the matches were scored against
            engine: Engine that produced the scores
            include_sequence: Add the full sequence as a column
        """
        self.query = query
        self.engine = Engine.parse(engine)
        self.include_sequence = include_sequence
        self.created = datetime.now()

    @property
    def columns(self) -> List[str]:
        if self.include_sequence:
            return self.COLUMNS + ["Sequence"]
        return self.COLUMNS

    def format_match(self, match: BestMatch, rank: int) -> Dict[str, Any]:
        """
        Format a single match as a row.

        Args:
            match: Scored record
            rank: 1-based rank of the match

        Returns:
            Row dictionary keyed by column header
        """
        row = {
            "Rank": rank,
            "Index": match.index,
            "Description": match.description,
            "Length": len(match.sequence),
            "LCS Score": match.score,
            "Similarity": round(match.similarity(self.query), 4),
            "Engine": self.engine.value,
        }
        if self.include_sequence:
            row["Sequence"] = match.sequence
        return row

    def format_matches(self, matches: List[BestMatch]) -> List[Dict[str, Any]]:
        """Format ranked matches as rows."""
        return [self.format_match(match, rank) for rank, match in enumerate(matches, start=1)]

    def format_results(self,
                       matches: List[BestMatch],
                       output_path: Union[str, Path],
                       format: Optional[str] = None) -> Path:
        """
        Format and write matches to file.

        Args:
            matches: Ranked matches
            output_path: Path to output file
            format: Output format ('tsv', 'csv', 'json', 'fasta'); taken from
                the file suffix when None

        Returns:
            Path written
        """
        path = Path(output_path)
        format = format or self._format_from_suffix(path)

        if format == 'tsv':
            self._write_delimited(matches, path, '\t')
        elif format == 'csv':
            self._write_delimited(matches, path, ',')
        elif format == 'json':
            self._write_json(matches, path)
        elif format == 'fasta':
            self._write_fasta(matches, path)
        else:
            raise ValueError(f"Unsupported format: {format}")

        return path

    def _format_from_suffix(self, path: Path) -> str:
        suffix = path.suffix.lower().lstrip('.')
        if suffix in ('fa', 'faa', 'fasta'):
            return 'fasta'
        if suffix in self.FORMATS:
            return suffix
        return 'tsv'

    def _write_delimited(self, matches: List[BestMatch], path: Path, delimiter: str) -> None:
        """Write rows with a header line."""
        with open(path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.columns, delimiter=delimiter)
            writer.writeheader()
            writer.writerows(self.format_matches(matches))

    def _write_json(self, matches: List[BestMatch], path: Path) -> None:
        """Write rows with run metadata."""
        data = {
            'query': self.query,
            'query_length': len(self.query),
            'engine': self.engine.value,
            'created': self.created.isoformat(),
            'matches': self.format_matches(matches),
        }

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)

    def _write_fasta(self, matches: List[BestMatch], path: Path) -> None:
        """Write matched records as FASTA, score noted in each header."""
        SeqIO.write(self.to_seq_records(matches), path, 'fasta')

    def to_seq_records(self, matches: List[BestMatch]) -> List[SeqRecord]:
        """Convert matches to Biopython records for FASTA export."""
        records = []
        for rank, match in enumerate(matches, start=1):
            records.append(SeqRecord(
                Seq(match.sequence),
                id=f"match{rank}",
                description=f"lcs={match.score} {match.description}".rstrip(),
            ))
        return records

    def format_summary(self, match: BestMatch) -> str:
        """One-paragraph human readable description of a best match."""
        return (
            f"Best match: {match.description}\n"
            f"  Index: {match.index}\n"
            f"  Length: {len(match.sequence)}\n"
            f"  LCS score: {match.score} "
            f"(similarity {match.similarity(self.query):.2%}, engine {self.engine.value})"
        )
