"""Configuration management for the protein matching tool."""

import json
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional


@dataclass
class EngineConfig:
    """LCS engine settings."""
    default: str = "dp"
    # Exhaustive search is exponential; None leaves it unbounded
    max_exhaustive_length: Optional[int] = None


@dataclass
class ParallelConfig:
    """Parallel scoring settings."""
    enabled: bool = False
    workers: int = 4
    chunk_size: Optional[int] = None


@dataclass
class OutputConfig:
    """Output configuration settings."""
    # None picks the format from the output file suffix
    format: Optional[str] = None
    top: int = 1
    include_sequence: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    directory: Optional[str] = None
    colors: bool = True


@dataclass
class Config:
    """Main configuration container."""
    engine: EngineConfig
    parallel: ParallelConfig
    output: OutputConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'Config':
        """Create default configuration."""
        return cls(
            engine=EngineConfig(),
            parallel=ParallelConfig(),
            output=OutputConfig(),
            logging=LoggingConfig()
        )

    @classmethod
    def from_file(cls, path: Path) -> 'Config':
        """Load configuration from JSON file."""
        if not path.exists():
            return cls.default()

        with open(path, 'r') as f:
            data = json.load(f)

        return cls(
            engine=EngineConfig(**data.get('engine', {})),
            parallel=ParallelConfig(**data.get('parallel', {})),
            output=OutputConfig(**data.get('output', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    def to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'engine': asdict(self.engine),
            'parallel': asdict(self.parallel),
            'output': asdict(self.output),
            'logging': asdict(self.logging)
        }

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    @property
    def workers(self) -> Optional[int]:
        """Worker count to score with, or None for sequential scoring."""
        return self.parallel.workers if self.parallel.enabled else None

    def merge_env_vars(self) -> None:
        """Merge environment variables into configuration."""
        if os.getenv('PROTEIN_MATCH_ENGINE'):
            self.engine.default = os.getenv('PROTEIN_MATCH_ENGINE')
        if os.getenv('PROTEIN_MATCH_MAX_EXHAUSTIVE_LENGTH'):
            self.engine.max_exhaustive_length = int(os.getenv('PROTEIN_MATCH_MAX_EXHAUSTIVE_LENGTH'))

        if os.getenv('PROTEIN_MATCH_WORKERS'):
            self.parallel.workers = int(os.getenv('PROTEIN_MATCH_WORKERS'))
            self.parallel.enabled = self.parallel.workers > 1

        if os.getenv('PROTEIN_MATCH_LOG_LEVEL'):
            self.logging.level = os.getenv('PROTEIN_MATCH_LOG_LEVEL')
        if os.getenv('PROTEIN_MATCH_LOG_DIR'):
            self.logging.directory = os.getenv('PROTEIN_MATCH_LOG_DIR')

    def merge_cli_args(self, **kwargs) -> None:
        """Merge CLI arguments into configuration."""
        if kwargs.get('engine'):
            self.engine.default = kwargs['engine']
        if kwargs.get('max_exhaustive_length') is not None:
            self.engine.max_exhaustive_length = kwargs['max_exhaustive_length']

        if kwargs.get('workers') is not None:
            self.parallel.workers = kwargs['workers']
            self.parallel.enabled = kwargs['workers'] > 1
        if kwargs.get('chunk_size'):
            self.parallel.chunk_size = kwargs['chunk_size']

        if kwargs.get('output_format'):
            self.output.format = kwargs['output_format']
        if kwargs.get('top') is not None:
            self.output.top = kwargs['top']
        if kwargs.get('include_sequence'):
            self.output.include_sequence = True

        if kwargs.get('log_dir'):
            self.logging.directory = kwargs['log_dir']


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    locations = [
        Path.home() / '.protein_match' / 'config.json',
        Path.home() / '.config' / 'protein_match' / 'config.json',
        Path('.protein_match.json'),
        Path('protein_match.config.json')
    ]

    for path in locations:
        if path.exists():
            return path

    return Path.home() / '.protein_match' / 'config.json'


def create_example_config(path: Optional[Path] = None) -> Path:
    """Create an example configuration file."""
    if path is None:
        path = Path('protein_match.config.example.json')

    config = Config.default()

    config.engine.max_exhaustive_length = 16
    config.parallel.enabled = True
    config.parallel.workers = 4
    config.output.top = 5

    config.to_file(path)
    return path
