# Slicer Data - Table Source
# ===========================
"""
Loads source tables for the filter panel.

Supported inputs:
- CSV files (pandas)
- Parquet files (pyarrow)
- DuckDB database tables

Every loaded DataFrame has its columns qualified as "table.column", the
key format used by field descriptors and filter state.
"""

import re
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import duckdb
import pandas as pd
import pyarrow.parquet as pq

logger = logging.getLogger(__name__)

# Plain SQL identifier (no quoting tricks)
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class TableSourceError(Exception):
    """A source table could not be read."""


class DataFormat(Enum):
    """Supported source formats."""
    CSV = "csv"
    PARQUET = "parquet"
    DUCKDB = "duckdb"
    UNKNOWN = "unknown"


def qualify_columns(df: pd.DataFrame, table_name: str) -> pd.DataFrame:
    """
    Rename columns to "table.column".

    Columns that already contain a dot are left alone.
    """
    mapping = {
        col: col if "." in str(col) else f"{table_name}.{col}"
        for col in df.columns
    }
    return df.rename(columns=mapping)


class TableSource:
    """
    Reads tabular data into qualified DataFrames.

    Example:
        source = TableSource()
        df = source.read_file("data/Sales.csv")
        df.columns  # ['Sales.Region', 'Sales.Amount', ...]

        df = source.read_duckdb("warehouse.duckdb", "Sales", columns=["Region"])
    """

    FORMAT_MAP = {
        '.csv': DataFormat.CSV,
        '.txt': DataFormat.CSV,
        '.parquet': DataFormat.PARQUET,
        '.pq': DataFormat.PARQUET,
        '.duckdb': DataFormat.DUCKDB,
        '.db': DataFormat.DUCKDB,
    }

    def detect_format(self, filepath: str) -> DataFormat:
        """Detect format from the file extension."""
        return self.FORMAT_MAP.get(Path(filepath).suffix.lower(), DataFormat.UNKNOWN)

    def get_table_name(self, filepath: str) -> str:
        """Table name from the file stem: data/Sales.csv -> Sales."""
        return Path(filepath).stem

    def read_file(self, filepath: str, table_name: Optional[str] = None) -> pd.DataFrame:
        """
        Read a CSV or Parquet file.

        Args:
            filepath: Path to the file
            table_name: Table name for column keys (defaults to the file stem)

        Returns:
            DataFrame with "table.column" columns

        Raises:
            FileNotFoundError: If the file does not exist
            TableSourceError: If the format is unsupported or reading fails
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        data_format = self.detect_format(filepath)
        table_name = table_name or self.get_table_name(filepath)

        try:
            if data_format == DataFormat.CSV:
                df = pd.read_csv(path)
            elif data_format == DataFormat.PARQUET:
                df = pq.read_table(str(path)).to_pandas()
            else:
                raise TableSourceError(f"Unsupported file format: {path.suffix}")
        except TableSourceError:
            raise
        except Exception as e:
            raise TableSourceError(f"Error reading {filepath}: {e}") from e

        logger.info(f"Read {len(df)} rows x {len(df.columns)} columns from {path.name} as {table_name}")
        return qualify_columns(df, table_name)

    def read_duckdb(self,
                    db_path: str,
                    table_name: str,
                    columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        Read a table (or some of its columns) from a DuckDB database.

        Raises:
            FileNotFoundError: If the database does not exist
            TableSourceError: If a name is invalid or the query fails
        """
        if not Path(db_path).exists():
            raise FileNotFoundError(f"Database not found: {db_path}")

        names = [table_name] + list(columns or [])
        invalid = [name for name in names if not _IDENTIFIER.match(name)]
        if invalid:
            raise TableSourceError(f"Invalid identifier(s): {', '.join(invalid)}")

        select = ", ".join(f'"{col}"' for col in columns) if columns else "*"

        conn = duckdb.connect(str(db_path), read_only=True)
        try:
            df = conn.execute(f'SELECT {select} FROM "{table_name}"').fetchdf()
        except duckdb.Error as e:
            raise TableSourceError(f"Error reading {table_name} from {db_path}: {e}") from e
        finally:
            conn.close()

        logger.info(f"Read {len(df)} rows from DuckDB table {table_name}")
        return qualify_columns(df, table_name)

    def list_duckdb_tables(self, db_path: str) -> List[str]:
        """Tables available in a DuckDB database."""
        if not Path(db_path).exists():
            raise FileNotFoundError(f"Database not found: {db_path}")

        conn = duckdb.connect(str(db_path), read_only=True)
        try:
            return [row[0] for row in conn.execute("SHOW TABLES").fetchall()]
        finally:
            conn.close()

    def from_frames(self, frames: Dict[str, pd.DataFrame]) -> pd.DataFrame:
        """
        Combine same-length per-table frames side by side.

        Row i of every frame must describe the same record.

        Raises:
            TableSourceError: If the frames have different lengths
        """
        if not frames:
            return pd.DataFrame()

        lengths = {name: len(df) for name, df in frames.items()}
        if len(set(lengths.values())) > 1:
            raise TableSourceError(f"Frames have different row counts: {lengths}")

        qualified = [
            qualify_columns(df.reset_index(drop=True), name)
            for name, df in frames.items()
        ]
        return pd.concat(qualified, axis=1)
