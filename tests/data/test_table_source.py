# Tests for TableSource
# =====================

import duckdb
import pandas as pd
import pytest

from slicer.data import DataFormat, TableSourceError, qualify_columns


class TestFormatDetection:
    """Extension-based format detection."""

    def test_detect_format(self, source):
        assert source.detect_format("data/Sales.csv") == DataFormat.CSV
        assert source.detect_format("data/Sales.PARQUET") == DataFormat.PARQUET
        assert source.detect_format("data/Sales.pq") == DataFormat.PARQUET
        assert source.detect_format("warehouse.duckdb") == DataFormat.DUCKDB
        assert source.detect_format("notes.json") == DataFormat.UNKNOWN

    def test_table_name_from_stem(self, source):
        assert source.get_table_name("data/Sales.csv") == "Sales"


class TestFileReading:
    """CSV and Parquet files."""

    def test_read_csv(self, source, raw_df, tmp_path):
        path = tmp_path / "Sales.csv"
        raw_df.to_csv(path, index=False)

        df = source.read_file(str(path))
        assert list(df.columns) == ["Sales.Region", "Sales.Amount"]
        assert df["Sales.Region"].tolist() == ["East", "West"]

    def test_read_parquet(self, source, raw_df, tmp_path):
        path = tmp_path / "Orders.parquet"
        raw_df.to_parquet(path, index=False)

        df = source.read_file(str(path))
        assert list(df.columns) == ["Orders.Region", "Orders.Amount"]
        assert df["Orders.Amount"].tolist() == [10, 20]

    def test_table_name_override(self, source, raw_df, tmp_path):
        path = tmp_path / "export_2024.csv"
        raw_df.to_csv(path, index=False)

        df = source.read_file(str(path), table_name="Sales")
        assert list(df.columns) == ["Sales.Region", "Sales.Amount"]

    def test_missing_file(self, source, tmp_path):
        with pytest.raises(FileNotFoundError):
            source.read_file(str(tmp_path / "nope.csv"))

    def test_unsupported_format(self, source, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{}")
        with pytest.raises(TableSourceError):
            source.read_file(str(path))

    def test_corrupt_parquet(self, source, tmp_path):
        path = tmp_path / "broken.parquet"
        path.write_text("not parquet")
        with pytest.raises(TableSourceError):
            source.read_file(str(path))


class TestDuckDB:
    """DuckDB tables."""

    @pytest.fixture
    def db_path(self, tmp_path):
        path = tmp_path / "warehouse.duckdb"
        conn = duckdb.connect(str(path))
        conn.execute(
            "CREATE TABLE Sales AS "
            "SELECT * FROM (VALUES ('East', 10), ('West', 20)) AS t(Region, Amount)"
        )
        conn.close()
        return str(path)

    def test_read_table(self, source, db_path):
        df = source.read_duckdb(db_path, "Sales")
        assert list(df.columns) == ["Sales.Region", "Sales.Amount"]
        assert len(df) == 2

    def test_read_columns(self, source, db_path):
        df = source.read_duckdb(db_path, "Sales", columns=["Region"])
        assert list(df.columns) == ["Sales.Region"]

    def test_list_tables(self, source, db_path):
        assert source.list_duckdb_tables(db_path) == ["Sales"]

    def test_invalid_identifier(self, source, db_path):
        with pytest.raises(TableSourceError):
            source.read_duckdb(db_path, "Sales; DROP TABLE Sales")

    def test_unknown_table(self, source, db_path):
        with pytest.raises(TableSourceError):
            source.read_duckdb(db_path, "Missing")

    def test_missing_database(self, source, tmp_path):
        with pytest.raises(FileNotFoundError):
            source.read_duckdb(str(tmp_path / "nope.duckdb"), "Sales")


class TestQualifying:
    """Column qualification and frame combining."""

    def test_qualify_columns(self):
        df = pd.DataFrame({"Region": [1], "Other.Col": [2]})
        assert list(qualify_columns(df, "Sales").columns) == ["Sales.Region", "Other.Col"]

    def test_from_frames(self, source):
        combined = source.from_frames({
            "Sales": pd.DataFrame({"Region": ["East", "West"]}),
            "Calendar": pd.DataFrame({"Month": ["Jan", "Feb"]}),
        })
        assert list(combined.columns) == ["Sales.Region", "Calendar.Month"]
        assert combined["Calendar.Month"].tolist() == ["Jan", "Feb"]

    def test_from_frames_length_mismatch(self, source):
        with pytest.raises(TableSourceError):
            source.from_frames({
                "A": pd.DataFrame({"x": [1, 2]}),
                "B": pd.DataFrame({"y": [1]}),
            })

    def test_from_frames_empty(self, source):
        assert source.from_frames({}).empty
