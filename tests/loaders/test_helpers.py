import pyarrow as pa

from ticketdesk.loaders.data_classes import ColumnCastingStats, TableCastingStats
from ticketdesk.loaders.loading_helpers import arrow_drop_duplicates, infer_delim, infer_encoding

def test_column_casting_stats_records_examples():
    stats = ColumnCastingStats()
    stats.record("bad1")
    stats.record("bad2")
    stats.record("bad3")
    stats.record("bad4")  # should not be stored

    assert stats.count == 4
    assert len(stats.examples) == 3

def test_table_casting_stats_aggregation():
    stats = TableCastingStats(table_name="tickets")
    stats.record(column="a", value="x")
    stats.record(column="a", value="y")
    stats.record(column="b", value="z")

    assert stats.total_failures == 3
    assert stats.has_failures() is True
    assert stats.to_dict()["a"] == {"count": 2, "examples": ["x", "y"]}

def test_infer_delim_csv(tmp_path):
    p = tmp_path / "x.csv"
    p.write_text("a,b,c\n1,2,3\n")
    assert infer_delim(p) == ","

def test_infer_delim_tsv(tmp_path):
    p = tmp_path / "x.tsv"
    p.write_text("a\tb\tc\n1\t2\t3\n")
    assert infer_delim(p) == "\t"

def test_infer_delim_semicolon(tmp_path):
    p = tmp_path / "x.csv"
    p.write_text("a;b;c\n1;2;3\n")
    assert infer_delim(p) == ";"

def test_infer_encoding_utf8(tmp_path):
    p = tmp_path / "x.csv"
    p.write_text("hello")
    enc = infer_encoding(p).get("encoding") or ""
    assert enc.lower() == "utf-8"

def test_arrow_drop_duplicates_simple():
    table = pa.table({
        "ticket_number": ["TKT-10002", "TKT-10001", "TKT-10002"],
        "title":  ["a", "b", "a"],
    })

    deduped = arrow_drop_duplicates(table, ["ticket_number"])
    assert deduped.num_rows == 2
    assert deduped["ticket_number"].to_pylist() == ["TKT-10001", "TKT-10002"]
