import io

import pandas as pd
import pytest

from seo_auditor.services.output_service import export_results, write_console, write_file, write_stream
from seo_auditor.services.source_service import read_source_file, read_source_stream

RESULTS = [
    "In <head>, there are 1 child tag <title>.",
    "In this HTML, there are 0 (less than 1) <h1>.",
]


def test_read_source_file(tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<p>é</p>", encoding="utf-8")
    assert read_source_file(page) == "<p>é</p>"


def test_read_source_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_source_file(tmp_path / "nope.html")


def test_read_source_stream_in_chunks():
    stream = io.BytesIO(("<div>" * 100).encode("utf-8"))
    assert read_source_stream(stream, chunk_size=7) == "<div>" * 100


def test_read_source_stream_splits_multibyte_characters():
    text = "<p>" + "é" * 10 + "</p>"
    stream = io.BytesIO(text.encode("utf-8"))
    assert read_source_stream(stream, chunk_size=4) == text


def test_read_source_stream_truncated_character_raises():
    stream = io.BytesIO("<p>é".encode("utf-8")[:-1])
    with pytest.raises(UnicodeDecodeError):
        read_source_stream(stream, chunk_size=2)


def test_read_source_stream_not_readable():
    class WriteOnly(io.StringIO):
        def readable(self):
            return False

    with pytest.raises(ValueError):
        read_source_stream(WriteOnly())


def test_write_console(capsys):
    write_console(RESULTS)
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["=== Results ==="] + RESULTS + ["==============="]


def test_write_file(tmp_path):
    out = write_file(RESULTS, tmp_path / "results.txt")
    assert out.read_text(encoding="utf-8").splitlines() == RESULTS


def test_write_stream():
    stream = io.StringIO()
    assert write_stream(RESULTS, stream) is stream
    assert stream.getvalue().splitlines() == RESULTS


def test_export_results_csv(tmp_path):
    records = [{"file": "a.html", "rule_index": i, "result": r} for i, r in enumerate(RESULTS)]
    out = export_results(records, tmp_path / "results.csv")
    df = pd.read_csv(out)
    assert list(df.columns) == ["file", "rule_index", "result"]
    assert df["result"].tolist() == RESULTS
    assert df["rule_index"].tolist() == [0, 1]


def test_export_results_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        export_results([], tmp_path / "results.txt")
