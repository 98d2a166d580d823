"""Tests for chapter exports."""

import csv
import json

from narrative_cues.analysis import build_export, write_cues_csv, write_json
from narrative_cues.analysis.export import CUE_CSV_FIELDS


class TestExport:
    """Test JSON and CSV exports."""

    def test_build_export(self, parse_corpus, baptism_corpus):
        """Test the sections of a chapter export."""
        data = build_export(parse_corpus(baptism_corpus), 1)

        assert data["metadata"]["chapter"] == 1
        assert {c["name"] for c in data["characters"]} == {"Holy Spirit", "Jesus"}
        assert data["summary"]["sentence_count"] == 2
        assert [v["verse"] for v in data["intensity"]] == [8, 9]
        assert data["network"]["edges"][0]["source"] == "Holy Spirit"

    def test_unknown_chapter(self, parse_corpus, baptism_corpus):
        """Test exporting a chapter the corpus lacks."""
        data = build_export(parse_corpus(baptism_corpus), 12)
        assert data["summary"] is None
        assert data["cues"] == []

    def test_write_json(self, tmp_path, parse_corpus, baptism_corpus):
        """Test writing the export as UTF-8 JSON."""
        output = tmp_path / "exports" / "mark-1.json"
        write_json(build_export(parse_corpus(baptism_corpus), 1), output)

        loaded = json.loads(output.read_text(encoding="utf-8"))
        assert "Πνευματι" in json.dumps(loaded, ensure_ascii=False)

    def test_write_cues_csv(self, tmp_path, parse_corpus, baptism_corpus):
        """Test writing cues as CSV."""
        state = parse_corpus(baptism_corpus)
        output = tmp_path / "cues.csv"
        count = write_cues_csv(state.cues, output)

        with open(output, encoding="utf-8", newline="") as f:
            rows = list(csv.DictReader(f))
        assert count == len(state.cues) == len(rows)
        assert list(rows[0]) == CUE_CSV_FIELDS
        assert rows[0]["type"] == "causal"
