"""Export chapter analyses to JSON and CSV."""

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..corpus.state import CorpusState
from ..models.cues import Cue
from .intensity import IntensityScorer
from .relationships import RelationshipBuilder

CUE_CSV_FIELDS = ["type", "keyword", "sentence_id", "chapter", "verse", "description", "text"]


def build_export(state: CorpusState, chapter: int) -> dict:
    """Collect everything known about a chapter into one JSON-ready dict."""
    summary = state.get_chapter_summary(chapter)
    network = RelationshipBuilder(state).build_network(chapter)
    intensity = IntensityScorer(state).score_chapter(chapter)

    return {
        "metadata": {
            "title": f"{state.book} Narratological Analysis",
            "date": datetime.now().isoformat(),
            "chapter": chapter,
        },
        "characters": [c.model_dump(mode="json") for c in state.characters],
        "cues": [cue.model_dump(mode="json") for cue in state.get_cues_in_chapter(chapter)],
        "summary": summary.to_dict() if summary else None,
        "network": network.to_dict(),
        "intensity": [verse.to_dict() for verse in intensity],
    }


def write_json(data: dict, output_path: Path) -> None:
    """Write a dict as indented UTF-8 JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def write_cues_csv(cues: Iterable[Cue], output_path: Path) -> int:
    """Write cues as CSV rows; returns the number of rows written."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CUE_CSV_FIELDS)
        writer.writeheader()
        for cue in cues:
            row = cue.model_dump(mode="json")
            writer.writerow({name: row[name] for name in CUE_CSV_FIELDS})
            count += 1
    return count
