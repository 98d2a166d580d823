"""Character relationships within a chapter.

Two kinds of edge are derived, always from the current occurrence ledger
and cue list, never stored on the characters themselves:

1. Co-occurrence: two characters mentioned in the same verse. Strength is
   the number of shared verses.
2. Causal: a causal cue whose sentence names a character credits that
   character with acting on the chapter's primary agent.
"""

from dataclasses import dataclass, field
from itertools import combinations

import networkx as nx

from ..corpus.state import CorpusState
from ..extract.names import BACKGROUND_CHARACTERS, SPECIAL_CHARACTERS, SPIRIT, find_characters
from ..models.cues import Cue, CueType
from ..models.entities import Character, Occurrence
from ..models.relationships import EdgeType, RelationshipEdge


@dataclass
class CharacterNode:
    """A character as it appears in one chapter's network."""

    name: str
    mentions: int
    importance: float
    is_background: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "mentions": self.mentions,
            "importance": self.importance,
            "is_background": self.is_background,
        }


@dataclass
class ChapterNetwork:
    """Nodes and edges of one chapter."""

    chapter: int
    nodes: list[CharacterNode] = field(default_factory=list)
    edges: list[RelationshipEdge] = field(default_factory=list)

    def to_networkx(self) -> nx.MultiDiGraph:
        """Export as a networkx graph; co-occurrence edges run both ways."""
        graph = nx.MultiDiGraph(chapter=self.chapter)
        for node in self.nodes:
            graph.add_node(
                node.name,
                mentions=node.mentions,
                importance=node.importance,
                is_background=node.is_background,
            )

        for edge in self.edges:
            attrs = {"type": edge.type.value, "weight": edge.strength, "verses": list(edge.verses)}
            graph.add_edge(edge.source, edge.target, key=edge.type.value, **attrs)
            if edge.type == EdgeType.CO_OCCURRENCE:
                graph.add_edge(edge.target, edge.source, key=edge.type.value, **attrs)
        return graph

    def to_dict(self) -> dict:
        return {
            "chapter": self.chapter,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.model_dump(mode="json") for edge in self.edges],
        }


def character_importance(character: Character, chapter_mentions: int) -> float:
    """Relative weight of a character for display.

    Combines mentions in the chapter (capped at 10), mentions overall
    (capped at 50) and a fixed bonus for Jesus, the Spirit and God.
    """
    chapter_score = min(chapter_mentions / 10, 1)
    overall_score = min(character.total_mentions / 50, 1)
    bonus = 0.3 if character.name in SPECIAL_CHARACTERS else 0.0
    return chapter_score * 0.6 + overall_score * 0.4 + bonus


class RelationshipBuilder:
    """Derives relationship edges for a chapter of a parsed corpus."""

    def __init__(self, state: CorpusState):
        self.state = state

    def chapter_occurrences(self, chapter: int) -> dict[str, list[Occurrence]]:
        """Occurrences per character in a chapter; absent characters omitted."""
        sentence_ids = self.state.index.sentence_ids(chapter)
        occurrences: dict[str, list[Occurrence]] = {}
        for character in self.state.characters:
            in_chapter = character.occurrences_in(sentence_ids)
            if in_chapter:
                occurrences[character.name] = in_chapter
        return occurrences

    def _verse_of(self, sentence_id: int) -> int:
        location = self.state.index.location(sentence_id)
        return location[1] if location else 1

    def cooccurrence_edges(self, chapter: int) -> list[RelationshipEdge]:
        """One edge per pair of characters sharing at least one verse."""
        verse_sets = {
            name: {self._verse_of(occ.sentence_id) for occ in occurrences}
            for name, occurrences in self.chapter_occurrences(chapter).items()
        }

        edges = []
        for first, second in combinations(verse_sets, 2):
            shared = verse_sets[first] & verse_sets[second]
            if not shared:
                continue
            source, target = sorted((first, second))
            edges.append(
                RelationshipEdge(
                    source=source,
                    target=target,
                    strength=len(shared),
                    verses=tuple(sorted(shared)),
                    type=EdgeType.CO_OCCURRENCE,
                )
            )
        return edges

    def primary_agent(self, chapter: int) -> str | None:
        """The most-mentioned non-background character of the chapter."""
        candidates = [
            (len(occurrences), name)
            for name, occurrences in self.chapter_occurrences(chapter).items()
            if name not in BACKGROUND_CHARACTERS
        ]
        if not candidates:
            return None
        return min(candidates, key=lambda c: (-c[0], c[1]))[1]

    def causal_edges(self, chapter: int) -> list[RelationshipEdge]:
        """Edges from characters named in causal cues to the primary agent.

        Only characters resolved somewhere in the chapter are credited.
        """
        agent = self.primary_agent(chapter)
        if agent is None:
            return []

        present = self.chapter_occurrences(chapter)

        credited: dict[str, list[Cue]] = {}
        for cue in self.state.get_cues_in_chapter(chapter):
            if cue.type != CueType.CAUSAL:
                continue
            for name in find_characters(cue.text):
                if name != agent and name in present:
                    credited.setdefault(name, []).append(cue)

        return [
            RelationshipEdge(
                source=name,
                target=agent,
                strength=len(cues),
                verses=tuple(sorted({self._verse_of(cue.sentence_id) for cue in cues})),
                type=EdgeType.CAUSAL,
                cue_sentence_ids=tuple(sorted({cue.sentence_id for cue in cues})),
            )
            for name, cues in credited.items()
        ]

    def build(self, chapter: int) -> list[RelationshipEdge]:
        """All edges of a chapter: co-occurrence first, then causal."""
        return self.cooccurrence_edges(chapter) + self.causal_edges(chapter)

    def build_network(self, chapter: int) -> ChapterNetwork:
        """Nodes with importance scores plus all edges of a chapter.

        The Holy Spirit is always present, as a background node when the
        chapter never mentions it.
        """
        occurrences = self.chapter_occurrences(chapter)
        nodes = []
        for name, chapter_occurrences in occurrences.items():
            character = self.state.get_character(name)
            nodes.append(
                CharacterNode(
                    name=name,
                    mentions=len(chapter_occurrences),
                    importance=character_importance(character, len(chapter_occurrences)),
                )
            )

        if SPIRIT not in occurrences:
            nodes.append(CharacterNode(name=SPIRIT, mentions=0, importance=0.5, is_background=True))

        return ChapterNetwork(chapter=chapter, nodes=nodes, edges=self.build(chapter))
