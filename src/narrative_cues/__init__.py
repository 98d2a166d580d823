"""Narrative Cues - attentional-cue and character analysis over annotated Gospel text."""

__version__ = "0.1.0"
