"""Fuzzy ranking of instances against a free-text query."""

from dataclasses import dataclass
from typing import Any, Iterable

from rapidfuzz import fuzz as rf_fuzz
from rapidfuzz.distance import Indel
from rich.markup import escape
from thefuzz import fuzz

from ..core import PickerConfig
from ..models import Candidate, Instance

Span = tuple[int, int]


@dataclass(frozen=True)
class Match:
    score: float
    spans: tuple[Span, ...] = ()


def resolve_name(instance: Instance, placeholder: str = "<unnamed>") -> str:
    return instance.name or instance.hostname or placeholder


def is_subsequence(needle: str, haystack: str) -> bool:
    it = iter(haystack)
    return all(ch in it for ch in needle)


def matched_spans(needle: str, haystack: str) -> tuple[Span, ...]:
    """Character ranges of haystack aligned with needle.

    The best partial-ratio window is located first, then Indel opcodes
    inside that window pick out the characters that actually match.
    """
    alignment = rf_fuzz.partial_ratio_alignment(needle, haystack)
    if alignment is None or alignment.score == 0:
        return ()
    start, end = alignment.dest_start, alignment.dest_end
    spans = []
    for op in Indel.opcodes(needle, haystack[start:end]):
        if op.tag == "equal":
            spans.append((start + op.dest_start, start + op.dest_end))
    return tuple(spans)


def fuzzy_match(query: str, text: str, config: PickerConfig) -> Match:
    """Score query against text, case-insensitively.

    partial_ratio favours long contiguous runs. Texts containing every
    query character in order and texts starting with the query earn
    configurable bonuses on top. An empty query scores 0 against anything.
    """
    needle = query.strip().lower()
    haystack = text.lower()
    if not needle:
        return Match(0.0)

    score = float(fuzz.partial_ratio(needle, haystack))
    if is_subsequence(needle, haystack):
        score += config.subsequence_bonus
    if haystack.startswith(needle):
        score += config.prefix_bonus
    return Match(score, matched_spans(needle, haystack))


def highlight(text: str, spans: Iterable[Span], start: str, end: str) -> str:
    """Escape text for rich markup and wrap the spans in highlight markers"""
    out = []
    pos = 0
    for lo, hi in sorted(spans):
        lo, hi = max(lo, pos), min(hi, len(text))
        if lo >= hi:
            continue
        out.append(escape(text[pos:lo]))
        out.append(f"{start}{escape(text[lo:hi])}{end}")
        pos = hi
    out.append(escape(text[pos:]))
    return "".join(out)


class MatchRanker:
    def __init__(self, config: PickerConfig):
        self.config = config

    def annotations(self, instance: Instance) -> list[str]:
        parts = []
        if instance.state != self.config.normal_state:
            parts.append(f"[bold red]{escape(instance.state or 'unknown')}[/]")
        parts.extend(
            escape(p) for p in (instance.availability_zone, instance.hostname) if p
        )
        return parts

    def label(self, name: str, spans: Iterable[Span], instance: Instance) -> str:
        cfg = self.config
        highlighted = highlight(name, spans, cfg.highlight_start, cfg.highlight_end)
        annotation = cfg.annotation_separator.join(self.annotations(instance))
        if not annotation:
            return highlighted
        return f"{highlighted} [dim]({annotation})[/]"

    def rank(self, instances: list[dict[str, Any]], query: str) -> list[Candidate]:
        """Candidates for every instance, best match first"""
        cfg = self.config
        parsed = [Instance.from_raw(raw) for raw in instances]
        names = [resolve_name(i, cfg.unnamed_placeholder) for i in parsed]
        width = max((len(n) for n in names), default=0) + cfg.name_margin

        candidates = []
        for instance, name in zip(parsed, names):
            # Pad so offsets score alike across names of different lengths
            match = fuzzy_match(query, name.ljust(width), cfg)
            candidates.append(
                Candidate(
                    display_label=self.label(name, match.spans, instance),
                    sort_key=name,
                    score=match.score,
                    value=instance.hostname,
                )
            )

        candidates.sort(
            key=lambda c: (-c.score, -len(c.sort_key), c.sort_key, c.value)
        )
        return candidates
