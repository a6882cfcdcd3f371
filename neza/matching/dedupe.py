"""Offer deduplicator — one offer per lending entity."""

from __future__ import annotations

from neza.schemas.matching import ProductMatch


def _beats(candidate: ProductMatch, incumbent: ProductMatch) -> bool:
    """Higher score wins; on equal score the lower estimated rate wins."""
    if candidate.compatibility_score != incumbent.compatibility_score:
        return candidate.compatibility_score > incumbent.compatibility_score
    return candidate.estimated_rate < incumbent.estimated_rate


def dedupe(matches: list[ProductMatch]) -> list[ProductMatch]:
    """Keep only the best match per entity.

    Survivors keep their relative order from the input, so a ranked input
    stays ranked. On a full tie the earlier match is kept.
    """
    # entity id -> (input position, best match so far)
    best: dict[str, tuple[int, ProductMatch]] = {}
    for position, match in enumerate(matches):
        entry = best.get(match.entity_id)
        if entry is None or _beats(match, entry[1]):
            best[match.entity_id] = (position, match)

    return [match for _, match in sorted(best.values(), key=lambda entry: entry[0])]
