# src/tag_helpers/attribute_matcher.py — v1
"""Mode selection from the attributes present on an element.

A tag helper declares a ranked table of ModeAttributes: each row names a
mode and the attributes that must all be present for it to apply. Several
rows may share a mode (alternate attribute combinations).

determine_mode() classifies every row, in table order, as a full match
(nothing missing) or a partial match (some required attributes missing).
The caller picks the highest mode among full matches; with no full match
the element is left untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

ModeT = TypeVar("ModeT")


@dataclass(frozen=True)
class ModeAttributes(Generic[ModeT]):
    """One candidate mode and the attributes it requires."""

    mode: ModeT
    attributes: frozenset[str]

    @classmethod
    def create(cls, mode: ModeT, attributes: Iterable[str]) -> ModeAttributes[ModeT]:
        return cls(mode=mode, attributes=frozenset(attributes))


@dataclass(frozen=True)
class PartialModeMatch(Generic[ModeT]):
    """A table row with at least one required attribute missing."""

    mode_attributes: ModeAttributes[ModeT]
    missing_attributes: frozenset[str]

    @property
    def present_attributes(self) -> frozenset[str]:
        return self.mode_attributes.attributes - self.missing_attributes


@dataclass
class ModeMatchResult(Generic[ModeT]):
    """Partition of a mode table into full and partial matches."""

    full_matches: list[ModeAttributes[ModeT]] = field(default_factory=list)
    partial_matches: list[PartialModeMatch[ModeT]] = field(default_factory=list)

    def selected_mode(self) -> ModeT | None:
        """Highest mode among full matches, or None when nothing applies."""
        if not self.full_matches:
            return None
        return max(m.mode for m in self.full_matches)  # type: ignore[type-var]

    def log_details(
        self,
        log: logging.Logger,
        tag_helper: str,
        unique_id: str,
        view_path: str,
    ) -> None:
        """Log incomplete attribute combinations and the chosen mode.

        Rows where none of the required attributes were given are not
        reported; they are simply modes the author did not ask for.
        """
        for partial in self.partial_matches:
            if not partial.present_attributes:
                continue
            log.warning(
                "Tag helper %s (%s) in view %s: attributes %s are missing for mode %s "
                "(given: %s); that mode will not apply",
                tag_helper,
                unique_id,
                view_path,
                sorted(partial.missing_attributes),
                _mode_name(partial.mode_attributes.mode),
                sorted(partial.present_attributes),
            )

        if not self.full_matches:
            log.debug(
                "Skipping processing for tag helper %s (%s) in view %s: no mode matched",
                tag_helper, unique_id, view_path,
            )
            return

        for match in self.full_matches:
            log.debug(
                "Tag helper %s (%s) fully matched mode %s with %s",
                tag_helper, unique_id, _mode_name(match.mode), sorted(match.attributes),
            )


def determine_mode(
    present_attributes: Iterable[str],
    table: Sequence[ModeAttributes[ModeT]],
) -> ModeMatchResult[ModeT]:
    """Classify every row of table against the present attribute names."""
    present = frozenset(present_attributes)
    result: ModeMatchResult[ModeT] = ModeMatchResult()

    for mode_attributes in table:
        missing = mode_attributes.attributes - present
        if missing:
            result.partial_matches.append(PartialModeMatch(mode_attributes, missing))
        else:
            result.full_matches.append(mode_attributes)

    return result


def _mode_name(mode: object) -> str:
    return getattr(mode, "name", None) or str(mode)
