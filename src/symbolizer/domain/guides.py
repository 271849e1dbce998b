"""Margin guides of a template weight region."""

from dataclasses import dataclass

from symbolizer.domain.geometry import Rect

# Fixed geometry of a template weight region, relative to its left guide
REGION_HEIGHT = 70.0
REGION_OFFSET_Y = 26.0


@dataclass(frozen=True)
class Guide:
    """Anchor point of a margin guide line."""

    x: float
    y: float


@dataclass(frozen=True)
class GuidePair:
    """Left and right margin guides of one weight region.

    The region's content rectangle spans the guides horizontally and has a
    fixed height, offset below the left guide's anchor.
    """

    left: Guide
    right: Guide

    @property
    def region_bounds(self) -> Rect:
        """Rectangle the artwork is fitted into."""
        return Rect(
            x=self.left.x,
            y=self.left.y + REGION_OFFSET_Y,
            width=self.right.x - self.left.x,
            height=REGION_HEIGHT,
        )
