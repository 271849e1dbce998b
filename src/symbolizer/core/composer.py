"""Template composition.

Places fitted artwork into a template weight region and widens the
region's margin guides so they enclose the placed artwork.
"""

import structlog

from symbolizer.core.geometry import fit_transform
from symbolizer.domain import Guide, GuidePair, Matrix, Rect, SymbolPath, Variant
from symbolizer.io.template import SymbolTemplate

logger = structlog.get_logger(__name__)

# Clearance kept between placed artwork and the margin guides
GUIDE_PADDING = 10.0


def widen_guides(guides: GuidePair, source: Rect, matrix: Matrix) -> GuidePair:
    """Move the guides outwards so they enclose the fitted artwork.

    The fitted artwork is centred on the region bounds of ``guides``, so its
    half extents plus padding are measured from that centre. Guides are only
    ever moved outwards, and both guides share the top edge.

    Args:
        guides: Guides before placement
        source: Bounds of the artwork in document units
        matrix: Fit transform applied to the artwork

    Returns:
        Widened guide pair
    """
    region = guides.region_bounds
    half_width = source.width * matrix.a / 2 + GUIDE_PADDING
    half_height = source.height * matrix.a / 2 + GUIDE_PADDING

    left = Guide(
        x=min(guides.left.x, region.mid_x - half_width),
        y=min(guides.left.y, region.mid_y - half_height),
    )
    right = Guide(
        x=max(guides.right.x, region.mid_x + half_width),
        y=left.y,
    )
    return GuidePair(left=left, right=right)


class TemplateComposer:
    """Composes collected artwork into a symbol template.

    Example:
        composer = TemplateComposer(SymbolTemplate.make())
        composer.append_paths(Variant.REGULAR, paths, bounds)
    """

    def __init__(self, template: SymbolTemplate) -> None:
        self.template = template

    def append_paths(self, variant: Variant, paths: list[SymbolPath], source_bounds: Rect) -> GuidePair:
        """Fit artwork into a region, replacing its previous content.

        Args:
            variant: Region to fill
            paths: Artwork paths in document units
            source_bounds: Rectangle of the artwork mapped onto the region

        Returns:
            The region's guides after widening

        Raises:
            GeometryError: If source_bounds cannot be fitted
        """
        region = self.template.region(variant)
        guides = region.guides
        matrix = fit_transform(source_bounds, guides.region_bounds)

        region.set_paths([(p.path.applying(matrix), p.class_name) for p in paths])
        widened = widen_guides(guides, source_bounds, matrix)
        region.guides = widened

        logger.debug(
            "Paths composed",
            variant=variant.value,
            paths=len(paths),
            scale=round(matrix.a, 4),
            left=widened.left.x,
            right=widened.right.x,
        )
        return widened
