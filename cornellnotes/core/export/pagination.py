"""
Slicing a tall document raster into page-sized bands.
"""
from dataclasses import dataclass
from typing import List

from cornellnotes.utils.config import PAGE_HEIGHT_PT, PAGE_WIDTH_PT


@dataclass(frozen=True)
class PageBand:
    """One horizontal slice of the document raster mapped to one output page."""
    top: int  # first pixel row
    height: int  # pixel rows
    width_pt: float  # placed size on the page
    height_pt: float


def plan_page_bands(bitmap_width: int, bitmap_height: int,
                    page_width_pt: float = PAGE_WIDTH_PT,
                    page_height_pt: float = PAGE_HEIGHT_PT) -> List[PageBand]:
    """
    Compute the bands a raster is cut into.

    The raster is mapped to the page width with ``k = bitmap_width / page_width_pt``.
    If the mapped height fits one page, one band covers everything. Otherwise
    bands of ``round(page_height_pt * k)`` rows are taken from row 0 downwards;
    the last band holds the remainder and is not padded.

    Args:
        bitmap_width: Raster width in pixels
        bitmap_height: Raster height in pixels
        page_width_pt: Page width in points
        page_height_pt: Page height in points

    Returns:
        Contiguous, non-overlapping bands ordered top to bottom
    """
    if bitmap_width <= 0 or bitmap_height <= 0:
        raise ValueError(f"Invalid raster size {bitmap_width}x{bitmap_height}")

    k = bitmap_width / page_width_pt
    if bitmap_height / k <= page_height_pt:
        return [PageBand(0, bitmap_height, page_width_pt, bitmap_height / k)]

    band_rows = max(1, round(page_height_pt * k))
    bands = []
    top = 0
    while top < bitmap_height:
        rows = min(band_rows, bitmap_height - top)
        bands.append(PageBand(top, rows, page_width_pt, rows / k))
        top += rows
    return bands
