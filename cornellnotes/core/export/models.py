import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class Page:
    """One output page: a JPEG band and the size it is placed at."""
    image_data: bytes
    pixel_top: int
    pixel_height: int
    width_pt: float
    height_pt: float


@dataclass
class ExportArtifact:
    """The paginated export of one note."""
    filename: str
    pdf_bytes: bytes
    pages: List[Page] = field(default_factory=list)

    # Raster the pages were cut from
    bitmap_width: int = 0
    bitmap_height: int = 0
    scale: float = 1.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def save(self, directory: str) -> Path:
        """
        Write the PDF into ``directory`` under the artifact's filename.

        The file is written to a temp file first and moved into place, so a
        failed write never leaves a truncated PDF behind.

        Returns:
            Path of the written file
        """
        os.makedirs(directory, exist_ok=True)
        target = Path(directory) / self.filename
        temp_fd, temp_path = tempfile.mkstemp(suffix='.pdf', dir=directory)
        try:
            with os.fdopen(temp_fd, 'wb') as f:
                f.write(self.pdf_bytes)
            shutil.move(temp_path, target)
        except OSError:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise
        return target
