from pathlib import Path
from typing import List, Union

from falak.storage.writer import ARTICLE_EXTENSION
from falak.logging_config import logger


KEEP_FILENAME = ".gitkeep"


def clean_output_dir(output_dir: Union[str, Path], extension: str = ARTICLE_EXTENSION, keep_filename: str = KEEP_FILENAME) -> List[str]:
    """Ensure the output directory exists and delete previously generated files from it.

    Only regular files ending in `extension` are removed; the placeholder file
    and anything else are left alone. Returns the names of deleted files.
    """
    output_dir = Path(output_dir)
    if not output_dir.exists():
        output_dir.mkdir(parents=True, exist_ok=True)
        return []

    removed = []
    for entry in sorted(output_dir.iterdir()):
        if entry.name == keep_filename or not entry.is_file():
            continue
        if entry.name.endswith(extension):
            entry.unlink()
            removed.append(entry.name)

    logger.info(f"🧹 Removed {len(removed)} old article(s) from {output_dir}")
    return removed
