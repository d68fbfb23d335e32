"""Zip packaging of the output tree."""

import zipfile
from pathlib import Path

from loguru import logger


def zip_folder(source_dir: Path, zip_path: Path) -> int:
    """
    Pack every file below source_dir into zip_path, paths relative to source_dir.

    Returns:
        Number of files written
    """
    source_dir = Path(source_dir)
    zip_path = Path(zip_path)
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Nothing to archive, {source_dir} is not a directory")

    count = 0
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for path in sorted(source_dir.rglob("*")):
            if not path.is_file() or path.resolve() == zip_path.resolve():
                continue
            archive.write(path, path.relative_to(source_dir).as_posix())
            count += 1

    logger.info(f"Archived {count} files into {zip_path}")
    return count
