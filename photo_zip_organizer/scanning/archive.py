import logging
import os
import zipfile
from pathlib import Path
from typing import Iterator, Tuple, Union

from .. import config
from ..exceptions import ArchiveReadError


def is_image_name(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in config.IMAGE_EXTS


class ZipArchiveReader:
    """
    Yields (entry name, bytes) for every image in a Takeout ZIP, in archive
    order. Directories and non-image members (JSON sidecars, HTML) are skipped.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def iter_entries(self) -> Iterator[Tuple[str, bytes]]:
        try:
            z = zipfile.ZipFile(self.path, "r")
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveReadError(f"Failed to open ZIP file {self.path}: {e}") from e

        ignored = 0
        with z:
            for info in z.infolist():
                if info.is_dir():
                    continue
                if not is_image_name(info.filename):
                    ignored += 1
                    continue
                try:
                    data = z.read(info)
                except (OSError, zipfile.BadZipFile, RuntimeError) as e:
                    # RuntimeError: encrypted member
                    raise ArchiveReadError(f"Failed to read {info.filename} from {self.path}: {e}") from e
                yield info.filename, data

        logging.debug(f"Ignored {ignored} non-image member(s) in {self.path}")


class DirectoryReader:
    """
    Same contract as ZipArchiveReader for a Takeout that was already
    extracted. Names are POSIX paths relative to the root, in sorted order.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _iter_files(self) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            for fn in sorted(filenames):
                yield Path(dirpath) / fn

    def iter_entries(self) -> Iterator[Tuple[str, bytes]]:
        if not self.root.is_dir():
            raise ArchiveReadError(f"Input directory {self.root} does not exist")

        ignored = 0
        for path in self._iter_files():
            if not is_image_name(path.name):
                ignored += 1
                continue
            try:
                data = path.read_bytes()
            except OSError as e:
                raise ArchiveReadError(f"Failed to read {path}: {e}") from e
            yield path.relative_to(self.root).as_posix(), data

        logging.debug(f"Ignored {ignored} non-image file(s) in {self.root}")


def open_reader(path: Path) -> Union[ZipArchiveReader, DirectoryReader]:
    path = Path(path)
    if path.is_dir():
        return DirectoryReader(path)
    if not path.exists():
        raise ArchiveReadError(f"Input path {path} does not exist")
    try:
        is_zip = zipfile.is_zipfile(path)
    except OSError as e:
        raise ArchiveReadError(f"Cannot read input {path}: {e}") from e
    if not is_zip:
        raise ArchiveReadError(f"Input {path} is not a ZIP file")
    return ZipArchiveReader(path)
