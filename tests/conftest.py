import io
import zipfile

import pytest
from PIL import Image

from photo_zip_organizer.models import ImageMetadata, ImportEntry

# EXIF tag ids
MAKE = 0x010F
MODEL = 0x0110
SOFTWARE = 0x0131
EXIF_IFD = 0x8769
DATETIME_ORIGINAL = 0x9003


def jpeg_bytes(make=None, model=None, software=None, datetime_original=None, color="red") -> bytes:
    """Builds a tiny real JPEG, optionally carrying EXIF camera/date tags."""
    exif = Image.Exif()
    if make:
        exif[MAKE] = make
    if model:
        exif[MODEL] = model
    if software:
        exif[SOFTWARE] = software
    if datetime_original:
        exif[EXIF_IFD] = {DATETIME_ORIGINAL: datetime_original}

    buf = io.BytesIO()
    with Image.new("RGB", (8, 8), color=color) as im:
        if len(exif):
            im.save(buf, format="JPEG", exif=exif)
        else:
            im.save(buf, format="JPEG")
    return buf.getvalue()


def write_zip(path, files):
    """files: list of (name, bytes) in the order they should appear."""
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as z:
        for name, data in files:
            z.writestr(name, data)
    return path


@pytest.fixture
def make_entry():
    """Returns a factory for ImportEntry objects with structured metadata."""
    def _make(path, make=None, model=None, software=None, datetime_original=None, content=b"\xff\xd8\xff\xd9"):
        md = None
        if any((make, model, software, datetime_original)):
            md = ImageMetadata(make=make, model=model, software=software, datetime_original=datetime_original)
        return ImportEntry(path, content, md)
    return _make


@pytest.fixture
def takeout_zip(tmp_path):
    """
    A small Takeout-like archive: nested album folders, JSON sidecars and
    a mix of camera, phone, edited and generated files.
    """
    files = [
        ("Takeout/Google Photos/Photos from 2012/DSC_9157.JPG",
         jpeg_bytes(make="NIKON CORPORATION", model="NIKON D7000", datetime_original="2012:10:06 13:09:32")),
        ("Takeout/Google Photos/Photos from 2012/DSC_9157.JPG.json", b'{"title": "DSC_9157.JPG"}'),
        ("Takeout/Google Photos/Photos from 2015/IMG-20150108-WA0000.jpg", jpeg_bytes(color="green")),
        ("Takeout/Google Photos/Photos from 2014/2014-09-29.jpg", jpeg_bytes(color="blue")),
        ("Takeout/Google Photos/Photos from 2016/photo.jpg",
         jpeg_bytes(make="Google", model="Pixel", datetime_original="2016:03:04 05:06:07")),
        ("Takeout/Google Photos/Photos from 2016/photo-edited.jpg", jpeg_bytes(color="yellow")),
        ("Takeout/Google Photos/Photos from 2016/photo-MIX.jpg", jpeg_bytes(color="white")),
        ("Takeout/archive_browser.html", b"<html></html>"),
    ]
    return write_zip(tmp_path / "takeout.zip", files)
