import io
import logging
from typing import Optional

import exifread

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import ImageMetadata


class MetadataExtractor:
    """
    Reads the EXIF fields used for dating and filtering from in-memory
    image bytes.

    Uses 'exifread' (fast, Python-native), so archive members never have
    to be extracted to disk first.
    """

    def get_image_metadata(self, content: bytes, name: str = "<memory>") -> Optional[ImageMetadata]:
        """
        Returns ImageMetadata, or None when the bytes carry no readable EXIF.
        Never raises: a corrupt entry must not abort the batch.
        """
        try:
            tags = self._read_tags(content)
        except MetadataExtractionError as e:
            logging.warning(f"EXIF read failed for {name}: {e}")
            return None

        if not tags:
            # Not really an error, just means "no EXIF at all".
            logging.debug("No EXIF tags found for %s", name)
            return None

        return ImageMetadata(
            make=self._tag_str(tags, config.MAKE_TAG),
            model=self._tag_str(tags, config.MODEL_TAG),
            software=self._tag_str(tags, config.SOFTWARE_TAG),
            datetime_original=self._tag_str(tags, config.DATETIME_ORIGINAL_TAG),
        )

    def _read_tags(self, content: bytes) -> dict:
        if not content:
            return {}
        try:
            # details=False skips makernotes and thumbnails
            return exifread.process_file(io.BytesIO(content), details=False)
        except Exception as e:
            raise MetadataExtractionError(str(e)) from e

    @staticmethod
    def _tag_str(tags, key: str) -> Optional[str]:
        if key not in tags:
            return None
        value = str(tags[key]).strip().strip('\x00').strip()
        return value or None
