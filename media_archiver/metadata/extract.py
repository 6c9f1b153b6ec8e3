import logging
from pathlib import Path
from datetime import datetime, timedelta, timezone
from typing import Optional, Any, Iterable, List, Tuple

import exifread
from hachoir.core import config as hachoir_config
from hachoir.core.endian import BIG_ENDIAN
from hachoir.parser.container import MP4File
from hachoir.stream import InputIOStream

from .. import config
from ..exceptions import MetadataExtractionError
from ..models import Extraction, MediaFile
from ..scanning.hasher import DigestStream

# Suppress hachoir warnings to keep console output clean
hachoir_config.quiet = True

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class MetadataExtractor:
    """
    Reads the capture timestamp of a media file and hashes its content.

    Strategies:
      - Images: 'exifread' scans the EXIF segment through a DigestStream,
        then the unread tail is hashed. One pass over the file.
      - Video: 'hachoir' walks the MP4 box tree (random access), then the
        file is re-read from the start for the digest.

    A file without a usable timestamp gives an empty Extraction. Anything
    else that goes wrong raises MetadataExtractionError.
    """

    def extract(self, media: MediaFile) -> Extraction:
        if media.category == 'video':
            return self.read_video(media.path)
        return self.read_image(media.path)

    def read_image(self, path: Path) -> Extraction:
        try:
            with path.open('rb') as f:
                stream = DigestStream(f)
                # details=False skips makernotes and thumbnails
                tags = exifread.process_file(stream, details=False)
                if not tags:
                    logging.debug(f"No EXIF segment in {path}")
                    return Extraction()

                dt = parse_exif_datetime(find_exif_datetime(flatten_tags(tags)))
                if dt is None:
                    return Extraction()

                # The EXIF scan usually stops well before EOF
                stream.read_remaining()
                return Extraction(capture_datetime=dt, digest=stream.finalize())
        except Exception as e:
            raise MetadataExtractionError(f"Cannot read image metadata from {path}: {e}") from e

    def read_video(self, path: Path) -> Extraction:
        try:
            with path.open('rb') as f:
                dt = find_mp4_datetime(f)
                if dt is None:
                    return Extraction()

                stream = DigestStream(f)
                stream.read_remaining()
                return Extraction(capture_datetime=dt, digest=stream.finalize())
        except Exception as e:
            raise MetadataExtractionError(f"Cannot read video metadata from {path}: {e}") from e


# --- EXIF helpers ---

def flatten_tags(tags: dict) -> List[Tuple[str, Any]]:
    """
    exifread keys are '<IFD> <Name>' (e.g. 'EXIF DateTimeOriginal').
    Drops the IFD prefix, keeping exifread's order.
    """
    return [(key.split(' ', 1)[-1], value) for key, value in tags.items()]


def find_tag(tags: Iterable[Tuple[str, Any]], name: str) -> Optional[Any]:
    for tag_name, value in tags:
        if tag_name == name:
            return value
    return None


def find_exif_datetime(tags: Iterable[Tuple[str, Any]]) -> Optional[str]:
    tags = list(tags)
    for name in config.DATE_TAGS:
        value = find_tag(tags, name)
        if value is not None:
            return str(value).strip()
    return None


def parse_exif_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Strict 'YYYY:MM:DD HH:MM:SS'. Malformed values (blank fields,
    '0000:00:00 00:00:00', other layouts) count as missing.
    """
    if not value or not config.EXIF_DATE_PATTERN.match(value):
        return None
    try:
        return datetime.strptime(value, config.EXIF_DATE_FORMAT)
    except ValueError:
        return None


# --- MP4 helpers ---

def mac_epoch_to_datetime(seconds: int) -> datetime:
    return UNIX_EPOCH + timedelta(seconds=seconds - config.MAC_EPOCH_OFFSET)


def find_mp4_datetime(f) -> Optional[datetime]:
    """
    Creation time of the first movie header box, in UTC.

    Only version 0 headers (32-bit seconds since 1904) are supported;
    version 1 and an unset (zero) creation time both give None. Boxes are
    walked in whatever order the file has them, so a stream with no movie
    header (including one that is not an MP4 at all) also gives None.
    """
    # validate=False: QuickTime files may open with 'wide' or 'mdat'
    parser = MP4File(InputIOStream(f), validate=False)

    header = _find_movie_header(parser)
    if header is None:
        return None

    version = header["version"].value
    if version != 0:
        logging.debug(f"Unsupported movie header version {version}")
        return None

    field = header["creation_date"]
    raw = parser.stream.readBits(field.absolute_address, 32, BIG_ENDIAN)
    if raw == 0:
        return None
    return mac_epoch_to_datetime(raw)


def _find_movie_header(parser):
    # Top-level boxes, expanding 'moov' (named 'movie' by hachoir)
    for atom in parser:
        if not atom.is_field_set or "movie" not in atom:
            continue
        for child in atom["movie"]:
            if child.is_field_set and "movie_hdr" in child:
                return child["movie_hdr"]
    return None
