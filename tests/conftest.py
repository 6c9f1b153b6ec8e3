import struct
import pytest

ASCII = 2
LONG = 4
TAG_DATETIME = 0x0132
TAG_EXIF_OFFSET = 0x8769
TAG_DATETIME_ORIGINAL = 0x9003


def build_tiff(date_time=None, date_time_original=None) -> bytes:
    """Big-endian TIFF with IFD0 (DateTime) and an EXIF sub-IFD (DateTimeOriginal)."""
    ifd0_tags = []
    if date_time is not None:
        ifd0_tags.append((TAG_DATETIME, date_time.encode("ascii") + b"\x00"))
    exif_tags = []
    if date_time_original is not None:
        exif_tags.append((TAG_DATETIME_ORIGINAL, date_time_original.encode("ascii") + b"\x00"))

    n0 = len(ifd0_tags) + (1 if exif_tags else 0)
    ifd0_off = 8
    exif_off = ifd0_off + 2 + 12 * n0 + 4
    data_off = exif_off + (2 + 12 * len(exif_tags) + 4 if exif_tags else 0)
    data = bytearray()

    def entry(tag, payload):
        if len(payload) <= 4:
            value = payload.ljust(4, b"\x00")
        else:
            value = struct.pack(">I", data_off + len(data))
            data.extend(payload)
        return struct.pack(">HHI", tag, ASCII, len(payload)) + value

    ifd0 = struct.pack(">H", n0)
    for tag, payload in ifd0_tags:
        ifd0 += entry(tag, payload)
    if exif_tags:
        ifd0 += struct.pack(">HHII", TAG_EXIF_OFFSET, LONG, 1, exif_off)
    ifd0 += struct.pack(">I", 0)

    exif = b""
    if exif_tags:
        exif = struct.pack(">H", len(exif_tags))
        for tag, payload in exif_tags:
            exif += entry(tag, payload)
        exif += struct.pack(">I", 0)

    return b"MM\x00\x2a" + struct.pack(">I", ifd0_off) + ifd0 + exif + bytes(data)


def build_jpeg(tail=b"", **tags) -> bytes:
    """SOI, APP1 'Exif' segment, then `tail` as stand-in image data."""
    app1 = b"Exif\x00\x00" + build_tiff(**tags)
    return b"\xff\xd8\xff\xe1" + struct.pack(">H", len(app1) + 2) + app1 + tail + b"\xff\xd9"


def box(kind: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", 8 + len(payload)) + kind + payload


def build_mvhd(creation: int, version: int = 0) -> bytes:
    if version == 0:
        body = struct.pack(">B3xIIII", 0, creation, creation, 1000, 0)
    else:
        body = struct.pack(">B3xQQIQ", 1, creation, creation, 1000, 0)
    body += struct.pack(">IH10x", 0x00010000, 0x0100)
    body += struct.pack(">9I", 0x00010000, 0, 0, 0, 0x00010000, 0, 0, 0, 0x40000000)
    body += b"\x00" * 24 + struct.pack(">I", 2)
    return box(b"mvhd", body)


def build_ftyp() -> bytes:
    return box(b"ftyp", b"isom" + struct.pack(">I", 0x200) + b"isomiso2mp41")


def build_mp4(creation: int, version: int = 0, mdat: bytes = b"\x00" * 64) -> bytes:
    moov = box(b"moov", build_mvhd(creation, version))
    return build_ftyp() + moov + box(b"mdat", mdat)


@pytest.fixture
def make_jpeg():
    """Writes a JPEG with the given EXIF dates to path and returns path."""
    def _make(path, tail=b"image-data", **tags):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_jpeg(tail=tail, **tags))
        return path
    return _make


@pytest.fixture
def make_dng():
    def _make(path, **tags):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_tiff(**tags) + b"raw-sensor-data" * 16)
        return path
    return _make


@pytest.fixture
def make_mp4():
    def _make(path, creation, version=0, mdat=b"\x00" * 64):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_mp4(creation, version=version, mdat=mdat))
        return path
    return _make


@pytest.fixture
def make_boxes():
    """Writes the given top-level boxes, in order, to path."""
    def _make(path, *boxes):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"".join(boxes))
        return path
    return _make
