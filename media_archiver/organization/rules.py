from datetime import datetime

from .. import config


def normalize_extension(ext: str) -> str:
    ext = ext.lower()
    return config.EXT_ALIASES.get(ext, ext)


def derive_path(category: str, timestamp: datetime, digest: bytes, ext: str) -> str:
    """
    Canonical archive path, relative to the destination root:

        <Category>/<YYYY-MM>/<YYYYMMDD-HHMMSS>-<hex digest><ext>

    Pure function of its inputs, so re-running over the same file always
    lands on the same path.
    """
    folder = config.CATEGORY_DIRS[category]
    month = timestamp.strftime(config.MONTH_FORMAT)
    stamp = timestamp.strftime(config.STAMP_FORMAT)
    return f"{folder}/{month}/{stamp}-{digest.hex()}{normalize_extension(ext)}"
