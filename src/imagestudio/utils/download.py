"""Download filename helpers."""

from datetime import datetime, timezone

FILENAME_PREFIX = "ai-image"
FILE_EXTENSION = "jpg"


def iso_timestamp(moment: datetime) -> str:
    """
    Format a moment as a UTC ISO-8601 string with millisecond precision.

    Naive datetimes are taken to be UTC already.

    >>> iso_timestamp(datetime(2024, 5, 1, 12, 30, 45, 123456, tzinfo=timezone.utc))
    '2024-05-01T12:30:45.123Z'
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime('%Y-%m-%dT%H:%M:%S')}.{moment.microsecond // 1000:03d}Z"


def build_download_filename(moment: datetime, index: int, batch_size: int) -> str:
    """
    Build the file name for one image of a batch.

    Args:
        moment: Time of the download
        index: 0-based position of the image in its batch
        batch_size: Number of images in the batch

    Returns:
        `ai-image-<timestamp>.jpg` for single images, `ai-image-<timestamp>-NN.jpg`
        (1-based, zero-padded) otherwise
    """
    timestamp = iso_timestamp(moment).replace(":", "-").replace(".", "-")
    parts = [FILENAME_PREFIX, timestamp]

    if batch_size > 1:
        parts.append(f"{index + 1:02d}")

    return f"{'-'.join(parts)}.{FILE_EXTENSION}"
