"""Transient on-disk copies of downloaded attachments."""

import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Union

from webex_agents.adapters.files.extractor import SUFFIX_BY_FORMAT, detect_format
from webex_agents.domain.models import DownloadedFile


def _log(msg: str):
    print(msg, file=sys.stderr)


def save_download(downloaded: DownloadedFile, download_dir: Union[str, Path]) -> Path:
    """Write ``downloaded`` under ``download_dir`` with a suffix matching its format."""
    directory = Path(download_dir)
    directory.mkdir(parents=True, exist_ok=True)
    fmt = detect_format(downloaded.filename, downloaded.content_type)
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    path = directory / f"upload-{stamp}-{uuid.uuid4().hex[:8]}{SUFFIX_BY_FORMAT[fmt]}"
    path.write_bytes(downloaded.content)
    return path


def discard(path: Union[str, Path, None]) -> None:
    """Best-effort removal; a failed unlink is logged, never raised."""
    if path is None:
        return
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        _log(f"[FILES] could not remove {path}: {e}")
