"""Avatar upload gating and file storage."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..core.config import AVATAR_ALLOWED_TYPES, AVATAR_MAX_BYTES
from ..core.errors import AvatarRejectedError
from ..core.time import epoch_millis

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".png"
MISSING_FILE_MESSAGE = "Avatar file is required."
TYPE_MESSAGE = "Only PNG and JPG uploads are allowed."
SIZE_MESSAGE = "File too large"


@dataclass(frozen=True)
class AvatarUpload:
    """An uploaded file as received from the multipart form."""

    data: bytes
    content_type: Optional[str]
    filename: Optional[str]


@dataclass(frozen=True)
class AvatarPolicy:
    allowed_types: Sequence[str] = AVATAR_ALLOWED_TYPES
    max_bytes: int = AVATAR_MAX_BYTES


@dataclass(frozen=True)
class AvatarAccepted:
    filename: str
    path: Path


def generate_avatar_name(original: Optional[str], now_ms: Optional[int] = None) -> str:
    """Build ``<millis>-<random>.<ext>`` keeping the original extension."""

    ext = os.path.splitext(original or "")[1].lower() or DEFAULT_EXTENSION
    stamp = now_ms if now_ms is not None else epoch_millis()
    return f"{stamp}-{random.randint(0, 10**9)}{ext}"


class AvatarFileStore:
    """Write-once file storage rooted at the upload directory."""

    def __init__(
        self,
        root: Path,
        name_factory: Callable[[Optional[str]], str] = generate_avatar_name,
    ) -> None:
        self.root = Path(root)
        self.name_factory = name_factory

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, data: bytes, original_name: Optional[str]) -> Path:
        """Persist bytes under a fresh name; existing files are never replaced."""

        self.ensure_root()
        while True:
            destination = self.root / self.name_factory(original_name)
            try:
                with destination.open("xb") as handle:
                    handle.write(data)
            except FileExistsError:
                continue
            return destination

    def resolve(self, filename: str) -> Optional[Path]:
        """Return the stored file for ``filename`` or None when absent or unsafe."""

        if not filename or Path(filename).name != filename or filename.startswith("."):
            return None
        candidate = self.root / filename
        return candidate if candidate.is_file() else None


def check_avatar(upload: Optional[AvatarUpload], policy: AvatarPolicy) -> AvatarUpload:
    """Apply the upload gates in order; the first failure wins."""

    if upload is None:
        raise AvatarRejectedError(MISSING_FILE_MESSAGE)
    if upload.content_type not in policy.allowed_types:
        raise AvatarRejectedError(TYPE_MESSAGE)
    if len(upload.data) > policy.max_bytes:
        raise AvatarRejectedError(SIZE_MESSAGE)
    return upload


def ingest_avatar(
    upload: Optional[AvatarUpload],
    files: AvatarFileStore,
    policy: AvatarPolicy = AvatarPolicy(),
) -> AvatarAccepted:
    """Validate and store an avatar, returning the stored reference."""

    try:
        accepted = check_avatar(upload, policy)
    except AvatarRejectedError as exc:
        logger.info("Rejected avatar upload: %s", exc.message)
        raise

    path = files.save(accepted.data, accepted.filename)
    logger.info("Stored avatar %s (%d bytes)", path.name, len(accepted.data))
    return AvatarAccepted(filename=path.name, path=path)


__all__ = [
    "AvatarAccepted",
    "AvatarFileStore",
    "AvatarPolicy",
    "AvatarUpload",
    "MISSING_FILE_MESSAGE",
    "SIZE_MESSAGE",
    "TYPE_MESSAGE",
    "check_avatar",
    "generate_avatar_name",
    "ingest_avatar",
]
