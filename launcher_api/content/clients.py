"""Client binaries: path resolution, content digest and streaming.

A download reads the file twice: once to compute the digest for the
`X-File-Hash` header, then again while streaming the body. The header has to
be sent before the first body byte, so the digest cannot be produced during
the stream pass.
"""

import hashlib
import logging
import os
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, Optional, Tuple

from ..core.config import Settings
from ..core.errors import ClientFileIOError, ClientFileNotFoundError, HashError
from ..core.models_io import ClientKind, FileDownloadDescriptor

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def client_path(settings: Settings, kind: ClientKind) -> Path:
    """Return the on-disk location of the configured client file."""
    filename = {
        ClientKind.LAUNCHER: settings.launcher_client_file,
        ClientKind.GAME: settings.game_client_file,
    }[kind]
    return settings.clients_dir / filename


def compute_file_hash(path: Path) -> str:
    """
    Compute the MD5 hex digest of a file.

    MD5 is used as an integrity signal for the launcher, not as a security
    guarantee.

    Raises:
        HashError: the file could not be read
    """
    digest = hashlib.md5()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise HashError(f"cannot hash {path}: {e}") from e
    return digest.hexdigest()


def _existing_client_path(settings: Settings, kind: ClientKind) -> Path:
    path = client_path(settings, kind)
    if not path.is_file():
        raise ClientFileNotFoundError(f"file not found: {path}")
    return path


def _hash_or_none(path: Path) -> Optional[str]:
    try:
        return compute_file_hash(path)
    except HashError as e:
        # The download still goes out, just without the hash header
        logger.warning("Hash unavailable for %s: %s", path, e)
        return None


def _build_descriptor(path: Path, stat: Callable[[], os.stat_result]) -> FileDownloadDescriptor:
    """Size the file with `stat` and attach its digest when it can be computed."""
    try:
        size = stat().st_size
    except OSError as e:
        raise ClientFileIOError(f"cannot stat {path}: {e}") from e
    return FileDownloadDescriptor(path=path, filename=path.name, size=size,
                                  hash=_hash_or_none(path))


def describe_client_file(settings: Settings, kind: ClientKind) -> FileDownloadDescriptor:
    """
    Resolve a client file and compute its size and digest without opening it
    for streaming.

    Raises:
        ClientFileNotFoundError: the file does not exist
        ClientFileIOError: the file cannot be inspected
    """
    path = _existing_client_path(settings, kind)
    return _build_descriptor(path, path.stat)


def open_client_download(settings: Settings, kind: ClientKind) -> Tuple[FileDownloadDescriptor, BinaryIO]:
    """
    Resolve, open and describe a client file for download.

    Args:
        settings: service settings
        kind: which client binary to serve

    Returns:
        (descriptor, open binary file); the caller owns the file handle

    Raises:
        ClientFileNotFoundError: the file does not exist
        ClientFileIOError: the file exists but cannot be opened or inspected
    """
    path = _existing_client_path(settings, kind)

    try:
        f = open(path, "rb")
    except OSError as e:
        raise ClientFileIOError(f"cannot open {path}: {e}") from e

    try:
        descriptor = _build_descriptor(path, lambda: os.fstat(f.fileno()))
    except ClientFileIOError:
        f.close()
        raise
    return descriptor, f


def stream_file(f: BinaryIO, descriptor: FileDownloadDescriptor,
                chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """
    Yield the content of an open file and close it afterwards.

    A read error is logged and re-raised so the server drops the connection;
    the client has to restart the download.
    """
    sent = 0
    try:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            sent += len(chunk)
            yield chunk
    except OSError as e:
        logger.error("Failed to send %s after %d bytes: %s", descriptor.filename, sent, e)
        raise
    finally:
        f.close()
    logger.info("Sent %s (%d bytes, hash %s)", descriptor.filename, sent, descriptor.hash)
