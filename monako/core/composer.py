"""
Composition of whitelisted origin files into the Hugo content tree.
"""

import os
import posixpath
import shutil
from pathlib import Path
from typing import List

from ..models import (
    ComposeConfig, ComposeResult, ContentFormat, FilterCriteria, Origin, OriginFile
)
from ..infrastructure.error_handler import ComposeError, handle_io_error
from ..infrastructure.logger import logger
from .filter import FilterEngine
from .postprocess import postprocess


STANDARD_DIR_MODE = 0o700

IGNORED_DIRECTORIES = {".git"}


def _normalize_remote(path: str) -> str:
    path = posixpath.normpath(path.replace("\\", "/")) if path else "."
    return path.lstrip("/") or "."


def get_local_file_path(compose_dir, source_dir: str, target_dir: str, remote_path: str) -> Path:
    """
    Return the local path for a file of an origin.

    The origin's source dir is stripped from the front of the remote path
    and the remainder is placed below `compose_dir/target_dir`.

    Args:
        compose_dir: Root of the composed content tree
        source_dir: Directory in the repository the origin starts at
        target_dir: Directory below the compose root the origin lands in
        remote_path: Path of the file in the repository

    Returns:
        Normalised local path of the file
    """
    source = _normalize_remote(source_dir)
    remote = _normalize_remote(remote_path)

    if source != "." and (remote == source or remote.startswith(source + "/")):
        remote = remote[len(source):].lstrip("/")

    return Path(os.path.normpath(os.path.join(str(compose_dir), target_dir or ".", remote or ".")))


class OriginComposer:
    """Walks a cloned origin and copies its whitelisted files."""

    def __init__(self, config: ComposeConfig):
        self.config = config

    @handle_io_error
    def get_whitelisted_files(self, origin: Origin) -> List[OriginFile]:
        """
        Recursively list whitelisted files below the origin's source dir.

        Raises:
            ComposeError: If the origin was not cloned or the source dir
                does not exist in the snapshot
        """
        if origin.workspace is None:
            raise ComposeError(f"Origin {origin.url} has not been cloned")

        start = _normalize_remote(origin.source_dir)
        root = origin.workspace.resolve()
        start_dir = (root / start).resolve()
        if start_dir != root and root not in start_dir.parents:
            raise ComposeError(f"Source dir '{origin.source_dir}' points outside of {origin.url}")

        if not start_dir.is_dir():
            raise ComposeError(
                f"Source dir '{origin.source_dir}' not found in {origin.url} "
                f"on branch '{origin.branch}'"
            )

        engine = FilterEngine(FilterCriteria(origin.file_whitelist))
        return self._walk(origin, engine, start)

    def _walk(self, origin: Origin, engine: FilterEngine, remote_dir: str) -> List[OriginFile]:
        files: List[OriginFile] = []

        with os.scandir(origin.workspace / remote_dir) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            # Path as stored in the repository
            remote_path = _normalize_remote(posixpath.join(remote_dir, entry.name))

            # Links could point outside the snapshot
            if entry.is_symlink():
                logger.warning(f"Skipping symbolic link {remote_path} in {origin.url}")
                continue

            if entry.is_dir(follow_symlinks=False):
                if entry.name in IGNORED_DIRECTORIES:
                    continue
                files.extend(self._walk(origin, engine, remote_path))
            elif engine.should_include(entry.name):
                files.append(OriginFile(
                    remote_path=remote_path,
                    local_path=get_local_file_path(
                        self.config.content_working_dir,
                        origin.source_dir,
                        origin.target_dir,
                        remote_path,
                    ),
                    origin=origin,
                ))

        return files

    @handle_io_error
    def compose_file(self, file: OriginFile) -> Path:
        """Copy a single file, postprocessing Markdown and Asciidoc."""

        source = file.origin.workspace / file.remote_path
        if source.is_symlink():
            raise ComposeError(f"Refusing to copy symbolic link {file.remote_path}")

        logger.debug(f"Creating local folder '{file.local_path.parent}'")
        file.local_path.parent.mkdir(mode=STANDARD_DIR_MODE, parents=True, exist_ok=True)

        content_format = file.format
        if content_format in (ContentFormat.MARKDOWN, ContentFormat.ASCIIDOC):
            try:
                with open(source, "r", encoding="utf-8", newline="") as f:
                    dirty = f.read()
            except UnicodeDecodeError as e:
                raise ComposeError(f"Markup file {file.remote_path} is not valid UTF-8", e) from e

            with open(file.local_path, "w", encoding="utf-8", newline="") as f:
                f.write(postprocess(dirty, content_format))
        else:
            shutil.copyfile(source, file.local_path)

        print(f"{file.remote_path} -> {file.local_path}")
        return file.local_path

    def compose_origin(self, origin: Origin) -> ComposeResult:
        """Compose every whitelisted file of a cloned origin."""

        result = ComposeResult(origin=origin)

        origin.files = self.get_whitelisted_files(origin)
        if not origin.files:
            logger.warning(
                f"Found no matching files in '{origin.url}' with branch "
                f"'{origin.branch}' in folder '{origin.source_dir}'"
            )

        for file in origin.files:
            result.composed_files.append(self.compose_file(file))

        result.mark_completed()
        logger.debug(
            f"Composed {len(result.composed_files)} files from {origin.display_name} "
            f"in {result.duration_seconds:.2f}s"
        )
        return result


__all__ = ["STANDARD_DIR_MODE", "get_local_file_path", "OriginComposer"]
