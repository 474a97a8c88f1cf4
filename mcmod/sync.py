"""
Project sync for mcmod.

Copies the configured mod source directories into the Forge workspace.
An incremental sync only copies files whose size or modification time
changed since the last sync; a full sync wipes the destinations first.
"""

import asyncio
import fnmatch
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import yaml

from .config import ProjectConfig
from .errors import SyncError
from .project import Project
from .utils import get_logger, Colors


STATE_FILE_NAME = "sync-state.yaml"


@dataclass
class FileStamp:
    """Size and modification time of a synced source file."""
    size: int
    mtime: float

    def to_dict(self) -> dict:
        return {'size': self.size, 'mtime': self.mtime}

    @classmethod
    def from_dict(cls, data: dict) -> 'FileStamp':
        return cls(size=int(data.get('size', -1)), mtime=float(data.get('mtime', 0.0)))

    @classmethod
    def of(cls, path: Path) -> 'FileStamp':
        st = path.stat()
        return cls(size=st.st_size, mtime=st.st_mtime)


@dataclass
class SyncResult:
    """Outcome of a sync run."""
    copied: int = 0
    skipped: int = 0
    removed: int = 0

    def __str__(self) -> str:
        return f"{self.copied} copied, {self.skipped} unchanged, {self.removed} removed"


class SyncState:
    """Stamps of every file copied by the previous sync, keyed by destination."""

    def __init__(self, path: Path):
        self.path = path
        self.logger = get_logger()

    def load(self) -> dict[str, FileStamp]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            # A broken state file only costs us a full copy
            self.logger.warning(f"Sync state has invalid YAML, ignoring it: {e}")
            return {}

        if not isinstance(data, dict):
            return {}

        files = data.get('files') or {}
        stamps = {}
        for key, value in files.items():
            if isinstance(value, dict):
                stamps[str(key)] = FileStamp.from_dict(value)
        return stamps

    def save(self, stamps: dict[str, FileStamp]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {'files': {key: stamps[key].to_dict() for key in sorted(stamps)}}
        with open(self.path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(data, f, default_flow_style=False)


class SyncCommand:
    """Synchronizes a project into its Forge workspace."""

    def __init__(self, incremental: bool = True):
        self.incremental = incremental
        self.logger = get_logger()

    async def run(self, directory: Union[str, Path]) -> SyncResult:
        """
        Sync the project in directory.

        Raises:
            ProjectError: If the project cannot be located
            SyncError: If a source or the Forge workspace is missing
            OSError: If copying fails
        """
        project = Project.new_in(directory)
        return await asyncio.to_thread(self.sync_project, project.config)

    def _excluded(self, name: str, patterns: list[str]) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)

    def sync_project(self, config: ProjectConfig) -> SyncResult:
        """Run the sync synchronously. Used by run() in a worker thread."""
        started = time.monotonic()

        forge_root = config.forge_root
        if not forge_root.is_dir():
            raise SyncError(f"Forge workspace not found: {forge_root}")

        mode = "incremental" if self.incremental else "full"
        self.logger.info(f"Starting {mode} sync of {config.root}")

        state = SyncState(config.state_dir / STATE_FILE_NAME)
        previous = state.load()
        current: dict[str, FileStamp] = {}
        result = SyncResult()

        for mapping in config.sync.sources:
            source_dir = config.root / mapping.source
            if not source_dir.is_dir():
                raise SyncError(f"Sync source does not exist: {source_dir}")

            dest_dir = forge_root / mapping.destination
            if not self.incremental and dest_dir.exists():
                self.logger.debug(f"Clearing {dest_dir}")
                shutil.rmtree(dest_dir)

            for file_path in sorted(source_dir.rglob("*")):
                if not file_path.is_file():
                    continue
                if self._excluded(file_path.name, config.sync.exclude):
                    continue

                rel = file_path.relative_to(source_dir)
                key = (Path(mapping.destination) / rel).as_posix()
                target = forge_root / key
                stamp = FileStamp.of(file_path)
                current[key] = stamp

                if self.incremental and target.exists() and previous.get(key) == stamp:
                    result.skipped += 1
                    continue

                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(file_path, target)
                result.copied += 1
                self.logger.debug(f"Copied {key}")

        for key in previous.keys() - current.keys():
            target = forge_root / key
            if target.exists():
                target.unlink()
                result.removed += 1
                self.logger.debug(f"Removed {key}")

        state.save(current)

        elapsed = time.monotonic() - started
        self.logger.info(f"Sync finished in {elapsed:.1f}s: {result}")
        print(f"[mcmod] {Colors.success('Synced project')} ({result})")
        return result
