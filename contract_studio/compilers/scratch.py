"""Scratch build workspaces handed to an external build tool."""

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from contract_studio.models.compilation import ContractSource
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)

# Project entries every build gets privately instead of through a link
PRIVATE_ENTRIES = frozenset({"contracts", "artifacts", "cache"})


@dataclass
class ScratchSource:
    """A uniquely named source file inside its own build workspace.

    The workspace is a temporary directory mirroring the build project: its
    configuration and dependencies are symlinked in, while ``contracts/``,
    ``artifacts/`` and ``cache/`` belong to this one build. Use as a context
    manager so ``cleanup()`` runs on every exit path.
    """

    path: Path
    workspace: Path | None = None

    @classmethod
    def create(
        cls,
        directory: Path,
        source: ContractSource,
        project_dir: Path | None = None,
        workspace_root: Path | None = None,
    ) -> "ScratchSource":
        """Write ``source`` to a collision-free file.

        Args:
            directory: Where the file goes; relative to the workspace when
                ``project_dir`` is given
            source: Contract to write
            project_dir: Build project to mirror into a fresh workspace
            workspace_root: Parent of the workspace; the system temp
                directory by default
        """
        workspace = None
        if project_dir is not None:
            if workspace_root is not None:
                workspace_root.mkdir(parents=True, exist_ok=True)
            workspace = Path(
                tempfile.mkdtemp(prefix="build-", dir=workspace_root)
            )
            directory = workspace / directory

        try:
            if workspace is not None:
                link_project(project_dir, workspace)
            directory.mkdir(parents=True, exist_ok=True)
            path = directory / f"{source.contract_name}_{uuid4().hex}.sol"
            path.write_text(source.code, encoding="utf-8")
        except OSError:
            if workspace is not None:
                shutil.rmtree(workspace, ignore_errors=True)
            raise
        return cls(path=path, workspace=workspace)

    @property
    def file_name(self) -> str:
        return self.path.name

    def cleanup(self) -> None:
        """Best-effort removal; failures are logged, not raised."""
        targets = [self.path]
        if self.workspace is not None:
            targets.append(self.workspace)
        for target in targets:
            try:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("scratch.cleanup_failed", path=str(target), error=str(e))

    def __enter__(self) -> "ScratchSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cleanup()


def link_project(project_dir: Path, workspace: Path) -> None:
    """Symlink the shared entries of ``project_dir`` into ``workspace``."""
    if not project_dir.is_dir():
        return
    for entry in project_dir.iterdir():
        if entry.name in PRIVATE_ENTRIES:
            continue
        (workspace / entry.name).symlink_to(entry.resolve(), entry.is_dir())
