"""Hardhat compilation backend.

Runs the project's build tool as a subprocess and reads the artifact it
writes for the submitted contract.
"""

import asyncio
import contextlib
import shlex
from pathlib import Path

from contract_studio.compilers.base import CompilationBackend
from contract_studio.compilers.extractor import extract_from_artifact_file
from contract_studio.compilers.scratch import ScratchSource
from contract_studio.models.compilation import (
    VIRTUAL_SOURCE_NAME,
    CompilationRequest,
    CompilationResult,
)

# Longest slice of build output returned to callers
MAX_ERROR_OUTPUT = 2000


class HardhatBackend(CompilationBackend):
    """Backend that shells out to ``npx hardhat compile``.

    Every request builds in its own temporary workspace that links the
    project's configuration and dependencies but has private ``contracts/``,
    ``artifacts/`` and ``cache/`` directories, so a concurrent build can
    neither break nor read another one. The workspace is removed afterwards.
    """

    def __init__(
        self,
        project_dir: Path | str,
        command: str | list[str] = "npx hardhat compile",
        timeout: float = 30.0,
        workspace_root: Path | str | None = None,
    ):
        self.project_dir = Path(project_dir)
        self.command = shlex.split(command) if isinstance(command, str) else list(command)
        self.timeout = timeout
        self.workspace_root = Path(workspace_root) if workspace_root else None
        super().__init__()

    @property
    def name(self) -> str:
        return "hardhat"

    @property
    def description(self) -> str:
        return f"External build tool: {' '.join(self.command)}"

    @staticmethod
    def artifact_dir(workspace: Path, source_file_name: str) -> Path:
        """Directory Hardhat writes the artifacts of one source file to."""
        return workspace / "artifacts" / "contracts" / source_file_name

    async def compile(self, request: CompilationRequest) -> CompilationResult:
        """Build the source with the external tool and read its artifact."""
        contract_name = request.contract_name

        try:
            scratch = ScratchSource.create(
                Path("contracts"),
                request.source,
                project_dir=self.project_dir,
                workspace_root=self.workspace_root,
            )
        except OSError as e:
            self.logger.error(
                "hardhat.scratch_failed",
                project_dir=str(self.project_dir),
                error=str(e),
            )
            return self.unavailable("Build workspace is not available")

        with scratch:
            workspace = scratch.workspace
            self.logger.info(
                "hardhat.compile_started",
                contract=contract_name,
                source=scratch.file_name,
            )

            ok, error = await self._run_build(workspace)
            if not ok:
                message = self._sanitize(error or "", workspace, scratch.file_name)
                self.logger.error(
                    "hardhat.compile_failed",
                    contract=contract_name,
                    error_preview=message[:500],
                )
                return self.unavailable(message)

            result = extract_from_artifact_file(
                self.artifact_dir(workspace, scratch.file_name) / f"{contract_name}.json",
                contract_name,
                backend=self.name,
            )

        self.logger.info(
            "hardhat.compile_completed",
            contract=contract_name,
            degraded=result.abi is None,
        )
        return result

    async def _run_build(self, workspace: Path) -> tuple[bool, str | None]:
        """Run the build command inside ``workspace``.

        The child is killed and reaped on every early exit, cancellation
        included.

        Returns:
            Tuple of (success, error_output)
        """
        try:
            process = await asyncio.create_subprocess_exec(
                *self.command,
                cwd=str(workspace),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            self.logger.error(
                "hardhat.start_failed",
                command=self.command[0],
                error=str(e),
            )
            return False, f"Build tool could not be started: {self.command[0]}"

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            return False, f"Compilation timed out after {self.timeout:g} seconds"
        finally:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await process.wait()

        stdout_text = stdout.decode(errors="replace") if stdout else ""
        stderr_text = stderr.decode(errors="replace") if stderr else ""

        if process.returncode != 0:
            error_output = (stderr_text.strip() or stdout_text.strip())[:MAX_ERROR_OUTPUT]
            return False, error_output or f"Build tool exited with code {process.returncode}"

        return True, None

    def _sanitize(self, output: str, workspace: Path, source_file_name: str) -> str:
        """Strip workspace and project locations from build output."""
        locations = {str(workspace.resolve()), str(workspace), str(self.project_dir.resolve())}
        for location in sorted(locations, key=len, reverse=True):
            output = output.replace(location, ".")
        return output.replace(source_file_name, VIRTUAL_SOURCE_NAME)
