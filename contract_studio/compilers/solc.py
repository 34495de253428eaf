"""Solidity compiler backend.

Compiles in-process through py-solc-x's standard-JSON interface.
"""

import asyncio
from typing import Any, Callable

import solcx
from solcx.exceptions import (
    DownloadError,
    SolcError,
    SolcInstallationError,
    SolcNotInstalled,
    UnsupportedVersionError,
)

from contract_studio.compilers.base import CompilationBackend
from contract_studio.compilers.extractor import extract_from_standard_output
from contract_studio.models.compilation import CompilationRequest, CompilationResult


class SolcBackend(CompilationBackend):
    """Backend that runs solc with a standard-JSON request.

    Args:
        solc_version: Compiler version to use
        auto_install: Download the compiler if it is not installed yet
        compile_standard: Replacement for ``solcx.compile_standard``; when
            given, binary management is skipped
    """

    def __init__(
        self,
        solc_version: str = "0.8.24",
        auto_install: bool = True,
        compile_standard: Callable[..., dict[str, Any]] | None = None,
    ):
        self.solc_version = solc_version
        self.auto_install = auto_install
        self._manage_binary = compile_standard is None
        self._compile_standard = compile_standard or solcx.compile_standard
        super().__init__()

    @property
    def name(self) -> str:
        return "solc"

    @property
    def description(self) -> str:
        return f"In-process solc {self.solc_version} via py-solc-x"

    async def compile(self, request: CompilationRequest) -> CompilationResult:
        """Compile with solc and extract the requested contract."""
        self.logger.info(
            "solc.compile_started",
            contract=request.contract_name,
            version=self.solc_version,
        )

        try:
            output = await asyncio.to_thread(self._run, request.to_standard_json())
        except SolcError as e:
            # solc reports error-severity diagnostics by raising
            if not e.error_dict:
                self.logger.error("solc.invocation_failed", error=e.message)
                return self.unavailable(f"Compilation error: {e.message}")
            output = {"errors": e.error_dict}
        except (
            SolcNotInstalled,
            SolcInstallationError,
            DownloadError,
            UnsupportedVersionError,
        ) as e:
            self.logger.error(
                "solc.unavailable",
                version=self.solc_version,
                error=str(e),
            )
            return self.unavailable(
                f"Solidity compiler {self.solc_version} is not available"
            )
        except OSError as e:
            # Offline download or a compiler binary that cannot be executed
            self.logger.error(
                "solc.unreachable",
                version=self.solc_version,
                error=str(e),
            )
            return self.unavailable(
                f"Solidity compiler {self.solc_version} is not available"
            )
        except ValueError as e:
            # Compiler wrote something other than standard-JSON output
            self.logger.error("solc.unreadable_output", error=str(e))
            return self.unavailable("Compiler produced unreadable output")

        result = extract_from_standard_output(
            output, request.contract_name, backend=self.name
        )
        self.logger.info(
            "solc.compile_completed",
            contract=request.contract_name,
            success=result.success,
        )
        return result

    def _run(self, input_data: dict[str, Any]) -> dict[str, Any]:
        if not self._manage_binary:
            return self._compile_standard(input_data)

        self._ensure_solc()
        return self._compile_standard(input_data, solc_version=self.solc_version)

    def _ensure_solc(self) -> None:
        """Install solc if missing."""
        installed = {str(v) for v in solcx.get_installed_solc_versions()}
        if self.solc_version in installed:
            return
        if not self.auto_install:
            raise SolcNotInstalled(
                f"solc {self.solc_version} is not installed and auto-install is disabled"
            )
        self.logger.info("solc.installing", version=self.solc_version)
        solcx.install_solc(self.solc_version)
