"""Artifact extraction from raw compiler output.

Two shapes are understood:

* standard-JSON output from solc, a mapping of source file to contract name
  to compiled unit, optionally accompanied by an ``errors`` list;
* a single Hardhat artifact file holding one compiled unit.

When the requested contract name is not among the compiled units of the
standard-JSON output, the first unit in the compiler's output order is used.
That choice is implementation-defined and only stable because the parsed
JSON keeps the compiler's key order.
"""

import json
from pathlib import Path
from typing import Any

from contract_studio.models.compilation import (
    VIRTUAL_SOURCE_NAME,
    CompilationFailure,
    CompilationResult,
    CompilationSuccess,
    Diagnostic,
)
from contract_studio.models.errors import ErrorKind
from contract_studio.utils.logging import get_logger

logger = get_logger(__name__)

CONTRACT_NOT_FOUND = "Contract not found in compilation output"


def normalize_bytecode(bytecode: str | None) -> str | None:
    """Add the ``0x`` prefix solc leaves off; the payload itself is untouched."""
    if bytecode is None:
        return None
    if bytecode and not bytecode.startswith("0x"):
        return "0x" + bytecode
    return bytecode


def split_diagnostics(
    entries: list[dict[str, Any]] | None,
) -> tuple[list[Diagnostic], list[Diagnostic]]:
    """Partition compiler messages into (errors, everything else)."""
    errors: list[Diagnostic] = []
    others: list[Diagnostic] = []
    for entry in entries or []:
        diagnostic = Diagnostic.from_compiler(entry)
        (errors if diagnostic.is_error else others).append(diagnostic)
    return errors, others


def select_compiled_unit(
    units: dict[str, Any], contract_name: str
) -> tuple[str, dict[str, Any]] | None:
    """Pick the unit named ``contract_name``, else the first one present."""
    if contract_name in units:
        return contract_name, units[contract_name]
    for name, unit in units.items():
        return name, unit
    return None


def extract_from_standard_output(
    output: dict[str, Any], contract_name: str, backend: str = "solc"
) -> CompilationResult:
    """Turn solc standard-JSON output into a compilation result.

    Args:
        output: Parsed compiler output
        contract_name: Name extracted from the submitted source
        backend: Name reported on the result

    Returns:
        Failure if any error-severity diagnostic is present or no unit
        exists, otherwise the selected unit's ABI and bytecode
    """
    errors, others = split_diagnostics(output.get("errors"))
    if errors:
        return CompilationFailure(
            error="\n".join(d.render() for d in errors),
            error_kind=ErrorKind.COMPILATION_DIAGNOSTIC,
            backend=backend,
            diagnostics=errors + others,
        )

    units = (output.get("contracts") or {}).get(VIRTUAL_SOURCE_NAME) or {}
    selected = select_compiled_unit(units, contract_name)
    if selected is None:
        return CompilationFailure(
            error=CONTRACT_NOT_FOUND,
            error_kind=ErrorKind.ARTIFACT_NOT_FOUND,
            backend=backend,
        )

    unit_name, unit = selected
    if unit_name != contract_name:
        logger.info(
            "extractor.name_fallback",
            requested=contract_name,
            selected=unit_name,
        )

    return CompilationSuccess(
        contract_name=unit_name,
        backend=backend,
        abi=unit.get("abi", []),
        bytecode=normalize_bytecode(
            unit.get("evm", {}).get("bytecode", {}).get("object", "")
        ),
        warnings=[d.render() for d in others],
    )


def extract_from_artifact_file(
    artifact_path: Path, contract_name: str, backend: str = "hardhat"
) -> CompilationSuccess:
    """Read a Hardhat artifact written for ``contract_name``.

    The build has already succeeded by the time this runs, so a missing or
    unreadable artifact yields a success without ABI or bytecode plus a
    warning rather than a failure.
    """
    try:
        artifact = json.loads(artifact_path.read_text(encoding="utf-8"))
        abi = artifact["abi"]
        bytecode = artifact["bytecode"]
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(
            "extractor.artifact_unreadable",
            path=str(artifact_path),
            error=str(e),
        )
        return CompilationSuccess(
            contract_name=contract_name,
            backend=backend,
            abi=None,
            bytecode=None,
            warning=f"Compilation finished but no readable artifact was produced for {contract_name}",
        )

    return CompilationSuccess(
        contract_name=artifact.get("contractName", contract_name),
        backend=backend,
        abi=abi,
        bytecode=normalize_bytecode(bytecode),
    )
