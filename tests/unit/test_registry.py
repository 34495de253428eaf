"""Tests for the backend registry and scratch sources."""

from pathlib import Path

import pytest

from contract_studio.compilers.hardhat import HardhatBackend
from contract_studio.compilers.registry import BackendRegistry, build_backend
from contract_studio.compilers.scratch import ScratchSource
from contract_studio.compilers.solc import SolcBackend
from contract_studio.config import Settings
from contract_studio.models.compilation import ContractSource


class TestBackendRegistry:
    """Tests for BackendRegistry."""

    def test_registration_order_is_fallback_order(self, tmp_path: Path):
        hardhat = HardhatBackend(tmp_path)
        solc = SolcBackend()
        registry = BackendRegistry([hardhat, solc])

        assert registry.list_backends() == ["hardhat", "solc"]
        assert registry.ordered() == [hardhat, solc]
        assert registry.get("solc") is solc
        assert registry.get("truffle") is None

    def test_register_replaces_same_name(self):
        registry = BackendRegistry([SolcBackend(solc_version="0.8.19")])
        replacement = SolcBackend(solc_version="0.8.24")

        registry.register(replacement)

        assert registry.ordered() == [replacement]

    def test_build_backend(self, tmp_path: Path):
        config = Settings(
            _env_file=None,
            solc_version="0.8.20",
            hardhat_project_dir=tmp_path,
            hardhat_timeout=5,
            hardhat_workspace_dir=tmp_path / "work",
        )

        solc = build_backend("solc", config)
        hardhat = build_backend("hardhat", config)

        assert solc.solc_version == "0.8.20"
        assert hardhat.project_dir == tmp_path
        assert hardhat.timeout == 5
        assert hardhat.workspace_root == tmp_path / "work"

        with pytest.raises(ValueError):
            build_backend("remix", config)


class TestScratchSource:
    """Tests for ScratchSource."""

    def test_unique_names(self, tmp_path: Path):
        source = ContractSource(code="contract A {}", contract_name="A")

        with ScratchSource.create(tmp_path, source) as first, ScratchSource.create(
            tmp_path, source
        ) as second:
            assert first.path != second.path
            assert first.file_name.startswith("A_")
            assert first.path.read_text() == "contract A {}"

        assert list(tmp_path.iterdir()) == []

    def test_workspace_mirrors_project(self, tmp_path: Path):
        """Test shared project files are linked and build directories are private."""
        project = tmp_path / "project"
        (project / "contracts").mkdir(parents=True)
        (project / "contracts" / "Existing.sol").write_text("contract Existing {}")
        (project / "cache").mkdir()
        (project / "node_modules").mkdir()
        (project / "hardhat.config.js").write_text("module.exports = {}")
        source = ContractSource(code="contract A {}", contract_name="A")

        scratch = ScratchSource.create(
            Path("contracts"), source, project_dir=project, workspace_root=tmp_path / "work"
        )
        workspace = scratch.workspace

        assert scratch.path.parent == workspace / "contracts"
        assert [p.name for p in (workspace / "contracts").iterdir()] == [scratch.file_name]
        assert (workspace / "hardhat.config.js").is_symlink()
        assert (workspace / "node_modules").is_symlink()
        assert not (workspace / "cache").exists()

        scratch.cleanup()

        assert not workspace.exists()
        assert (project / "node_modules").is_dir()
        assert (project / "hardhat.config.js").read_text() == "module.exports = {}"
        assert (project / "contracts" / "Existing.sol").exists()

    def test_workspaces_are_unique(self, tmp_path: Path):
        source = ContractSource(code="contract A {}", contract_name="A")

        with ScratchSource.create(
            Path("contracts"), source, project_dir=tmp_path / "missing", workspace_root=tmp_path
        ) as first, ScratchSource.create(
            Path("contracts"), source, project_dir=tmp_path / "missing", workspace_root=tmp_path
        ) as second:
            assert first.workspace != second.workspace

        assert list(tmp_path.iterdir()) == []

    def test_cleanup_on_error(self, tmp_path: Path):
        source = ContractSource(code="contract A {}", contract_name="A")

        with pytest.raises(RuntimeError):
            with ScratchSource.create(tmp_path, source):
                raise RuntimeError("build crashed")

        assert list(tmp_path.iterdir()) == []
