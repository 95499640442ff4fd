# tests/test_workflow.py
"""
Tests for workflow.py - installing the GitHub Actions workflow
"""
import pytest
import yaml

from quarjar.errors import ConfigurationError, ConflictError
from quarjar.workflow import (
    WORKFLOW_FILENAME,
    WORKFLOW_TEMPLATE,
    next_steps,
    use_skilljar_workflow,
)


@pytest.fixture
def git_repo(tmp_path):
    (tmp_path / ".git").mkdir()
    return tmp_path


class TestUseSkilljarWorkflow:
    def test_writes_workflow(self, git_repo):
        target = use_skilljar_workflow(git_repo)

        assert target == git_repo.resolve() / ".github" / "workflows" / WORKFLOW_FILENAME
        assert target.read_text(encoding="utf-8") == WORKFLOW_TEMPLATE

    def test_defaults_to_cwd(self, git_repo, monkeypatch):
        monkeypatch.chdir(git_repo)

        target = use_skilljar_workflow()

        assert target.parent == git_repo.resolve() / ".github" / "workflows"

    def test_existing_workflows_dir(self, git_repo):
        workflows = git_repo / ".github" / "workflows"
        workflows.mkdir(parents=True)
        (workflows / "ci.yml").write_text("name: CI\n")

        use_skilljar_workflow(git_repo)

        assert (workflows / "ci.yml").read_text() == "name: CI\n"
        assert (workflows / WORKFLOW_FILENAME).exists()

    def test_requires_git_repo(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Git repository"):
            use_skilljar_workflow(tmp_path)
        assert not (tmp_path / ".github").exists()

    def test_refuses_quarjar_source_tree(self, git_repo):
        (git_repo / "quarjar").mkdir()
        (git_repo / "quarjar" / "workflow.py").write_text("")
        (git_repo / "setup.py").write_text("")

        with pytest.raises(ConfigurationError, match="quarjar package directory"):
            use_skilljar_workflow(git_repo)

    def test_existing_file_conflict(self, git_repo):
        target = use_skilljar_workflow(git_repo)
        target.write_text("customized", encoding="utf-8")

        with pytest.raises(ConflictError, match="already exists"):
            use_skilljar_workflow(git_repo)

        assert target.read_text(encoding="utf-8") == "customized"

    def test_overwrite(self, git_repo):
        target = use_skilljar_workflow(git_repo)
        target.write_text("customized", encoding="utf-8")

        use_skilljar_workflow(git_repo, overwrite=True)

        assert target.read_text(encoding="utf-8") == WORKFLOW_TEMPLATE


class TestWorkflowTemplate:
    """The bundled workflow is valid and drives the quarjar CLI"""

    def test_valid_yaml(self):
        data = yaml.safe_load(WORKFLOW_TEMPLATE)

        # PyYAML reads the bare "on" key as True
        triggers = data.get("on", data.get(True))
        inputs = triggers["workflow_dispatch"]["inputs"]
        assert set(inputs) >= {"qmd-file", "course-id", "lesson-title", "package-title"}

    def test_uses_cli_commands(self):
        assert "quarjar package" in WORKFLOW_TEMPLATE
        assert "quarjar web-package create" in WORKFLOW_TEMPLATE
        assert "quarjar lesson create-web-package" in WORKFLOW_TEMPLATE
        assert "SKILLJAR_API_KEY" in WORKFLOW_TEMPLATE

    def test_next_steps(self):
        steps = next_steps()
        assert steps
        assert any("SKILLJAR_API_KEY" in s for s in steps)
