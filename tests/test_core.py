"""
Unit tests for core modules: clean_message, truncate_diff, PromptBuilder, Config, GitAnalyzer.

Run with:
    pytest tests/test_core.py -v
"""

import json
import shutil
import subprocess

import pytest

from ai_commits.cli.utils import clean_message, write_output
from ai_commits.config import Config, ConfigManager, RunOptions, DEFAULT_IGNORED_PATTERNS
from ai_commits.git.analyzer import CommitLog, GitAnalyzer, GitError, StagedChanges
from ai_commits.git.diff_processor import TRUNCATION_MARKER, exclude_pathspecs, truncate_diff
from ai_commits.prompts.builder import (
    COMMIT_RULES,
    COMMIT_TRIGGER,
    MODE_RULES,
    RELEASE_RULES,
    RELEASE_TRIGGER,
    PromptBuilder,
    PromptModes,
    compose,
)


# ---------------------------------------------------------------------------
# clean_message
# ---------------------------------------------------------------------------

class TestCleanMessage:

    def test_strips_fences_and_padding(self):
        assert clean_message("```\nfoo\n\nbar\n```\n") == "foo\n\nbar"

    def test_strips_fence_with_language(self):
        raw = "```text\nfix(api): handle timeout\n```"
        assert clean_message(raw) == "fix(api): handle timeout"

    def test_preserves_body(self):
        raw = "feat(auth): add login\n\n- add endpoint\n- validate creds"
        assert clean_message(raw) == raw

    def test_strips_leading_whitespace_lines(self):
        raw = "   \n\n\nfeat(cli): add flag\n\n  \n"
        assert clean_message(raw) == "feat(cli): add flag"

    def test_keeps_every_interior_blank_line(self):
        raw = "title\n\n\nbody"
        assert clean_message(raw) == "title\n\n\nbody"

    def test_fence_mid_message_removed(self):
        raw = "fix: quote args\n```\n- escape spaces\n```"
        assert clean_message(raw) == "fix: quote args\n- escape spaces"

    def test_indented_backticks_are_not_fences(self):
        raw = "docs: explain\n    ```inline```"
        assert clean_message(raw) == raw

    def test_only_fences_is_empty(self):
        assert clean_message("```\n```\n") == ""

    def test_empty_input(self):
        assert clean_message("") == ""

    @pytest.mark.parametrize("raw", [
        "```\nfoo\n\nbar\n```\n",
        "\n\n  \nfeat: x\n\n\n- a\n\n",
        "```python\n\n\ncode\n```\n\n```",
        "plain",
        "\r\nwindows\r\n\r\nlines\r\n",
        "",
    ])
    def test_idempotent(self, raw):
        once = clean_message(raw)
        assert clean_message(once) == once


# ---------------------------------------------------------------------------
# write_output
# ---------------------------------------------------------------------------

class TestWriteOutput:

    def test_stdout_by_default(self, capsys):
        write_output("feat: add thing")
        assert capsys.readouterr().out == "feat: add thing\n"

    def test_file_gets_single_trailing_newline(self, tmp_path, capsys):
        target = tmp_path / "COMMIT_EDITMSG"
        write_output("feat: add thing\n\n- detail", str(target))
        assert target.read_text(encoding="utf-8") == "feat: add thing\n\n- detail\n"
        assert capsys.readouterr().out == ""


# ---------------------------------------------------------------------------
# Diff truncation
# ---------------------------------------------------------------------------

class TestTruncateDiff:

    @pytest.mark.parametrize("limit", [1, 5, 17, 99])
    def test_long_diff_cut_to_limit_plus_marker(self, limit):
        diff = "x" * 60 + "y" * 60
        result = truncate_diff(diff, limit)
        assert len(result) == limit + len(TRUNCATION_MARKER)
        assert result == diff[:limit] + TRUNCATION_MARKER
        assert diff.startswith(result[:limit])

    def test_zero_is_unlimited(self):
        diff = "d" * 10_000
        assert truncate_diff(diff, 0) == diff

    def test_short_diff_untouched(self):
        assert truncate_diff("abc", 3) == "abc"
        assert truncate_diff("abc", 10) == "abc"

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            truncate_diff("abc", -1)

    def test_exclude_pathspecs(self):
        assert exclude_pathspecs(["*.lock", "**/go.sum"]) == [":!*.lock", ":!**/go.sum"]


# ---------------------------------------------------------------------------
# Prompt composition
# ---------------------------------------------------------------------------

class TestCompose:

    def test_segments_joined_by_separator(self):
        prompt = compose("RULES", PromptModes(), "DATA", "GO")
        assert prompt.text == "RULES\n\n---\n\nDATA\n\n---\n\nGO"
        assert str(prompt) == prompt.text

    def test_no_modes_leaves_rules_alone(self):
        prompt = compose(COMMIT_RULES, PromptModes(), "data", "go")
        assert prompt.rules == COMMIT_RULES

    def test_both_modes_appended_in_order(self):
        prompt = compose(COMMIT_RULES, PromptModes(brief=True, emoji=True), "data", "go")
        brief_rule = dict(MODE_RULES)["brief"]
        emoji_rule = dict(MODE_RULES)["emoji"]
        assert prompt.rules == f"{COMMIT_RULES}\n{brief_rule}\n{emoji_rule}"

    def test_emoji_only(self):
        prompt = compose("base", PromptModes(emoji=True), "data", "go")
        assert prompt.rules == "base\nUse GitMojis (e.g. 🐛 fix:)."

    def test_task_text_skips_rules(self):
        prompt = compose("RULES", PromptModes(), "DATA", "GO")
        assert prompt.task_text == "DATA\n\nGO"


class TestPromptBuilder:

    def test_commit_prompt(self):
        prompt = PromptBuilder().build_commit("M\tsrc/app.py", "diff --git a/src/app.py b/src/app.py")
        assert prompt.rules == COMMIT_RULES
        assert prompt.data == "Files changed:\nM\tsrc/app.py\n\nDiff:\ndiff --git a/src/app.py b/src/app.py"
        assert prompt.trigger == COMMIT_TRIGGER
        assert prompt.text.endswith(COMMIT_TRIGGER)

    def test_commit_rules_content(self):
        for fragment in ("Conventional Commits", "Types: fix, feat, build", "present tense",
                         "Max title length: 50", "Wrap body lines at 72", "hash symbol (#)"):
            assert fragment in COMMIT_RULES

    def test_commit_prompt_with_modes(self):
        prompt = PromptBuilder().build_commit("A\tx", "d", PromptModes(brief=True))
        assert prompt.rules.endswith("Note: I prefer a very short, one-sentence summary.")

    def test_truncated_diff_passes_through(self):
        diff = truncate_diff("a" * 50, 10)
        prompt = PromptBuilder().build_commit("M\tf", diff)
        assert "a" * 10 + TRUNCATION_MARKER in prompt.data
        assert "a" * 11 not in prompt.data

    def test_release_prompt(self):
        log = "abc1234 - feat: add x\ndef5678 - fix: y"
        prompt = PromptBuilder().build_release(log)
        assert prompt.rules == RELEASE_RULES
        assert prompt.data == f"Commit History:\n{log}"
        assert prompt.trigger == RELEASE_TRIGGER
        assert prompt.text.index("Commit History") > prompt.text.index("release notes generator")


# ---------------------------------------------------------------------------
# Git data holders
# ---------------------------------------------------------------------------

class TestGitData:

    def test_staged_changes_empty(self):
        assert StagedChanges().is_empty
        assert StagedChanges(name_status="  \n", diff="").is_empty

    def test_staged_changes_name_status_only(self):
        # A staged file matching only ignored patterns still counts
        assert not StagedChanges(name_status="M\tyarn.lock", diff="").is_empty

    def test_commit_log_text(self):
        log = CommitLog(last_tag="v1.0.0", entries=["a - one", "b - two"])
        assert not log.is_empty
        assert log.text == "a - one\nb - two"
        assert CommitLog().is_empty


# ---------------------------------------------------------------------------
# GitAnalyzer against a real repository
# ---------------------------------------------------------------------------

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def git(cwd, *args):
    return subprocess.run(
        ["git", *args], cwd=cwd, check=True, capture_output=True, text=True,
    ).stdout


def commit_file(repo, name, content, message):
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    git(repo, "add", name)
    git(repo, "commit", "-q", "-m", message)


@requires_git
class TestGitAnalyzer:

    @pytest.fixture
    def repo(self, tmp_path, monkeypatch):
        repo = tmp_path / "repo"
        repo.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        git(repo, "init", "-q")
        git(repo, "config", "user.name", "Test User")
        git(repo, "config", "user.email", "test@example.com")
        git(repo, "config", "commit.gpgsign", "false")
        git(repo, "config", "tag.gpgsign", "false")
        monkeypatch.chdir(repo)
        return repo

    def test_not_a_repository(self, tmp_path, monkeypatch):
        outside = tmp_path / "plain"
        outside.mkdir()
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
        monkeypatch.chdir(outside)
        with pytest.raises(GitError) as exc:
            GitAnalyzer()
        assert str(exc.value) == "Not a git repository."

    def test_staged_diff_excludes_ignored_files(self, repo):
        (repo / "app.py").write_text("print('hi')\n")
        (repo / "yarn.lock").write_text("lockfile-content\n")
        (repo / "tests" / "__snapshots__").mkdir(parents=True)
        (repo / "tests" / "__snapshots__" / "view.snap").write_text("snapshot-content\n")
        git(repo, "add", ".")

        patterns = Config(ignored_patterns=["*.snap"]).all_ignored_patterns
        changes = GitAnalyzer().get_staged_changes(patterns)

        assert "print('hi')" in changes.diff
        assert "lockfile-content" not in changes.diff
        assert "snapshot-content" not in changes.diff
        assert "A\tapp.py" in changes.name_status
        assert "A\tyarn.lock" in changes.name_status
        assert "A\ttests/__snapshots__/view.snap" in changes.name_status

    def test_only_ignored_files_staged_is_not_empty(self, repo):
        (repo / "yarn.lock").write_text("lockfile-content\n")
        git(repo, "add", ".")
        changes = GitAnalyzer().get_staged_changes(DEFAULT_IGNORED_PATTERNS)
        assert changes.diff == ""
        assert not changes.is_empty

    def test_nothing_staged(self, repo):
        commit_file(repo, "a.txt", "a\n", "chore: init")
        (repo / "a.txt").write_text("unstaged\n")
        assert GitAnalyzer().get_staged_changes(DEFAULT_IGNORED_PATTERNS).is_empty

    def test_unborn_head_gives_empty_log(self, repo):
        log = GitAnalyzer().get_commit_log()
        assert log.last_tag is None
        assert log.is_empty

    def test_log_without_tag_lists_every_commit(self, repo):
        commit_file(repo, "a.txt", "a\n", "feat: first")
        commit_file(repo, "b.txt", "b\n", "fix: second")
        log = GitAnalyzer().get_commit_log()
        assert log.last_tag is None
        assert [entry.split(" - ", 1)[1] for entry in log.entries] == ["fix: second", "feat: first"]

    def test_log_since_last_tag(self, repo):
        commit_file(repo, "a.txt", "a\n", "feat: first")
        git(repo, "tag", "v1.0.0")
        commit_file(repo, "b.txt", "b\n", "fix: after tag")
        log = GitAnalyzer().get_commit_log()
        assert log.last_tag == "v1.0.0"
        assert len(log.entries) == 1
        assert log.entries[0].endswith(" - fix: after tag")

    def test_no_commits_since_tag(self, repo):
        commit_file(repo, "a.txt", "a\n", "feat: first")
        git(repo, "tag", "v1.0.0")
        assert GitAnalyzer().get_commit_log().is_empty

    def test_create_annotated_tag(self, repo):
        commit_file(repo, "a.txt", "a\n", "feat: first")
        notes = "### Features\n- first"
        GitAnalyzer().create_tag("v1.1.0", notes)
        assert git(repo, "cat-file", "-t", "v1.1.0").strip() == "tag"
        assert git(repo, "tag", "-l", "--format=%(contents)", "v1.1.0").strip() == notes

    def test_create_existing_tag_fails(self, repo):
        commit_file(repo, "a.txt", "a\n", "feat: first")
        git(repo, "tag", "v1.0.0")
        with pytest.raises(GitError):
            GitAnalyzer().create_tag("v1.0.0", "notes")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.default_provider == ""
        assert config.default_ollama_model == "llama3"
        assert config.default_opencode_model == ""
        assert config.diff_limit == 0

    def test_default_model_for(self):
        config = Config(default_opencode_model="anthropic/claude")
        assert config.default_model_for("ollama") == "llama3"
        assert config.default_model_for("opencode") == "anthropic/claude"
        assert config.default_model_for("copilot") == ""

    def test_ignored_patterns_extend_builtins(self):
        config = Config(ignored_patterns=["*.snap", "*.lock"])
        patterns = config.all_ignored_patterns
        assert patterns[:len(DEFAULT_IGNORED_PATTERNS)] == DEFAULT_IGNORED_PATTERNS
        assert patterns[-1] == "*.snap"
        assert patterns.count("*.lock") == 1

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_validate_bad_diff_limit(self):
        config = Config(diff_limit=-5)
        warnings = config.validate()
        assert any("diff_limit" in w for w in warnings)
        assert config.diff_limit == 0

    def test_validate_bad_patterns(self):
        config = Config(ignored_patterns="*.lock")
        warnings = config.validate()
        assert any("ignored_patterns" in w for w in warnings)
        assert config.ignored_patterns == []

    def test_validate_normalizes_provider(self):
        config = Config(default_provider=" Gemini ")
        config.validate()
        assert config.default_provider == "gemini"

    def test_unknown_provider_is_kept(self):
        config = Config.from_dict({"default_provider": "claude"})
        assert config.default_provider == "claude"

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"style": "simple", "emoji": True})
        assert config.emoji is True

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"brief": "yes"})
        assert "Config warning" in capsys.readouterr().err


class TestConfigManager:

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        monkeypatch.delenv("AI_COMMIT_PROVIDER", raising=False)

    def test_load_returns_defaults_when_no_file(self):
        manager = ConfigManager()
        assert manager.load() == Config()
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, tmp_path):
        (tmp_path / ".aicommitrc").write_text(json.dumps({"default_provider": "opencode", "diff_limit": 4000}))
        manager = ConfigManager()
        config = manager.load()
        assert config.default_provider == "opencode"
        assert config.diff_limit == 4000
        assert manager.get_config_path() == tmp_path / ".aicommitrc"

    def test_load_reads_home_file(self, tmp_path):
        home_config = tmp_path / "fakehome" / ".config" / "ai-commit" / "config.json"
        home_config.parent.mkdir(parents=True)
        home_config.write_text(json.dumps({"default_ollama_model": "qwen2.5-coder"}))
        config = ConfigManager().load()
        assert config.default_ollama_model == "qwen2.5-coder"

    def test_local_file_wins(self, tmp_path):
        home_config = tmp_path / "fakehome" / ".config" / "ai-commit" / "config.json"
        home_config.parent.mkdir(parents=True)
        home_config.write_text(json.dumps({"default_provider": "gemini"}))
        (tmp_path / ".aicommitrc").write_text(json.dumps({"default_provider": "copilot"}))
        assert ConfigManager().load().default_provider == "copilot"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / ".aicommitrc").write_text(json.dumps({"default_provider": "copilot"}))
        monkeypatch.setenv("AI_COMMIT_PROVIDER", "Ollama")
        assert ConfigManager().load().default_provider == "ollama"

    def test_malformed_json_returns_defaults(self, tmp_path, capsys):
        (tmp_path / ".aicommitrc").write_text("not valid json {{{")
        config = ConfigManager().load()
        assert config == Config()
        assert "Could not load" in capsys.readouterr().err

    def test_non_object_json_returns_defaults(self, tmp_path):
        (tmp_path / ".aicommitrc").write_text("[1, 2]")
        assert ConfigManager().load() == Config()


class TestRunOptions:

    class Args:
        provider = None
        model = None
        non_interactive = False
        brief = False
        emoji = False
        limit = None
        output = None
        verbose = False

    def test_config_fills_unset_flags(self):
        options = RunOptions.from_args(self.Args(), Config(brief=True, diff_limit=500))
        assert options.brief is True
        assert options.emoji is False
        assert options.diff_limit == 500
        assert options.provider == ""

    def test_flags_win(self):
        args = self.Args()
        args.limit = 0
        args.provider = "Gemini"
        args.model = "m"
        options = RunOptions.from_args(args, Config(diff_limit=500))
        assert options.diff_limit == 0
        assert options.provider == "Gemini"
        assert options.model == "m"

    def test_is_frozen(self):
        options = RunOptions()
        with pytest.raises(AttributeError):
            options.provider = "ollama"
