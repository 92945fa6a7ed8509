"""Tests for changed-file classification."""

import subprocess
from pathlib import Path

import pytest

from riskgate.pipeline.classify import (
    ClassificationResult,
    classify_changes,
    classify_file,
    classify_paths,
    collect_changed_files,
)
from riskgate.pipeline.config import DEFAULT_CONFIG, RiskConfig, RiskTierDefinition

OVERLAPPING_CONFIG = RiskConfig(
    version="test",
    tier1=RiskTierDefinition(name="low", patterns=("**/*.md",)),
    tier2=RiskTierDefinition(name="medium", patterns=("lib/**",)),
    tier3=RiskTierDefinition(name="high", patterns=("src/core/**",)),
)


class TestClassifyFile:
    @pytest.mark.parametrize(
        ("path", "tier"),
        [
            ("README.md", 1),
            ("docs/guide/setup.md", 1),
            ("LICENSE", 1),
            (".vscode/settings.json", 1),
            ("src/utils/helpers.ts", 2),
            ("tests/foo.test.ts", 2),
            ("src/core/engine.ts", 3),
            ("src/commands/init.ts", 3),
            ("package.json", 3),
        ],
    )
    def test_default_config(self, path: str, tier: int):
        assert classify_file(path, DEFAULT_CONFIG) == tier

    def test_highest_tier_wins_on_overlap(self):
        assert classify_file("src/core/NOTES.md", OVERLAPPING_CONFIG) == 3
        assert classify_file("lib/NOTES.md", OVERLAPPING_CONFIG) == 2

    @pytest.mark.parametrize("path", ["Makefile", "assets/logo.png", "scripts/deploy.sh"])
    def test_unmatched_files_default_to_medium(self, path: str):
        assert classify_file(path, DEFAULT_CONFIG) == 2
        assert classify_file(path, OVERLAPPING_CONFIG) == 2


class TestClassifyPaths:
    def test_each_file_lands_in_exactly_one_tier(self):
        paths = ["README.md", "src/core/engine.ts", "src/utils/helpers.ts", "Makefile"]

        result = classify_paths(paths, DEFAULT_CONFIG)

        assert result.tier1_files == ("README.md",)
        assert result.tier2_files == ("src/utils/helpers.ts", "Makefile")
        assert result.tier3_files == ("src/core/engine.ts",)
        assert result.total == len(paths)
        assert result.max_tier == 3

    def test_docs_only_is_tier_one(self):
        result = classify_paths(["README.md", "docs/notes.txt"], DEFAULT_CONFIG)

        assert result.max_tier == 1
        assert result.tier2_files == ()

    def test_empty_input_is_tier_one(self):
        result = classify_paths([], DEFAULT_CONFIG)

        assert result == ClassificationResult(max_tier=1, reason="no-changes")

    def test_duplicates_and_blank_lines_are_ignored(self):
        result = classify_paths(["README.md", "", "README.md"], DEFAULT_CONFIG)

        assert result.tier1_files == ("README.md",)

    def test_idempotent(self):
        paths = ["src/core/engine.ts", "README.md", "tests/a.test.ts"]

        first = classify_paths(paths, DEFAULT_CONFIG)
        second = classify_paths(list(paths), DEFAULT_CONFIG)

        assert first == second
        assert first.changed_files_dict() == second.changed_files_dict()


class TestClassifyChanges:
    def test_classifies_diff_against_merge_base(self, git_repo: Path, commit):
        commit({"src/core/engine.ts": "export {}\n", "docs/intro.md": "# intro\n"})

        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert result.max_tier == 3
        assert result.tier3_files == ("src/core/engine.ts",)
        assert result.tier1_files == ("docs/intro.md",)
        assert result.reason == "classified"

    def test_empty_diff_is_tier_one(self, git_repo: Path):
        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert result.max_tier == 1
        assert result.reason == "no-changes"

    def test_missing_base_ref_is_tier_three(self, git_repo: Path, commit):
        commit({"README.md": "# changed\n"})

        result = classify_changes(git_repo, DEFAULT_CONFIG, base_ref="does-not-exist")

        assert result.max_tier == 3
        assert result.reason == "no-merge-base"
        assert result.total == 0

    def test_unrelated_history_is_tier_three(self, git_repo: Path):
        subprocess.run(["git", "checkout", "--orphan", "island"], cwd=git_repo, check=True, capture_output=True)
        subprocess.run(["git", "commit", "-m", "orphan"], cwd=git_repo, check=True, capture_output=True)

        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert result.max_tier == 3
        assert result.reason == "no-merge-base"

    def test_base_ref_without_remote(self, git_repo: Path, commit):
        commit({"src/utils/helpers.ts": "export {}\n"})

        changed = collect_changed_files(git_repo, base_ref="main", remote="")

        assert changed.paths == ("src/utils/helpers.ts",)
        assert changed.diff_ok

    def test_only_changes_since_merge_base_count(self, git_repo: Path, commit):
        commit({"src/utils/helpers.ts": "export {}\n"})
        subprocess.run(["git", "checkout", "main"], cwd=git_repo, check=True, capture_output=True)
        commit({"package.json": "{}\n"}, "main moves on")
        subprocess.run(
            ["git", "update-ref", "refs/remotes/origin/main", "HEAD"], cwd=git_repo, check=True, capture_output=True
        )
        subprocess.run(["git", "checkout", "feature"], cwd=git_repo, check=True, capture_output=True)

        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert result.tier2_files == ("src/utils/helpers.ts",)
        assert result.tier3_files == ()
        assert result.max_tier == 2

    def test_trailing_whitespace_is_part_of_the_name(self, git_repo: Path, commit):
        commit({"notes.md ": "# not markdown by name\n"})

        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert result.tier2_files == ("notes.md ",)
        assert result.tier1_files == ()
        assert result.max_tier == 2

    def test_names_git_would_quote_are_kept_verbatim(self, git_repo: Path, commit):
        commit({'docs/say "hi".md': "# hi\n", "docs/back\\slash.md": "# b\n"})

        changed = collect_changed_files(git_repo)
        result = classify_changes(git_repo, DEFAULT_CONFIG)

        assert set(changed.paths) == {'docs/say "hi".md', "docs/back\\slash.md"}
        assert set(result.tier1_files) == {'docs/say "hi".md', "docs/back\\slash.md"}
        assert result.max_tier == 1
