"""Risk tier configuration resolver.

Loads ``harness.config.json`` from the repository root and falls back to the
built-in defaults when the file is absent or unreadable. A structurally
invalid section is replaced by its default counterpart on its own, so one
bad tier does not discard the rest of a hand-edited config.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from riskgate.pipeline.config.types import (
    TIER_NAMES,
    ConfigResolution,
    DocsDriftConfig,
    RiskConfig,
    RiskTierDefinition,
    ShaDisciplineConfig,
)
from riskgate.schemas.validator import get_validator

CONFIG_FILENAME = "harness.config.json"
CONFIG_SCHEMA = "risk_config"

DEFAULT_CONFIG = RiskConfig(
    version="1.0.0",
    tier1=RiskTierDefinition(
        name="low",
        description="Documentation and non-code changes",
        patterns=(
            "**/*.md",
            "**/*.txt",
            "LICENSE",
            ".gitignore",
            ".editorconfig",
            ".prettierrc*",
            ".vscode/**",
        ),
        required_checks=("lint",),
    ),
    tier2=RiskTierDefinition(
        name="medium",
        description="Source code and non-critical configuration",
        patterns=(
            "src/ui/**/*.ts",
            "src/utils/**/*.ts",
            "src/prompts/**/*.ts",
            "src/providers/**/*.ts",
            "tests/**/*.ts",
        ),
        required_checks=("lint", "type-check", "test", "review-agent"),
    ),
    tier3=RiskTierDefinition(
        name="high",
        description="Entry points, core engine, and build infrastructure",
        patterns=(
            "src/index.ts",
            "src/cli.ts",
            "src/commands/**/*.ts",
            "src/core/**/*.ts",
            "src/harnesses/index.ts",
            "src/harnesses/types.ts",
            "package.json",
            "tsconfig.json",
            "tsup.config.ts",
            "vitest.config.ts",
            "eslint.config.js",
        ),
        required_checks=("lint", "type-check", "test", "review-agent", "manual-review"),
    ),
    docs_drift=DocsDriftConfig(tracked_docs=("README.md",)),
    sha_discipline=ShaDisciplineConfig(enforce_exact_sha=True),
)


def _errors_under(errors: list[tuple[tuple[Any, ...], str]], prefix: tuple[str, ...]) -> list[str]:
    return [message for path, message in errors if path[: len(prefix)] == prefix]


def resolve_config(data: Any) -> tuple[RiskConfig, list[str]]:
    """Build a RiskConfig from parsed JSON, falling back per section.

    Returns:
        Tuple of (config, warnings). An empty warning list means every
        section came from ``data``.
    """
    if not isinstance(data, dict):
        return DEFAULT_CONFIG, [f"expected a JSON object, got {type(data).__name__}; using defaults"]

    validator = get_validator(CONFIG_SCHEMA)
    errors = [(tuple(e.path), e.message) for e in validator.iter_errors(data)]
    warnings: list[str] = []

    risk_tiers = data.get("riskTiers")
    tiers_present = isinstance(risk_tiers, dict)
    if not tiers_present:
        warnings.append("riskTiers missing or not an object; using default tiers")
        risk_tiers = {}

    tiers: dict[int, RiskTierDefinition] = {}
    for index in (1, 2, 3):
        key = f"tier{index}"
        default_tier = DEFAULT_CONFIG.tier(index)
        raw = risk_tiers.get(key)
        if not isinstance(raw, dict):
            if tiers_present:
                warnings.append(f"riskTiers.{key} missing or not an object; using default")
            tiers[index] = default_tier
            continue
        problems = _errors_under(errors, ("riskTiers", key))
        if problems:
            warnings.append(f"riskTiers.{key} invalid ({'; '.join(problems)}); using default")
            tiers[index] = default_tier
            continue
        tiers[index] = RiskTierDefinition.from_dict(raw, default_name=TIER_NAMES[index])

    docs_drift = DEFAULT_CONFIG.docs_drift
    if "docsDrift" in data:
        problems = _errors_under(errors, ("docsDrift",))
        if problems:
            warnings.append(f"docsDrift invalid ({'; '.join(problems)}); using default")
        else:
            docs_drift = DocsDriftConfig.from_dict(data["docsDrift"])

    sha_discipline = DEFAULT_CONFIG.sha_discipline
    if "shaDiscipline" in data:
        problems = _errors_under(errors, ("shaDiscipline",))
        if problems:
            warnings.append(f"shaDiscipline invalid ({'; '.join(problems)}); using default")
        else:
            sha_discipline = ShaDisciplineConfig(
                enforce_exact_sha=data["shaDiscipline"].get("enforceExactSha", True)
            )

    version = data.get("version")
    config = RiskConfig(
        version=version if isinstance(version, str) else DEFAULT_CONFIG.version,
        tier1=tiers[1],
        tier2=tiers[2],
        tier3=tiers[3],
        docs_drift=docs_drift,
        sha_discipline=sha_discipline,
    )
    return config, warnings


def load_risk_config(repo_root: Path, config_path: Path | None = None) -> ConfigResolution:
    """Load the risk config for a repository. Never raises on bad input.

    Args:
        repo_root: Repository root that holds harness.config.json
        config_path: Explicit config path overriding the repository default

    Returns:
        ConfigResolution with source "file", "partial" or "default"
    """
    path = config_path or (repo_root / CONFIG_FILENAME)

    if not path.exists():
        return ConfigResolution(config=DEFAULT_CONFIG, source="default", path=None)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        return ConfigResolution(
            config=DEFAULT_CONFIG,
            source="default",
            path=str(path),
            warnings=(f"Failed to parse {path.name}: {e}; using defaults",),
        )
    except (OSError, UnicodeDecodeError) as e:
        return ConfigResolution(
            config=DEFAULT_CONFIG,
            source="default",
            path=str(path),
            warnings=(f"Failed to read {path.name}: {e}; using defaults",),
        )

    config, problems = resolve_config(data)
    if not problems:
        return ConfigResolution(config=config, source="file", path=str(path))

    source = "default" if config == DEFAULT_CONFIG else "partial"
    return ConfigResolution(
        config=config,
        source=source,
        path=str(path),
        warnings=tuple(f"{path.name} has unexpected structure: {p}" for p in problems),
    )
