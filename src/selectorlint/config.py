"""Lint configuration: which rules run, with which options and severity.

Configuration files are JSON::

    {
      "strict": false,
      "rules": {
        "selector-max-compound-selectors": [3, {"severity": "warning"}]
      }
    }

A rule setting is either the primary option alone, a ``[primary,
secondary]`` pair, or ``null`` to turn the rule off.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from selectorlint.model.diagnostic import Severity
from selectorlint.rules import RULES

DEFAULT_CONFIG_NAME = ".selectorlintrc.json"


class ConfigError(Exception):
    """Raised when a configuration file or mapping is malformed."""


@dataclass(frozen=True)
class RuleSetting:
    primary: Any
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class LintConfig:
    rules: dict[str, RuleSetting] = field(default_factory=dict)
    strict: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LintConfig:
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")
        raw_rules = data.get("rules", {})
        if not isinstance(raw_rules, dict):
            raise ConfigError('"rules" must be an object mapping rule names to settings')
        rules: dict[str, RuleSetting] = {}
        for name, raw in raw_rules.items():
            setting = parse_rule_setting(name, raw)
            if setting is not None:
                rules[name] = setting
        strict = data.get("strict", False)
        if not isinstance(strict, bool):
            raise ConfigError(f'"strict" must be true or false, got {strict!r}')
        return cls(rules=rules, strict=strict)

    def with_rule(self, name: str, primary: Any, severity: Severity | None = None) -> LintConfig:
        """Return a copy with *name* set to *primary*, keeping its severity."""
        if name not in RULES:
            raise ConfigError(f'Unknown rule "{name}"')
        current = self.rules.get(name)
        if severity is None:
            severity = current.severity if current else Severity.ERROR
        rules = dict(self.rules)
        rules[name] = RuleSetting(primary=primary, severity=severity)
        return replace(self, rules=rules)


def parse_rule_setting(name: str, raw: Any) -> RuleSetting | None:
    """Parse one rule's setting.  Returns None when the rule is turned off."""
    if name not in RULES:
        raise ConfigError(f'Unknown rule "{name}"')
    if raw is None:
        return None
    if not isinstance(raw, list):
        return RuleSetting(primary=raw)
    if not raw or len(raw) > 2:
        raise ConfigError(f'Rule "{name}" expects [primary] or [primary, options]')
    primary = raw[0]
    secondary = raw[1] if len(raw) == 2 else {}
    if not isinstance(secondary, dict):
        raise ConfigError(f'Secondary options for rule "{name}" must be an object')
    severity_name = secondary.get("severity", Severity.ERROR.value)
    try:
        severity = Severity(severity_name)
    except ValueError:
        raise ConfigError(
            f'Invalid severity "{severity_name}" for rule "{name}"; '
            f"use one of: {', '.join(s.value for s in Severity)}"
        ) from None
    return RuleSetting(primary=primary, severity=severity)


def load_config(path: Path) -> LintConfig:
    """Read a JSON configuration file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    return LintConfig.from_dict(data)


def find_config(start: Path) -> Path | None:
    """Look for the default configuration file in *start* and its parents."""
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / DEFAULT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None
