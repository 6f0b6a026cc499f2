from __future__ import annotations

import re
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, cast

from lintkit.engine.types import Severity


class ConfigError(ValueError):
    """Raised when a lintkit configuration file is invalid."""


RuleName = str

_RULE_NAME_RE = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*(?:/[a-z0-9-]+)?$")

DEFAULT_SEVERITY: Severity = "error"


def _validate_severity(value: Any, *, field_name: str) -> Severity:
    if not isinstance(value, str):
        raise ConfigError(f"`{field_name}` must be a string.")
    normalized = value.strip().lower()
    if normalized == "warn":
        normalized = "warning"
    if normalized not in {"error", "warning"}:
        raise ConfigError(f"`{field_name}` must be one of: error, warning.")
    return cast(Severity, normalized)


def _validate_bool(value: Any, *, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"`{field_name}` must be a boolean.")
    return value


def _validate_rule_name(value: Any, *, field_name: str) -> RuleName:
    normalized = str(value).strip().lower()
    if not _RULE_NAME_RE.match(normalized):
        raise ConfigError(f"`{field_name}` is invalid; expected a rule name like no-tabs.")
    return normalized


def _validate_str_list(value: Any, *, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or any(not isinstance(v, str) for v in value):
        raise ConfigError(f"`{field_name}` must be a list of strings.")
    return tuple(v.strip() for v in value)


@dataclass(frozen=True, slots=True)
class RulesConfig:
    enable: str | tuple[str, ...] = "all"
    disable: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class LintConfig:
    """
    Settings for one lint pass.

    `rule_severities` and `custom_messages` values may be literals or
    callables taking the problem's message args; callables are only
    available to programmatic callers, `pyproject.toml` supplies literals.
    """

    default_severity: Severity = DEFAULT_SEVERITY
    rule_severities: Mapping[RuleName, Any] = field(default_factory=lambda: MappingProxyType({}))
    quiet: bool = False
    ignore_disables: bool = False
    fix: bool = False
    custom_messages: Mapping[RuleName, Any] = field(default_factory=lambda: MappingProxyType({}))
    rules: RulesConfig = field(default_factory=RulesConfig)
    report_needless_disables: bool = False


def load_config(project_dir: Path | str = ".") -> LintConfig:
    """
    Load lintkit configuration from `pyproject.toml` within `project_dir`.

    If no file / no `[tool.lintkit]` table exists, returns defaults.
    """

    pyproject_path = Path(project_dir) / "pyproject.toml"
    if not pyproject_path.exists():
        return LintConfig()

    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject_path}: {exc}") from exc

    tool_table = data.get("tool", {})
    if not isinstance(tool_table, dict):
        return LintConfig()

    lintkit_table = tool_table.get("lintkit", {})
    if not isinstance(lintkit_table, dict) or not lintkit_table:
        return LintConfig()

    return parse_config_table(lintkit_table)


def parse_config_table(table: Mapping[str, Any]) -> LintConfig:
    default_severity = _validate_severity(
        table.get("default-severity", table.get("default_severity", DEFAULT_SEVERITY)),
        field_name="tool.lintkit.default-severity",
    )
    quiet = _validate_bool(table.get("quiet", False), field_name="tool.lintkit.quiet")
    ignore_disables = _validate_bool(
        table.get("ignore-disables", table.get("ignore_disables", False)),
        field_name="tool.lintkit.ignore-disables",
    )
    fix = _validate_bool(table.get("fix", False), field_name="tool.lintkit.fix")
    report_needless = _validate_bool(
        table.get("report-needless-disables", table.get("report_needless_disables", False)),
        field_name="tool.lintkit.report-needless-disables",
    )

    rules, rule_severities = _parse_rules_table(table.get("rules", {}))
    custom_messages = _parse_messages_table(table.get("messages", {}))

    return LintConfig(
        default_severity=default_severity,
        rule_severities=rule_severities,
        quiet=quiet,
        ignore_disables=ignore_disables,
        fix=fix,
        custom_messages=custom_messages,
        rules=rules,
        report_needless_disables=report_needless,
    )


def _parse_rules_table(value: Any) -> tuple[RulesConfig, Mapping[RuleName, Severity]]:
    if value is None:
        return RulesConfig(), MappingProxyType({})
    if not isinstance(value, dict):
        raise ConfigError("`tool.lintkit.rules` must be a table.")

    enable: str | tuple[str, ...]
    enable_raw = value.get("enable", "all")
    if isinstance(enable_raw, str):
        enable = enable_raw.strip().lower() or "all"
        if enable != "all":
            enable = (_validate_rule_name(enable, field_name="tool.lintkit.rules.enable"),)
    elif isinstance(enable_raw, list) and all(isinstance(v, str) for v in enable_raw):
        enable = tuple(_validate_rule_name(v, field_name="tool.lintkit.rules.enable") for v in enable_raw)
    else:
        raise ConfigError("`tool.lintkit.rules.enable` must be a string or a list of strings.")

    disable = tuple(
        _validate_rule_name(v, field_name="tool.lintkit.rules.disable")
        for v in _validate_str_list(value.get("disable", []), field_name="tool.lintkit.rules.disable")
    )

    severities: dict[RuleName, Severity] = {}
    sev_raw = value.get("severity", {})
    if not isinstance(sev_raw, dict):
        raise ConfigError("`tool.lintkit.rules.severity` must be a table.")
    for raw_name, raw_severity in sev_raw.items():
        name = _validate_rule_name(raw_name, field_name=f"tool.lintkit.rules.severity.{raw_name}")
        severities[name] = _validate_severity(raw_severity, field_name=f"tool.lintkit.rules.severity.{raw_name}")

    return RulesConfig(enable=enable, disable=disable), MappingProxyType(severities)


def _parse_messages_table(value: Any) -> Mapping[RuleName, str]:
    if value is None:
        return MappingProxyType({})
    if not isinstance(value, dict):
        raise ConfigError("`tool.lintkit.messages` must be a table.")
    out: dict[RuleName, str] = {}
    for raw_name, raw_message in value.items():
        name = _validate_rule_name(raw_name, field_name=f"tool.lintkit.messages.{raw_name}")
        if not isinstance(raw_message, str) or not raw_message.strip():
            raise ConfigError(f"`tool.lintkit.messages.{raw_name}` must be a non-empty string.")
        out[name] = raw_message
    return MappingProxyType(out)


def compute_enabled_rules(config: LintConfig, *, available: Iterable[RuleName]) -> set[RuleName]:
    """
    Resolve the enabled rule set from `rules.enable` + `rules.disable`.

    Names that are not in `available` are dropped.
    """

    available_set = set(available)
    enable_spec = config.rules.enable
    if isinstance(enable_spec, str):
        enabled = set(available_set) if enable_spec == "all" else {enable_spec}
    else:
        enabled = set(enable_spec)
    enabled.difference_update(config.rules.disable)
    return enabled & available_set
