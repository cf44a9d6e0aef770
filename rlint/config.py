from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib


DEFAULT_CONFIG_FILE = "rlint.toml"
REPORT_FORMATS = ("text", "json", "sarif")


@dataclass(slots=True)
class LintConfig:
    linters: list[str] | None = None
    disabled: list[str] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    exclusions: bool = True


@dataclass(slots=True)
class GateConfig:
    fail_on: str | None = None
    max_lints: int | None = None


@dataclass(slots=True)
class ReportConfig:
    output_format: str = "text"
    out: str | None = None


@dataclass(slots=True)
class Config:
    lint: LintConfig = field(default_factory=LintConfig)
    gate: GateConfig = field(default_factory=GateConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(path: str | None) -> Config:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return Config()
        path = str(default)

    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")

    with cfg_path.open("rb") as fh:
        payload = tomllib.load(fh)

    lint = payload.get("lint", {})
    gate = payload.get("gate", {})
    report = payload.get("report", {})

    config = Config()
    linters = lint.get("linters")
    config.lint.linters = [str(name) for name in linters] if linters is not None else None
    config.lint.disabled = [str(name) for name in lint.get("disabled", config.lint.disabled)]
    settings = lint.get("settings", config.lint.settings)
    if not isinstance(settings, dict):
        raise ValueError("lint.settings must be a table of per-linter tables")
    config.lint.settings = {str(name): values for name, values in settings.items()}
    config.lint.exclusions = bool(lint.get("exclusions", config.lint.exclusions))
    config.gate.fail_on = gate.get("fail_on")
    config.gate.max_lints = gate.get("max_lints")
    config.report.output_format = report.get("format", config.report.output_format)
    config.report.out = report.get("out")
    return config
