"""CLI commands for applying structured edit batches to a workspace."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
import yaml

from .schema import EditBatchResult, EditStatus
from .tools import PathResolver, edit_files

APP_HELP = "Apply targeted insertions, replacements and deletions to workspace files."
DEFAULT_CONFIG_NAME = "sedit.yaml"

DEFAULT_CONFIG_TEMPLATE: Dict[str, Any] = {
    "workspace": {
        "root": ".",
    },
    "edit": {
        "dry_run": False,
        "output_diff": True,
        "defaults": {
            "use_regex": False,
            "ignore_leading_whitespace": True,
            "preserve_indentation": True,
            "match_occurrence": 1,
        },
    },
    "logging": {
        "level": "WARNING",
    },
}

REQUEST_DEFAULT_KEYS = ("use_regex", "ignore_leading_whitespace", "preserve_indentation", "match_occurrence")

LOGGER = logging.getLogger(__name__)


def _copy_config_template() -> Dict[str, Any]:
    """Return a deep copy of the default configuration template."""
    return copy.deepcopy(DEFAULT_CONFIG_TEMPLATE)


def _write_config(config_path: Path, config_data: Dict[str, Any]) -> None:
    """Persist configuration data to disk with stable formatting."""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config_data, handle, sort_keys=False)


app = typer.Typer(help=APP_HELP)


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load YAML configuration from disk and return it as a dictionary."""
    if not config_path.exists():
        raise typer.BadParameter(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as error:
        typer.echo(f"Failed to parse config: {error}")
        raise typer.Exit(code=1) from error

    if not isinstance(data, dict):
        typer.echo("Configuration must be a mapping at the top level.")
        raise typer.Exit(code=1)

    return data


def _select_config(config: Optional[str]) -> tuple[Dict[str, Any], Path]:
    """Return configuration data and the directory relative paths resolve from."""
    if config is not None:
        config_path = Path(config)
        return load_config(config_path), config_path.resolve().parent
    default_path = Path(DEFAULT_CONFIG_NAME)
    if default_path.exists():
        return load_config(default_path), default_path.resolve().parent
    return _copy_config_template(), Path.cwd()


def _resolve_workspace_root(config: Dict[str, Any], base_dir: Path, override: Optional[Path]) -> Path:
    """Resolve the sandbox root from ``--root`` or ``workspace.root``."""
    if override is not None:
        return override.resolve()
    workspace_cfg = config.get("workspace") or {}
    root_value = workspace_cfg.get("root", ".") if isinstance(workspace_cfg, dict) else "."
    root_path = Path(str(root_value or "."))
    if not root_path.is_absolute():
        root_path = (base_dir / root_path).resolve()
    return root_path


def _configure_logging(config: Dict[str, Any], level_override: Optional[str]) -> None:
    logging_cfg = config.get("logging") or {}
    level_name = level_override or (logging_cfg.get("level") if isinstance(logging_cfg, dict) else None) or "WARNING"
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"Unknown log level: {level_name}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _load_requests(requests_path: Path) -> Dict[str, Any]:
    """Read a YAML/JSON request file into a batch mapping."""
    try:
        with requests_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as error:
        typer.echo(f"Request file not found: {requests_path}")
        raise typer.Exit(code=2) from error
    except yaml.YAMLError as error:
        typer.echo(f"Failed to parse request file: {error}")
        raise typer.Exit(code=2) from error

    if isinstance(data, list):
        return {"changes": data}
    if isinstance(data, dict):
        return dict(data)
    typer.echo("Request file must contain a list of changes or a mapping with 'changes'.")
    raise typer.Exit(code=2)


def _apply_request_defaults(changes: Any, defaults: Any) -> Any:
    """Fill omitted per-request options from ``edit.defaults``."""
    if not isinstance(changes, list) or not isinstance(defaults, dict):
        return changes
    preset = {key: defaults[key] for key in REQUEST_DEFAULT_KEYS if key in defaults}
    merged: List[Any] = []
    for change in changes:
        if isinstance(change, dict):
            merged.append({**preset, **change})
        else:
            merged.append(change)
    return merged


def _render_result(result: EditBatchResult, *, show_diff: bool) -> None:
    for outcome in result.results:
        typer.echo(f"[{outcome.status.value}] {outcome.path}: {outcome.message or ''}".rstrip())
    if not show_diff:
        return
    for outcome in result.results:
        if outcome.diff:
            typer.echo("")
            typer.echo(outcome.diff.rstrip("\n"))


@app.command()
def init(
    config: str = typer.Option(
        DEFAULT_CONFIG_NAME,
        "--config",
        "-c",
        help="Path of the configuration file to create.",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing configuration file.",
    ),
) -> None:
    """Write the default configuration file."""
    config_path = Path(config)
    if config_path.exists() and not force:
        typer.echo(f"Configuration already exists at {config_path}; use --force to overwrite.")
        raise typer.Exit(code=1)
    _write_config(config_path, _copy_config_template())
    typer.echo(f"Wrote configuration to {config_path}.")


@app.command()
def apply(
    requests: Path = typer.Argument(..., help="YAML or JSON file describing the changes to apply."),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help=f"Path to the configuration file (defaults to ./{DEFAULT_CONFIG_NAME} when present).",
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="Workspace root that request paths are resolved against.",
    ),
    dry_run: Optional[bool] = typer.Option(
        None,
        "--dry-run/--write",
        help="Compute changes and diffs without writing files.",
    ),
    diff: Optional[bool] = typer.Option(
        None,
        "--diff/--no-diff",
        help="Include unified diffs for modified files.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the batch result as JSON.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (overrides logging.level in the config).",
    ),
) -> None:
    """Apply an edit batch and report one outcome per file."""
    config_data, base_dir = _select_config(config)
    _configure_logging(config_data, log_level)

    edit_cfg = config_data.get("edit") or {}
    if not isinstance(edit_cfg, dict):
        edit_cfg = {}

    payload = _load_requests(requests)
    payload["changes"] = _apply_request_defaults(payload.get("changes"), edit_cfg.get("defaults"))
    if dry_run is not None:
        payload["dry_run"] = dry_run
    else:
        payload.setdefault("dry_run", bool(edit_cfg.get("dry_run", False)))
    if diff is not None:
        payload["output_diff"] = diff
    else:
        payload.setdefault("output_diff", bool(edit_cfg.get("output_diff", True)))

    workspace_root = _resolve_workspace_root(config_data, base_dir, root)
    LOGGER.debug("Resolving request paths against %s", workspace_root)

    try:
        result = edit_files(payload, resolver=PathResolver(workspace_root))
    except ValueError as error:
        typer.echo(str(error))
        raise typer.Exit(code=2) from error

    if json_output:
        typer.echo(json.dumps(result.model_dump(mode="json", exclude_none=True), indent=2))
    else:
        _render_result(result, show_diff=bool(payload.get("output_diff")))

    if any(outcome.status == EditStatus.FAILED for outcome in result.results):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
