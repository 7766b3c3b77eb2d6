from pathlib import Path
from typing import Callable, Dict, Optional

import click
from rich.console import Console

from skillsync.errors import (
    ConfigInvalidError,
    ConfirmationIOError,
    OperationCancelledError,
    PermissionDeniedError,
    PlatformPathError,
)
from skillsync.log import configure_logging
from skillsync.models import Platform, Scope, Skill
from skillsync.paths import (
    RESOLVABLE_SCOPES,
    get_platform_path,
    get_platform_path_for_scope,
    permissions_config_path,
)
from skillsync.permissions import (
    OperationType,
    PermissionChecker,
    PermissionLevel,
    PermissionsConfig,
)
from skillsync.security import Detector
from skillsync.similarity import (
    ContentAlgorithm,
    ContentMatcher,
    ContentMatcherConfig,
    NameMatcher,
)
from skillsync.skills import discover_skills
from skillsync.tui import SkillSyncConsoleUI
from skillsync.validation import ValidationOptions, ValidationResult, validate_source_target


PLATFORM_VALUES = [platform.value for platform in Platform]
OPERATION_VALUES = [op.value for op in OperationType]
LEVEL_VALUES = [level.value for level in PermissionLevel]
SCOPE_VALUES = [scope.value for scope in Scope]


def _platform_argument(name: str, **kwargs) -> Callable:
    return click.argument(
        name,
        type=click.Choice(PLATFORM_VALUES, case_sensitive=False),
        **kwargs,
    )


def _ui() -> SkillSyncConsoleUI:
    return SkillSyncConsoleUI(Console(), Console(stderr=True))


def _config_path(obj: Dict[str, object]) -> Path:
    path = obj.get("config_path")
    return path if isinstance(path, Path) else permissions_config_path()


def _load_config(obj: Dict[str, object]) -> PermissionsConfig:
    try:
        return PermissionsConfig.load(_config_path(obj))
    except ConfigInvalidError as exc:
        raise click.ClickException(str(exc))


def _load_platform_skills(platform: Platform) -> list[Skill]:
    try:
        root = get_platform_path(platform)
    except PlatformPathError:
        return []
    return discover_skills(root, platform)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Permissions config file (defaults to $SKILLSYNC_HOME/permissions.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[Path]) -> None:
    """Keep assistant skills consistent across platforms."""
    configure_logging(verbose=verbose)
    ctx.obj = {"config_path": config_path}


@cli.command(help="Run pre-sync validation from SOURCE to TARGET platform.")
@_platform_argument("source")
@_platform_argument("target")
@click.option("--strict", is_flag=True, help="Treat empty or unreadable skills as errors.")
@click.option("--no-conflicts", is_flag=True, help="Skip target conflict detection.")
@click.option("--no-scan", is_flag=True, help="Skip sensitive data detection.")
def validate(source: str, target: str, strict: bool, no_conflicts: bool, no_scan: bool) -> None:
    ui = _ui()
    source_platform = Platform(source.lower())
    target_platform = Platform(target.lower())

    skills = _load_platform_skills(source_platform)
    options = ValidationOptions(
        strict_mode=strict,
        check_conflicts=not no_conflicts,
        detect_sensitive=not no_scan,
    )
    result = validate_source_target(source_platform, target_platform, skills, options)
    ui.render_result(result, mode=f"validate:{source_platform.value}->{target_platform.value}")

    if result.has_errors():
        raise click.exceptions.Exit(1)


@cli.command(help="Scan files for secrets such as API keys and private keys.")
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def scan(files: tuple[Path, ...]) -> None:
    ui = _ui()
    detector = Detector()
    combined = ValidationResult()

    for path in files:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise click.ClickException(f"Cannot read {path}: {exc}")
        ui.render_detections(str(path), detector.detect(content))
        combined.extend(detector.scan(content))

    ui.render_result(combined, mode="scan")
    if combined.has_errors():
        raise click.exceptions.Exit(1)


@cli.command(help="Find skills with similar content across platforms.")
@click.argument(
    "platforms",
    nargs=-1,
    type=click.Choice(PLATFORM_VALUES, case_sensitive=False),
)
@click.option("--threshold", type=float, default=0.6, show_default=True)
@click.option(
    "--algorithm",
    type=click.Choice([item.value for item in ContentAlgorithm], case_sensitive=False),
    default=ContentAlgorithm.COMBINED.value,
    show_default=True,
)
@click.option("--char-mode", is_flag=True, help="Compare characters instead of lines.")
@click.option("--names", is_flag=True, help="Also compare skill names.")
def compare(
    platforms: tuple[str, ...],
    threshold: float,
    algorithm: str,
    char_mode: bool,
    names: bool,
) -> None:
    ui = _ui()
    selected = [Platform(value.lower()) for value in platforms] or list(Platform)

    skills: list[Skill] = []
    for platform in selected:
        skills.extend(_load_platform_skills(platform))

    matcher = ContentMatcher(
        ContentMatcherConfig(
            threshold=threshold,
            algorithm=algorithm,
            line_mode=not char_mode,
        )
    )
    ui.render_content_matches(matcher.find_similar(skills))
    if names:
        ui.render_name_matches(NameMatcher().find_similar(skills))


@cli.command(help="Show resolved skill directories per platform and scope.")
def paths() -> None:
    ui = _ui()
    rows: list[dict[str, str]] = []
    for platform in Platform:
        for scope in RESOLVABLE_SCOPES:
            try:
                path = get_platform_path_for_scope(platform, scope)
            except PlatformPathError as exc:
                rows.append(
                    {
                        "platform": platform.value,
                        "scope": scope.value,
                        "path": str(exc),
                        "status": "error",
                    }
                )
                continue
            rows.append(
                {
                    "platform": platform.value,
                    "scope": scope.value,
                    "path": str(path),
                    "status": "exists" if path.is_dir() else "missing",
                }
            )
    ui.render_paths(rows)


@cli.group(help="Inspect and change operation permissions.")
def permissions() -> None:
    pass


@permissions.command("show", help="Show the effective permissions configuration.")
@click.pass_obj
def permissions_show(obj: Dict[str, object]) -> None:
    ui = _ui()
    config = _load_config(obj)
    ui.render_permissions(PermissionChecker(config), str(_config_path(obj)))


@permissions.command("set-level", help="Set the default permission level.")
@click.argument("level", type=click.Choice(LEVEL_VALUES, case_sensitive=False))
@click.pass_obj
def permissions_set_level(obj: Dict[str, object], level: str) -> None:
    ui = _ui()
    config = _load_config(obj)
    config.default_level = PermissionLevel(level.lower())
    try:
        saved = config.save(_config_path(obj))
    except (ConfigInvalidError, OSError) as exc:
        raise click.ClickException(str(exc))
    ui.render_permissions(PermissionChecker(config), str(saved))


@permissions.command("check", help="Check whether an operation is permitted.")
@click.argument("operation", type=click.Choice(OPERATION_VALUES, case_sensitive=False))
@click.option(
    "--scope",
    type=click.Choice(SCOPE_VALUES, case_sensitive=False),
    default=None,
    help="Also check that the scope is writable.",
)
@click.option("--details", default="", help="Description shown in the confirmation prompt.")
@click.option("--confirm/--no-confirm", default=False, help="Prompt when confirmation is required.")
@click.pass_obj
def permissions_check(
    obj: Dict[str, object],
    operation: str,
    scope: Optional[str],
    details: str,
    confirm: bool,
) -> None:
    ui = _ui()
    checker = PermissionChecker(_load_config(obj))
    op = OperationType(operation.lower())

    try:
        if scope is not None:
            checker.check_scope(scope.lower())
        if confirm:
            checker.check_and_confirm(op, details or op.value)
        else:
            checker.check_operation(op)
    except (PermissionDeniedError, OperationCancelledError, ConfirmationIOError) as exc:
        ui.render_permission_denied(str(exc))
        raise click.exceptions.Exit(1)

    ui.render_permission_granted(op.value, scope.lower() if scope else None)


def main() -> int:
    try:
        # Without standalone mode click returns the code of a raised Exit.
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
