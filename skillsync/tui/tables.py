from rich.table import Column, Table
from rich.text import Text

from skillsync.permissions.config import PermissionsConfig
from skillsync.permissions.levels import OperationType
from skillsync.security.detector import Detection
from skillsync.similarity.content import ContentMatch
from skillsync.similarity.name import NameMatch
from skillsync.tui.enums import SEVERITY_STYLE, UIStyle, score_style
from skillsync.utils import compact_home_path, format_score
from skillsync.validation.result import ValidationResult


def _skill_label(skill) -> Text:
    platform = getattr(skill.platform, "value", skill.platform)
    return Text(f"{skill.name} ({platform})")


def _flag(value: bool) -> Text:
    if value:
        return Text("yes", style=UIStyle.GREEN.value)
    return Text("no", style=UIStyle.DIM.value)


class ResultTable:
    @staticmethod
    def summary_block(result: ValidationResult, mode: str) -> Table:
        status_style = UIStyle.GREEN.value if result.valid else UIStyle.RED.value
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", Text(mode))
        table.add_row("Result", Text(result.summary(), style=status_style))
        table.add_row("Errors", str(len(result.errors)))
        table.add_row("Skill issues", str(sum(1 for error in result.errors if error.is_skill_invalid)))
        table.add_row("Warnings", str(len(result.warnings)))
        return table


class MatchTable:
    @staticmethod
    def content_table(matches: list[ContentMatch]) -> Table:
        table = Table(
            Column(header="Skill A", overflow="ellipsis"),
            Column(header="Skill B", overflow="ellipsis"),
            Column(header="Score", width=8, justify="right"),
            Column(header="Algorithm", width=10),
            expand=True,
            header_style="bold",
        )
        for match in matches:
            table.add_row(
                _skill_label(match.skill_a),
                _skill_label(match.skill_b),
                Text(format_score(match.score), style=score_style(match.score)),
                match.algorithm,
            )
        return table

    @staticmethod
    def name_table(matches: list[NameMatch]) -> Table:
        table = Table(
            Column(header="Skill A", overflow="ellipsis"),
            Column(header="Skill B", overflow="ellipsis"),
            Column(header="Score", width=8, justify="right"),
            Column(header="Algorithm", width=12),
            expand=True,
            header_style="bold",
        )
        for match in matches:
            table.add_row(
                _skill_label(match.skill_a),
                _skill_label(match.skill_b),
                Text(format_score(match.score), style=score_style(match.score)),
                match.algorithm,
            )
        return table


class DetectionTable:
    @staticmethod
    def table(detections: list[Detection]) -> Table:
        table = Table(
            Column(header="Line", width=6, justify="right"),
            Column(header="Col", width=5, justify="right"),
            Column(header="Severity", width=8),
            Column(header="Pattern", width=26),
            Column(header="Snippet", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for detection in detections:
            style = SEVERITY_STYLE.get(detection.severity, UIStyle.WHITE.value)
            table.add_row(
                str(detection.line),
                str(detection.column),
                Text(detection.severity.value, style=style),
                detection.pattern,
                Text(detection.content),
            )
        return table


class PermissionsTable:
    @staticmethod
    def operations_table(config: PermissionsConfig, checker) -> Table:
        table = Table(
            Column(header="Operation", width=14),
            Column(header="Required", width=12),
            Column(header="Enabled", width=8),
            Column(header="Confirm", width=8),
            expand=False,
            header_style="bold",
        )
        for op in OperationType:
            op_config = config.operation(op)
            enabled = op_config.enabled if op_config is not None else True
            table.add_row(
                op.value,
                op.required_level.value,
                _flag(enabled),
                _flag(checker.requires_confirmation(op)),
            )
        return table

    @staticmethod
    def scopes_block(config: PermissionsConfig) -> Table:
        scopes = config.scope_permissions
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("user", _flag(scopes.allow_user_scope))
        table.add_row("repo", _flag(scopes.allow_repo_scope))
        table.add_row("system/admin", _flag(scopes.allow_system_scope))
        table.add_row("builtin/plugin", Text("never", style=UIStyle.DIM.value))
        return table


class PathsTable:
    @staticmethod
    def table(rows: list[dict[str, str]]) -> Table:
        table = Table(
            Column(header="Platform", width=12),
            Column(header="Scope", width=6),
            Column(header="Path", overflow="fold"),
            Column(header="Status", width=10),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            status = row["status"]
            style = UIStyle.GREEN.value if status == "exists" else UIStyle.DIM.value
            if status == "error":
                style = UIStyle.RED.value
            table.add_row(
                row["platform"],
                row["scope"],
                Text(compact_home_path(row["path"])),
                Text(status, style=style),
            )
        return table
