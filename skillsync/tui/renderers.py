from rich.console import Console
from rich.markup import escape

from skillsync.permissions.checker import PermissionChecker
from skillsync.permissions.levels import PermissionLevel
from skillsync.security.detector import Detection
from skillsync.similarity.content import ContentMatch
from skillsync.similarity.name import NameMatch
from skillsync.tui.enums import UIStyle
from skillsync.tui.sections import UISection
from skillsync.tui.tables import (
    DetectionTable,
    MatchTable,
    PathsTable,
    PermissionsTable,
    ResultTable,
)
from skillsync.utils import compact_home_path, compact_home_paths_in_text


class SkillSyncConsoleUI:
    def __init__(
        self, console: Console | None = None, err_console: Console | None = None
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def render_result(self, result, mode: str) -> None:
        self.console.print(
            UISection.wrap(
                "validation",
                ResultTable.summary_block(result, mode=mode),
                style=UIStyle.GREEN.value if result.valid else UIStyle.RED.value,
            )
        )
        if result.errors:
            errors = [compact_home_paths_in_text(str(item)) for item in result.errors]
            self.err_console.print(
                UISection.note("errors", UISection.bullets(errors), style=UIStyle.RED.value)
            )
        if result.warnings:
            warnings = [compact_home_paths_in_text(item) for item in result.warnings]
            self.err_console.print(
                UISection.note(
                    "warnings", UISection.bullets(warnings), style=UIStyle.YELLOW.value
                )
            )

    def render_detections(self, source: str, detections: list[Detection]) -> None:
        title = escape(compact_home_path(source))
        if not detections:
            self.console.print(
                UISection.note(title, "No sensitive data detected.", style=UIStyle.DIM.value)
            )
            return
        self.console.print(
            UISection.wrap(title, DetectionTable.table(detections), style=UIStyle.MAGENTA.value)
        )

    def render_content_matches(self, matches: list[ContentMatch]) -> None:
        if not matches:
            self.console.print(
                UISection.note(
                    "content similarity",
                    "No similar skill content found.",
                    style=UIStyle.DIM.value,
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "content similarity",
                MatchTable.content_table(matches),
                style=UIStyle.CYAN.value,
                subtitle=f"{len(matches)} match(es)",
            )
        )

    def render_name_matches(self, matches: list[NameMatch]) -> None:
        if not matches:
            self.console.print(
                UISection.note(
                    "name similarity", "No similar skill names found.", style=UIStyle.DIM.value
                )
            )
            return
        self.console.print(
            UISection.wrap(
                "name similarity",
                MatchTable.name_table(matches),
                style=UIStyle.CYAN.value,
                subtitle=f"{len(matches)} match(es)",
            )
        )

    def render_permissions(self, checker: PermissionChecker, source: str) -> None:
        config = checker.config
        level = config.default_level
        level_text = level.value if isinstance(level, PermissionLevel) else str(level)
        self.console.print(
            UISection.note(
                "permissions",
                f"Default level: [bold]{escape(level_text)}[/bold]\n"
                f"{escape(compact_home_path(source))}",
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.wrap(
                "operations",
                PermissionsTable.operations_table(config, checker),
                style=UIStyle.CYAN.value,
            )
        )
        self.console.print(
            UISection.wrap(
                "writable scopes",
                PermissionsTable.scopes_block(config),
                style=UIStyle.MAGENTA.value,
            )
        )

    def render_permission_granted(self, operation: str, scope: str | None = None) -> None:
        where = f" in {scope} scope" if scope else ""
        self.console.print(
            UISection.note(
                "permission",
                f"Operation [bold]{escape(operation)}[/bold] allowed{escape(where)}.",
                style=UIStyle.GREEN.value,
            )
        )

    def render_permission_denied(self, reason: str) -> None:
        self.err_console.print(
            UISection.note("permission", escape(reason), style=UIStyle.RED.value)
        )

    def render_paths(self, rows: list[dict[str, str]]) -> None:
        self.console.print(
            UISection.wrap("platform paths", PathsTable.table(rows), style=UIStyle.BLUE.value)
        )
