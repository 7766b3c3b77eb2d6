from skillsync.tui.renderers import SkillSyncConsoleUI

__all__ = ["SkillSyncConsoleUI"]
