from skillsync.skills.parser import discover_skills, parse_skill, split_frontmatter

__all__ = ["discover_skills", "parse_skill", "split_frontmatter"]
