from typing import Final


GIT_DIRNAME: Final[str] = ".git"
SKILLS_DIRNAME: Final[str] = "skills"
SKILL_FILENAME: Final[str] = "SKILL.md"

SKILLSYNC_HOME_ENV: Final[str] = "SKILLSYNC_HOME"
SKILLSYNC_DIRNAME: Final[str] = ".skillsync"
PERMISSIONS_FILENAME: Final[str] = "permissions.yaml"

PLATFORM_PATH_ENV_PREFIX: Final[str] = "SKILLSYNC_"
PLATFORM_PATH_ENV_SUFFIX: Final[str] = "_PATH"

CONFIG_DIR_MODE: Final[int] = 0o750
CONFIG_FILE_MODE: Final[int] = 0o644

WRITE_TEST_PREFIX: Final[str] = ".skillsync-write-test"

SNIPPET_MAX_LEN: Final[int] = 80
