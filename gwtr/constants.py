"""Shared constants for gwtr."""

# Worktree directories live next to the repository as "<repo>_<name>"
WORKTREE_NAME_SEPARATOR = "_"

# Reserved worktree name that always refers to the primary worktree
MAIN_WORKTREE_ALIAS = "main"

BRANCH_REF_PREFIX = "refs/heads/"

# `git worktree list --porcelain` keys
PORCELAIN_WORKTREE = "worktree"
PORCELAIN_HEAD = "HEAD"
PORCELAIN_BRANCH = "branch"
PORCELAIN_BARE = "bare"
PORCELAIN_DETACHED = "detached"
PORCELAIN_LOCKED = "locked"
PORCELAIN_PRUNABLE = "prunable"

# `git branch` marks the current branch with "* " and branches checked out
# in another worktree with "+ "
MERGED_BRANCH_MARKERS = ("* ", "+ ")

# Regular expressions (matched case-insensitively) over git stderr that
# select a retry or skip path
BRANCH_EXISTS_PATTERNS = (
    r"branch named .+ already exists",
)
UNCOMMITTED_CHANGES_PATTERNS = (
    "contains modified or untracked files",
    "use --force to delete it",
)
REMOTE_MISSING_PATTERNS = (
    "does not appear to be a git repository",
    "no remote repository specified",
    "no such remote",
)

# Substrings of `git pull` stdout meaning nothing changed
UP_TO_DATE_PATTERNS = (
    "already up to date",
    "already up-to-date",
)

# Symbol constants
SYMBOL_SUCCESS = "✓"
SYMBOL_FAILURE = "✗"
SYMBOL_SKIPPED = "-"
SYMBOL_BULLET = "•"

MAIN_MARKER = "(main)"

# CLI colors (Rich color names)
CLI_COLORS = {
    "main": "green",
    "linked": "yellow",
    "branch": "cyan",
    "clean": "green",
    "dirty": "yellow",
    "unknown": "dim",
    "error": "red",
    "skipped": "yellow",
}
