"""Exception hierarchy for MiniGit.

Errors fall in two families:

- ``UserError``: the caller asked for something that cannot be done
  (unknown branch, empty staging area, ...). The operation aborts before
  touching any persisted state.
- ``CorruptionError``: a persisted structure references something that
  cannot be read back. These mean the repository is inconsistent, not that
  the caller made a mistake.

Every error carries the process exit code the CLI reports for it.
"""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NOT_INITIALIZED = 3
EXIT_FILE_NOT_FOUND = 4
EXIT_BRANCH_EXISTS = 5
EXIT_BRANCH_NOT_FOUND = 6
EXIT_NOTHING_TO_COMMIT = 7
EXIT_CORRUPTION = 8
EXIT_MERGE_CONFLICT = 9
EXIT_LOCKED = 10
EXIT_INVALID_ARGUMENT = 11


class MiniGitError(Exception):
    """Base class for all MiniGit errors."""

    exit_code = EXIT_FAILURE


class UserError(MiniGitError):
    """Recoverable error caused by the request itself."""


class CorruptionError(MiniGitError):
    """The repository's persisted structures are inconsistent."""

    exit_code = EXIT_CORRUPTION


class RepoNotInitialized(UserError):
    """No repository exists at the requested location."""

    exit_code = EXIT_NOT_INITIALIZED

    def __init__(self, path):
        super().__init__(f"Not a minigit repository: {path}")
        self.path = path


class BranchAlreadyExists(UserError):
    exit_code = EXIT_BRANCH_EXISTS

    def __init__(self, name: str):
        super().__init__(f"Branch '{name}' already exists")
        self.name = name


class BranchNotFound(UserError):
    exit_code = EXIT_BRANCH_NOT_FOUND

    def __init__(self, name: str, reason: str = "not found"):
        super().__init__(f"Branch '{name}' {reason}")
        self.name = name


class NothingToCommit(UserError):
    exit_code = EXIT_NOTHING_TO_COMMIT

    def __init__(self):
        super().__init__("Nothing to commit (staging area is empty)")


class InvalidBranchName(UserError):
    exit_code = EXIT_INVALID_ARGUMENT

    def __init__(self, name: str):
        super().__init__(f"Invalid branch name: '{name}'")
        self.name = name


class EmptyCommitMessage(UserError):
    exit_code = EXIT_INVALID_ARGUMENT

    def __init__(self):
        super().__init__("Commit message must not be empty")


class InvalidReference(UserError):
    """A commit reference could not be resolved."""

    exit_code = EXIT_INVALID_ARGUMENT

    def __init__(self, ref: str):
        super().__init__(f"Not a valid commit or branch: {ref}")
        self.ref = ref


class AmbiguousReference(InvalidReference):
    def __init__(self, ref: str, matches):
        super().__init__(ref)
        self.matches = sorted(matches)
        self.args = (f"Ambiguous commit prefix '{ref}' matches {len(self.matches)} commits",)


class InvalidPath(UserError):
    """A path given to add cannot be tracked."""

    exit_code = EXIT_INVALID_ARGUMENT

    def __init__(self, path, reason: str):
        super().__init__(f"Cannot add {path}: {reason}")
        self.path = path


class RepositoryLocked(UserError):
    """Another process holds the repository write lock."""

    exit_code = EXIT_LOCKED

    def __init__(self, lock_path, timeout: float):
        super().__init__(f"Repository is locked by another process ({lock_path}); gave up after {timeout:g}s")
        self.lock_path = lock_path


class ObjectNotFound(CorruptionError):
    """A blob referenced by a hash is missing from the content store."""

    def __init__(self, obj_hash: str):
        super().__init__(f"Object {obj_hash} not found")
        self.hash = obj_hash


class CommitNotFound(CorruptionError):
    """A commit referenced by a hash is missing from the commit graph."""

    def __init__(self, commit_hash: str):
        super().__init__(f"Commit {commit_hash} not found")
        self.hash = commit_hash


class CorruptObject(CorruptionError):
    def __init__(self, path, detail: str):
        super().__init__(f"Corrupt record {path}: {detail}")
        self.path = path
