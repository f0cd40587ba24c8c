"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class NotARepositoryError(GitError):
    """Path is not a git repository."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class RefNotFoundError(GitError):
    """Reference (branch, tag, commit) not found."""

    def __init__(self, ref: str) -> None:
        super().__init__(f"Reference not found: {ref}")
        self.ref = ref


class PathNotFoundError(GitError):
    """Path does not exist in a commit's tree."""

    def __init__(self, ref: str, path: str) -> None:
        super().__init__(f"Path not found at {ref}: {path}")
        self.ref = ref
        self.path = path


class NotAFileError(GitError):
    """Path exists in a commit's tree but is not a file."""

    def __init__(self, ref: str, path: str) -> None:
        super().__init__(f"Not a file at {ref}: {path}")
        self.ref = ref
        self.path = path
