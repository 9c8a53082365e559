"""Exceptions raised while computing and creating version tags."""


class SemverTagError(Exception):
    """Base class for all errors that should abort a tagging run."""


class UsageError(SemverTagError):
    """Indicate conflicting or missing command-line options."""


class ResolutionError(SemverTagError):
    """Indicate that the repository state cannot produce a new tag."""


class UnsupportedTargetError(ResolutionError):
    """A tag points to an object that cannot be tagged again."""

    def __init__(self, message: str, kind: str):
        super().__init__(message)
        self.kind = kind


class CommandError(SemverTagError):
    """An external command exited with a non-zero status."""

    def __init__(self, args, returncode: int, output: str):
        self.args_list = list(args)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"`{' '.join(self.args_list)}` exited with status {returncode}, "
            f"output was: {output.strip()}"
        )


class PromptAborted(SemverTagError):
    """The user interrupted an interactive prompt."""
