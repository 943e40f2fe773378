"""Errors that end a run before Ansible is started."""


class AliasError(Exception):
    """Base error; carries the exit code the CLI returns."""

    exit_code = 1


class UsageError(AliasError):
    """Missing or invalid arguments. The CLI prints usage along with it."""


class IdentityError(AliasError):
    """The wrapper was invoked under its own name instead of a target symlink."""
