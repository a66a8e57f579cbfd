"""
Flag validation against a command's option schema.

The validator fails fast: the first supplied flag (in the order the source
reported them) that the schema does not declare is raised, and the remaining
flags are not examined. The caller gets exactly one flag to fix.
"""
from .faults import FaultCode, UnknownFlagError


def declared(entry, /):
    """
    every rendered alias declared for `entry` (empty when entry is None).
    """
    if entry is None:
        return frozenset()
    return entry.options.flags


def validate(entry, supplied, /):
    """
    check every flag in `supplied` against the schema of `entry`.

    parameters
    - entry: CommandEntry | None
    - supplied: iterable (or mapping) of rendered flags, in source order.

    raises
    - UnknownFlagError: carrying the first undeclared flag as option 'flag'.
    """
    flags = declared(entry)
    for flag in supplied:
        if flag not in flags:
            raise UnknownFlagError(
                f"flag provided but not defined: '{flag}'",
                code=FaultCode.UNKNOWN_FLAG,
                flag=flag,
            )


__all__ = (
    "declared",
    "validate",
)
