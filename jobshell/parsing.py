"""Splitting a command line into arguments and redirections."""

from __future__ import annotations

from dataclasses import dataclass, field

_SEPARATORS = frozenset(" \t\n")
_BACKGROUND = "&"
_REDIRECT_IN = "<"
_REDIRECT_OUT = ">"


class RedirectionError(ValueError):
    """Raised when a redirection operator has no file name after it."""


@dataclass
class Command:
    """A parsed command line: its arguments and whether it runs in background."""

    args: list[str] = field(default_factory=list)
    background: bool = False

    @property
    def name(self) -> str | None:
        """The program name, or None for an empty command."""
        return self.args[0] if self.args else None


def parse_command(line: str) -> Command:
    """Split ``line`` on blanks and tabs.

    An ``&`` anywhere marks the command as a background one; everything
    after it is ignored.
    """
    args: list[str] = []
    background = False
    token: list[str] = []
    for char in line:
        if char in _SEPARATORS:
            if token:
                args.append("".join(token))
                token = []
        elif char == _BACKGROUND:
            background = True
            break
        else:
            token.append(char)
    if token:
        args.append("".join(token))
    return Command(args=args, background=background)


def parse_redirections(args: list[str]) -> tuple[list[str], str | None, str | None]:
    """Take ``<`` and ``>`` redirections out of ``args``.

    Returns the remaining arguments, the input file and the output file
    (either file is None when not given; a later redirection of the same
    kind replaces an earlier one). The operators must stand as separate
    arguments. Raises RedirectionError when an operator ends the line.
    """
    remaining: list[str] = []
    file_in: str | None = None
    file_out: str | None = None
    tokens = iter(args)
    for token in tokens:
        if token not in (_REDIRECT_IN, _REDIRECT_OUT):
            remaining.append(token)
            continue
        target = next(tokens, None)
        if target is None:
            raise RedirectionError("syntax error in redirection")
        if token == _REDIRECT_IN:
            file_in = target
        else:
            file_out = target
    return remaining, file_in, file_out