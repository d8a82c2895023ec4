"""Display options resolved once at startup."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping


@dataclass(frozen=True)
class DisplayOptions:
    """How each line is transformed and decorated before display.

    Instances are immutable and passed explicitly to every component that
    needs them.
    """

    unescape: bool = False
    keep_one_line: bool = False
    trim_space: bool = False
    show_line_number: bool = False

    def for_interactive(self) -> 'DisplayOptions':
        """Return the options to use while paging a file.

        The line index maps one physical line to one displayed line, so an
        escaped ``\\n`` must not become a real newline: unescaping forces the
        one-line mode on.
        """
        if self.unescape and not self.keep_one_line:
            return replace(self, keep_one_line=True)
        return self

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def merge(cls, defaults: Mapping[str, Any], **flags: bool) -> 'DisplayOptions':
        """Combine configured defaults with command-line flags.

        A flag that is set switches its option on; an unset flag keeps the
        configured default.
        """
        values = {}
        for name in cls.field_names():
            values[name] = bool(flags.get(name)) or bool(defaults.get(name, False))
        return cls(**values)
