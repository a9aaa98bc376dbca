"""Path templates compiled to anchored regular expressions.

A template is literal text plus ``{name}`` placeholders. Each placeholder
matches exactly one path segment (one or more characters other than ``/``).
"""

import re
from dataclasses import dataclass

from apirouter.errors import ConfigurationError

# {name} placeholders; anything else in braces stays literal text
PLACEHOLDER = re.compile(r"\{([a-zA-Z0-9_]+)\}")

SEGMENT = r"([^/]+)"


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled path template.

    Usage::

        pattern = compile_template("/users/{id}/posts/{post_id}")
        pattern.match("/users/42/posts/7")  # {"id": "42", "post_id": "7"}
        pattern.match("/users/42")          # None
    """

    template: str
    regex: re.Pattern[str]
    param_names: tuple[str, ...]

    def match(self, uri: str) -> dict[str, str] | None:
        """Match the whole *uri*. Returns captured parameters or ``None``."""
        m = self.regex.fullmatch(uri)
        if m is None:
            return None
        return dict(zip(self.param_names, m.groups(), strict=True))


def compile_template(template: str) -> PathPattern:
    """Compile a path template into a ``PathPattern``.

    Literal characters are escaped, so ``/files/report.pdf`` only matches
    that exact path. Placeholder names may start with a digit; captures are
    positional and mapped back to names.

    Raises ``ConfigurationError`` if a placeholder name appears twice.
    """
    parts: list[str] = []
    names: list[str] = []
    pos = 0
    for m in PLACEHOLDER.finditer(template):
        name = m.group(1)
        if name in names:
            msg = f"Path template {template!r} declares parameter {{{name}}} more than once."
            raise ConfigurationError(msg)
        parts.append(re.escape(template[pos : m.start()]))
        parts.append(SEGMENT)
        names.append(name)
        pos = m.end()
    parts.append(re.escape(template[pos:]))

    return PathPattern(
        template=template,
        regex=re.compile("".join(parts)),
        param_names=tuple(names),
    )
