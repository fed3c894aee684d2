from __future__ import annotations

from typing import Mapping

from .config import TOKEN_RE


def render_template(template: str, replacements: Mapping[str, str]) -> str:
    """
    Replace every `{{TOKEN}}` whose name is in `replacements`.

    Substitution happens in a single scan of the template, so text coming
    from a replacement value is never searched for tokens again. Tokens
    without a replacement are left as they are.
    """

    def _repl(m):
        name = m.group("name")
        if name in replacements:
            return str(replacements[name])
        return m.group(0)

    return TOKEN_RE.sub(_repl, template)
