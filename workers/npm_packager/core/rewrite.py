"""
Lexical rewrite of ``.ts`` import specifiers to ``.js``.

tsc does not rewrite extensions, so Deno-style specifiers
(``from "./x.ts"``) must point at the emitted ``.js`` files.

Exactly two shapes are recognised:

  from <q>path.ts<q>[;]             static import / re-export
  import( <q>path.ts<q>[,] )        dynamic import call

Nothing is parsed. Side-effect imports (``import "./x.ts"``), specifiers
split across lines and computed dynamic paths are left untouched.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

TS_TO_JS_RE = re.compile(
    r"""from\s+(['"])([^'"]+)\.ts(['"])(;?)"""
    r"""|import\s*\(\s*(['"])([^'"]+)\.ts(['"]),?\s*\)"""
)


def _replace(m: re.Match) -> str:
    if m.group(2) is not None:
        q_open, path, q_close, semi = m.group(1, 2, 3, 4)
        return f"from {q_open}{path}.js{q_close}{semi}"
    q_open, path, q_close = m.group(5, 6, 7)
    return f"import({q_open}{path}.js{q_close})"


def rewrite_imports(text: str) -> str:
    """Return *text* with matching ``.ts`` specifiers rewritten to ``.js``."""
    return TS_TO_JS_RE.sub(_replace, text)


def rewrite_tree(src_root: Path) -> List[Path]:
    """
    Rewrite every ``*.ts`` file under *src_root* in place.

    Returns the files whose content actually changed.
    """
    changed: List[Path] = []
    for path in sorted(src_root.rglob("*.ts")):
        if not path.is_file():
            continue
        with open(path, encoding="utf-8", newline="") as f:
            original = f.read()
        rewritten = rewrite_imports(original)
        if rewritten != original:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(rewritten)
            changed.append(path)
            logger.debug("Rewrote imports in %s", path)
    return changed
