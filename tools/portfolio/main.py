#!/usr/bin/env python3
"""
Static portfolio builder.

- content.json (or .yml) + templates/{index,project}.template.html
- Index  -> <out>/index.html, projects grouped by site.indexSections
- Pages  -> <out>/projects/<slug>/index.html with prev/next links

Key features:
- Content validated up front; the first violation aborts before any write
- Literal {{TOKEN}} substitution, no template logic
- Bento grid spans per card at desktop/tablet/mobile breakpoints
- JSON-LD (Person, WebSite, CreativeWork/SoftwareApplication) per page
- Base path prefix for hosting under a sub-path (flag, env or content)
- projects/ rebuilt from scratch every run so renamed slugs do not linger
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import List, Optional

from .config import CONTENT_PATH, OUTPUT_DIR, TEMPLATE_DIR
from .site import build_site
from .validate import ContentError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the static portfolio site")
    parser.add_argument("--content", type=pathlib.Path, default=CONTENT_PATH)
    parser.add_argument("--templates", type=pathlib.Path, default=TEMPLATE_DIR)
    parser.add_argument("--out", type=pathlib.Path, default=OUTPUT_DIR)
    parser.add_argument(
        "--base-path",
        default=None,
        help="Path prefix for every link, e.g. /portfolio (overrides env and content)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        written = build_site(args.content, args.templates, args.out, args.base_path)
    except ContentError as e:
        print(f"ERROR: invalid content: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"✓ generated {len(written)} pages")
    for rel in written:
        print(f"- {rel}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
