#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/portfolio/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
CONTENT_PATH = ROOT / "content.json"
TEMPLATE_DIR = ROOT / "templates"
INDEX_TEMPLATE = "index.template.html"
PROJECT_TEMPLATE = "project.template.html"
OUTPUT_DIR = ROOT / "site"
PROJECTS_DIR_NAME = "projects"

# Overrides site.basePath when set (e.g. for a GitHub Pages project site).
BASE_PATH_ENV = "PORTFOLIO_BASE_PATH"

# ---------- Content limits

REQUIRED_SITE_FIELDS = (
    "title",
    "description",
    "canonicalBase",
    "ogImageDefault",
    "profileImage",
    "personName",
)
OPTIONAL_SITE_FIELDS = ("basePath", "personUrl")
MAX_CTAS = 2
FACTS_RANGE = (2, 4)
MIN_SCREENS = 1
CONTRIB_RANGE = (5, 8)
SCHEMA_TYPES = ("SoftwareApplication", "CreativeWork")

META_DESCRIPTION_MAX = 160
JSON_LD_DESCRIPTION_MAX = 180
ELLIPSIS = "…"

# ---------- Bento grid (min, max) per breakpoint

COL_BOUNDS_DESKTOP = (1, 12)
COL_BOUNDS_TABLET = (1, 8)
COL_BOUNDS_MOBILE = (1, 4)
ROW_BOUNDS = (1, 6)

# ---------- Screens

DEFAULT_ASPECT = "4/3"
DEFAULT_FIT = "cover"

# ---------- Structured data

APPLICATION_CATEGORY = "WebApplication"

# Some shared regexes

SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
ABSOLUTE_URL_RE = re.compile(r"^https?://")
TOKEN_RE = re.compile(r"\{\{(?P<name>[A-Za-z0-9_]+)\}\}")
APP_RE = re.compile(r"app")
ANCHOR_RE = re.compile(r"[^a-z0-9-]+")
