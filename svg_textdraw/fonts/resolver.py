"""Font resolution: locate and load the font file behind a NativeFont.

Installed faces are indexed once per process by reading their ``name``
and ``OS/2`` tables with fontTools. Lookups then pick the face of the
requested family whose weight, width and slant are closest to the
request. Generic CSS families expand to a list of common system faces.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont, TTLibError

from svg_textdraw.exceptions import FontNotFoundError
from svg_textdraw.fonts.mapper import NativeFont

logger = logging.getLogger(__name__)

FONT_SUFFIXES = (".ttf", ".otf", ".ttc", ".otc")

GENERIC_FAMILIES = {
    "sans-serif": ["DejaVu Sans", "Liberation Sans", "Arial", "Helvetica", "Noto Sans"],
    "sans": ["DejaVu Sans", "Liberation Sans", "Arial", "Helvetica", "Noto Sans"],
    "serif": ["DejaVu Serif", "Liberation Serif", "Times New Roman", "Times", "Noto Serif"],
    "monospace": ["DejaVu Sans Mono", "Liberation Mono", "Courier New", "Menlo", "Noto Sans Mono"],
}

# OS/2 usWidthClass 1..9 against NativeStretch percentages.
_WIDTH_CLASS_PERCENT = {1: 50, 2: 62, 3: 75, 4: 87, 5: 100, 6: 112, 7: 125, 8: 150, 9: 200}

_ITALIC_BIT = 1 << 0
_OBLIQUE_BIT = 1 << 9


def _normalize(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", name.lower().lstrip("."))


@dataclass(frozen=True)
class FaceEntry:
    path: Path
    font_index: int
    family: str
    weight: int
    width: int
    italic: bool


def _name(ttfont: TTFont, ids: list[int]) -> str | None:
    table = ttfont["name"]
    for nid in ids:
        rec = table.getDebugName(nid)
        if rec:
            return rec.strip()
    return None


def _face_entry(ttfont: TTFont, path: Path, font_index: int) -> FaceEntry | None:
    family = _name(ttfont, [16, 1])
    if not family:
        return None
    weight, width, italic = 400, 100, False
    if "OS/2" in ttfont:
        os2 = ttfont["OS/2"]
        weight = int(getattr(os2, "usWeightClass", 400))
        width = _WIDTH_CLASS_PERCENT.get(int(getattr(os2, "usWidthClass", 5)), 100)
        italic = bool(getattr(os2, "fsSelection", 0) & (_ITALIC_BIT | _OBLIQUE_BIT))
    return FaceEntry(path, font_index, family, weight, width, italic)


class FontResolver:
    """Find installed font files for NativeFont requests."""

    # Shared between instances: scanning the font directories is slow.
    _index: dict[tuple[str, ...], list[FaceEntry]] = {}

    def __init__(
        self,
        font_dirs: list[Path] | None = None,
        overrides: dict[str, Path] | None = None,
        default_family: str = "sans-serif",
    ) -> None:
        self.font_dirs = [Path(d).expanduser() for d in (font_dirs or [])]
        self.overrides = {_normalize(k): Path(v).expanduser() for k, v in (overrides or {}).items()}
        self.default_family = default_family
        self._fonts: dict[tuple[Path, int], TTFont] = {}

    @staticmethod
    def system_font_dirs() -> list[Path]:
        """Return existing platform font directories."""
        home = Path.home()
        if sys.platform == "darwin":
            candidates = [
                Path("/System/Library/Fonts"),
                Path("/Library/Fonts"),
                home / "Library" / "Fonts",
            ]
        elif sys.platform.startswith("win"):
            windir = Path(os.environ.get("WINDIR", "C:/Windows"))
            candidates = [windir / "Fonts", home / "AppData/Local/Microsoft/Windows/Fonts"]
        else:
            candidates = [
                Path("/usr/share/fonts"),
                Path("/usr/local/share/fonts"),
                home / ".fonts",
                home / ".local" / "share" / "fonts",
            ]
        return [d for d in candidates if d.exists()]

    def _search_dirs(self) -> list[Path]:
        return [d for d in self.font_dirs if d.exists()] + self.system_font_dirs()

    def faces(self) -> list[FaceEntry]:
        """Index every font face found in the search directories."""
        key = tuple(str(d) for d in self._search_dirs())
        if key in FontResolver._index:
            return FontResolver._index[key]

        entries: list[FaceEntry] = []
        for directory in self._search_dirs():
            for path in sorted(directory.rglob("*")):
                if path.suffix.lower() not in FONT_SUFFIXES or not path.is_file():
                    continue
                entries.extend(self._scan_file(path))
        logger.debug("Indexed %d font faces in %d directories", len(entries), len(key))
        FontResolver._index[key] = entries
        return entries

    def _scan_file(self, path: Path) -> list[FaceEntry]:
        found = []
        try:
            if path.suffix.lower() in (".ttc", ".otc"):
                collection = TTCollection(path, lazy=True)
                fonts = list(enumerate(collection.fonts))
            else:
                fonts = [(0, TTFont(path, lazy=True))]
            for index, ttfont in fonts:
                entry = _face_entry(ttfont, path, index)
                if entry is not None:
                    found.append(entry)
        except (TTLibError, OSError, KeyError) as e:
            logger.debug("Skipping unreadable font %s: %s", path, e)
        return found

    def find(self, font: NativeFont) -> FaceEntry:
        """Return the best installed face for ``font``.

        Raises:
            FontNotFoundError: if no face of the family (or of the
                configured default family) is installed.
        """
        style = font.style.value
        override = self.overrides.get(_normalize(font.family))
        if override is not None:
            if not override.exists():
                raise FontNotFoundError(font.family, font.css_weight, style)
            return FaceEntry(override, 0, font.family, font.css_weight, int(font.stretch), font.italic)

        for family in self._candidate_families(font.family):
            wanted = _normalize(family)
            matches = [f for f in self.faces() if _normalize(f.family) == wanted]
            if matches:
                best = min(matches, key=lambda f: self._distance(f, font))
                logger.debug("Resolved %s w=%d %s -> %s", font.family, font.css_weight, style, best.path.name)
                return best
        raise FontNotFoundError(font.family, font.css_weight, style)

    def _candidate_families(self, family: str) -> list[str]:
        candidates = GENERIC_FAMILIES.get(family.strip().lower(), [family])
        if family != self.default_family:
            candidates = candidates + GENERIC_FAMILIES.get(self.default_family.lower(), [self.default_family])
        return candidates

    @staticmethod
    def _distance(face: FaceEntry, font: NativeFont) -> tuple[int, int, int]:
        return (
            0 if face.italic == font.italic else 1,
            abs(face.width - int(font.stretch)),
            abs(face.weight - font.css_weight),
        )

    def load(self, font: NativeFont) -> TTFont:
        """Load (and cache) the TTFont for ``font``."""
        face = self.find(font)
        key = (face.path, face.font_index)
        if key not in self._fonts:
            try:
                self._fonts[key] = TTFont(face.path, fontNumber=face.font_index, lazy=True)
            except (TTLibError, OSError) as e:
                raise FontNotFoundError(font.family, font.css_weight, font.style.value) from e
        return self._fonts[key]
