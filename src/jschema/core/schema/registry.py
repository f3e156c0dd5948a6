#!/usr/bin/env python3
"""
Purpose:
    Implements the DescriptorRegistry, which discovers, loads, deduplicates
    and caches declarative struct descriptors (JSON/YAML) from given roots,
    and provides query access to them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from jschema.core.constants import SUPPORTED_DESCRIPTOR_EXT
from jschema.core.formatting import format_validation_errors
from jschema.core.schema.type_descriptor import StructType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DescriptorEntry:
    """
    Record for a descriptor file discovered on disk.
    - name: struct name (lowercase); the filename stem when unreadable
    - path: absolute path to the file
    - valid: whether this is the selected, usable descriptor
    - reason: diagnostic text for invalid entries (parse error, duplicate dropped)
    - fields: number of declared fields (valid entries only)
    """
    name: str
    path: Path
    valid: bool
    reason: Optional[str] = None
    fields: Optional[int] = None


_Candidate = tuple[Path, StructType]


class DescriptorRegistry:
    """
    Loads and caches `StructType` descriptors from one or more roots, and
    exposes entries (valid + invalid) for the CLI.

    Duplicate policy: newest mtime wins; older duplicates are marked invalid.
    """

    def __init__(self, roots: Iterable[Path]):
        self._roots = [Path(r) for r in roots]
        self._descriptors: Dict[str, StructType] = {}
        self._entries: List[DescriptorEntry] = []
        self._loaded: bool = False

    # --- Loading --- #

    def load(self, *, clear: bool = True) -> None:
        """
        Scan roots for descriptor files, parse them, and resolve duplicates.

        Args:
            clear: if True, clears prior state before loading.
        """
        if clear:
            self._descriptors.clear()
            self._entries.clear()

        candidates: Dict[str, List[_Candidate]] = {}
        for p in self._iter_descriptor_files():
            try:
                struct = StructType.from_file(p)
            except (OSError, ValueError) as e:
                # ValidationError is a ValueError
                reason = "; ".join(format_validation_errors(e)) if isinstance(e, ValidationError) else str(e)
                logger.debug("Invalid descriptor %s: %s", p, reason)
                self._entries.append(DescriptorEntry(name=p.stem.lower(), path=p.resolve(), valid=False, reason=reason))
                continue
            candidates.setdefault(struct.name.strip().lower(), []).append((p.resolve(), struct))

        for name, items in candidates.items():
            self._resolve(name, items)
        self._loaded = True

    # --- Query API --- #

    def get(self, name: str) -> Optional[StructType]:
        """Return a loaded (valid) descriptor by name (case-insensitive), or None."""
        return self._descriptors.get(name.strip().lower())

    def require(self, name: str) -> StructType:
        """Return a loaded descriptor by name or raise LookupError."""
        d = self.get(name)
        if d is None:
            raise LookupError(f"Type descriptor {name!r} not found")
        return d

    def names(self) -> List[str]:
        """Sorted names of valid descriptors."""
        return sorted(self._descriptors.keys())

    def entries(self) -> List[DescriptorEntry]:
        """All scanned entries (valid + invalid)."""
        return list(self._entries)

    def valid_entries(self) -> List[DescriptorEntry]:
        return [e for e in self._entries if e.valid]

    def invalid_entries(self) -> List[DescriptorEntry]:
        return [e for e in self._entries if not e.valid]

    @property
    def loaded(self) -> bool:
        """True if a load() has completed."""
        return self._loaded

    @property
    def roots(self) -> List[Path]:
        return list(self._roots)

    # --- Loading Helpers --- #

    def _iter_descriptor_files(self) -> Iterator[Path]:
        for root in self._roots:
            if not root.exists():
                continue
            for p in sorted(root.rglob("*")):
                if p.is_file() and p.suffix.lower() in SUPPORTED_DESCRIPTOR_EXT:
                    yield p

    def _resolve(self, name: str, items: List[_Candidate]) -> None:
        # newest mtime wins; tie-break by path for stability
        items.sort(key=lambda t: (t[0].stat().st_mtime, str(t[0])), reverse=True)
        (win_path, win_struct), losers = items[0], items[1:]

        self._descriptors[name] = win_struct
        self._entries.append(DescriptorEntry(
            name=name, path=win_path, valid=True, reason="kept", fields=len(win_struct.fields),
        ))
        for loser_path, _ in losers:
            logger.debug("Duplicate descriptor %r dropped: %s", name, loser_path)
            self._entries.append(DescriptorEntry(
                name=name, path=loser_path, valid=False, reason="duplicate-dropped",
            ))
