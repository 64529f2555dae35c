"""
Preset catalog data.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SampleRef:
    url: str
    name: Optional[str] = None

    @staticmethod
    def from_dict(data: Any) -> SampleRef:
        # Older catalogs list bare URL strings
        if isinstance(data, str):
            return SampleRef(url=data)
        if not isinstance(data, Mapping):
            raise ValueError(f"sample must be an object or a URL string, got {type(data).__name__}")
        url = data.get('url') or ''
        name = data.get('name')
        return SampleRef(url=str(url), name=str(name) if name is not None else None)

    @property
    def display_name(self) -> str:
        """Name for pad labels: explicit name, else the file name of the URL."""
        if self.name:
            return self.name
        tail = self.url.rstrip('/').rsplit('/', 1)[-1]
        return tail or self.url


@dataclass(frozen=True)
class Preset:
    name: str
    category: str = ""
    samples: Tuple[SampleRef, ...] = ()

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Preset:
        samples = data.get('samples') or ()
        if not isinstance(samples, (list, tuple)):
            raise ValueError(f"samples must be a list, got {type(samples).__name__}")
        return Preset(
            name=str(data.get('name') or data.get('slug') or ''),
            category=str(data.get('type') or data.get('category') or ''),
            samples=tuple(SampleRef.from_dict(s) for s in samples),
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'type': self.category,
            'samples': [{'url': s.url, 'name': s.name} for s in self.samples],
        }
