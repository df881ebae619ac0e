"""Specification of object sync jobs between storage buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class Source:
    """Bucket that objects are copied from."""

    bucket: str = ""
    cos: str = ""
    object: str = ""
    storage_class: str = ""
    region: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "bucket": self.bucket,
            "cos": self.cos,
            "object": self.object,
            "storageClass": self.storage_class,
            "region": self.region,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Source:
        data = data or {}
        return cls(
            bucket=str(data.get("bucket") or ""),
            cos=str(data.get("cos") or ""),
            object=str(data.get("object") or ""),
            storage_class=str(data.get("storageClass") or ""),
            region=str(data.get("region") or ""),
        )


@dataclass
class TargetItem:
    """Bucket that objects are copied to."""

    bucket: str = ""
    storage_class: str = ""
    region: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "bucket": self.bucket,
            "storageClass": self.storage_class,
            "region": self.region,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TargetItem:
        data = data or {}
        return cls(
            bucket=str(data.get("bucket") or ""),
            storage_class=str(data.get("storageClass") or ""),
            region=str(data.get("region") or ""),
        )


@dataclass
class Spec:
    """One source bucket together with its target buckets."""

    source: Source = field(default_factory=Source)
    target: list[TargetItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source.to_dict(),
            "target": [item.to_dict() for item in self.target],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Spec:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"spec entry must be a mapping, got {type(data).__name__}")
        targets = data.get("target") or []
        if not isinstance(targets, list):
            raise ValueError("spec 'target' must be a list")
        return cls(
            source=Source.from_dict(data.get("source")),
            target=[TargetItem.from_dict(item) for item in targets],
        )


def load_specs(text: str) -> list[Spec]:
    """Parse a YAML document holding a list of specs."""
    data = yaml.safe_load(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("spec document must be a list of specifications")
    return [Spec.from_dict(entry) for entry in data]


def dump_specs(specs: list[Spec]) -> str:
    """Serialise specs to a YAML document."""
    return yaml.safe_dump([spec.to_dict() for spec in specs], sort_keys=False)