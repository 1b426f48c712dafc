"""Shared YAML dump helpers for vector files."""

from __future__ import annotations

from pathlib import Path

import yaml


class PlainDumper(yaml.SafeDumper):
    pass


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=None)


PlainDumper.add_representer(str, _str_representer)


def prune(obj):
    """Drop ``None`` values so absent optionals become absent keys."""
    if isinstance(obj, dict):
        return {k: prune(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list):
        return [prune(v) for v in obj]
    return obj


def dump_yaml(data: dict) -> str:
    return yaml.dump(prune(data), Dumper=PlainDumper, sort_keys=False, width=4096)


def write_yaml(path: Path, data: dict) -> None:
    path.write_text(dump_yaml(data))
