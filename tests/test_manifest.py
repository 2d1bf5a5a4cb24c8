"""Tests for the integration manifest metadata."""

from __future__ import annotations

import json
from pathlib import Path

MANIFEST_PATH = (
    Path(__file__).resolve().parents[1]
    / "custom_components"
    / "pilight_ws"
    / "manifest.json"
)


def test_manifest_declares_requirements_and_push_iot_class() -> None:
    """Ensure the manifest exposes domain, requirements and local push updates."""

    assert MANIFEST_PATH.exists(), "manifest.json must exist for the integration"

    manifest = json.loads(MANIFEST_PATH.read_text(encoding="utf-8"))
    assert manifest["domain"] == "pilight_ws"
    assert sorted(manifest["requirements"]) == ["aiohttp", "pydantic"]
    assert manifest["iot_class"] == "local_push"
    assert manifest["config_flow"] is True


def test_manifest_keys_sorted() -> None:
    """The manifest should follow Home Assistant key ordering requirements."""

    manifest = json.loads(MANIFEST_PATH.read_text(encoding="utf-8"))
    keys = list(manifest)

    assert keys[:2] == ["domain", "name"], "domain then name should lead the manifest"
    assert keys[2:] == sorted(
        keys[2:]
    ), "remaining keys should be alphabetically ordered"
