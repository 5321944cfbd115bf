"""Generate manifest.json."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from mini2react.models import MigrationResult


def generate_manifest(result: MigrationResult, source_dir: Path) -> Path:
    """Generate a manifest.json summarizing the migration."""
    manifest = {
        "version": "1.0",
        "generated": datetime.now().isoformat(),
        "source_directory": str(source_dir),
        "output_directory": str(result.output_dir),
        "components": [str(c) for c in result.components],
        "files_copied": [str(f) for f in result.files_copied],
        "files_converted": [str(f) for f in result.files_converted],
        "errors": [{"file": str(path), "error": message} for path, message in result.errors],
    }

    result.output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = result.output_dir / "manifest.json"
    manifest_path.write_text(
        json.dumps(manifest, indent=2) + "\n",
        encoding="utf-8",
    )
    return manifest_path
