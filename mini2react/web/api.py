"""FastAPI routes for graph inspection, migration and markup conversion."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from mini2react.converter import build_component
from mini2react.models import MigrationConfig
from mini2react.pipeline import graph_builder, run_graph, run_migration
from mini2react.scanner import scan_component_dirs

router = APIRouter(prefix="/api")


# --- Request models ---

class PathRequest(BaseModel):
    path: str

class GraphRequest(BaseModel):
    path: str
    restrict: bool = False

class MigrateRequest(BaseModel):
    path: str
    output: str
    strict: bool = False


# --- Path safety ---

def _validate_path(request: Request, p: str, must_exist: bool = True) -> Path:
    """Ensure path exists (if required) and lies under an allowed root."""
    resolved = Path(p).expanduser().resolve()
    if must_exist and not resolved.exists():
        raise HTTPException(404, f"Path not found: {resolved}")
    roots: list[Path] = request.app.state.allowed_roots
    if not any(resolved == root or root in resolved.parents for root in roots):
        raise HTTPException(403, "Path is outside the allowed directories")
    return resolved


# --- Endpoints ---

@router.post("/components")
async def list_components(req: PathRequest, request: Request):
    base = _validate_path(request, req.path)
    entries = await asyncio.to_thread(scan_component_dirs, base)
    return {
        "count": len(entries),
        "components": [str(e.parent) for e in entries],
    }


@router.post("/graph")
async def build_graph(req: GraphRequest, request: Request):
    source = _validate_path(request, req.path)
    config = MigrationConfig(source_dir=source, restrict_to_universe=req.restrict)
    builder = graph_builder(config)

    graph = await asyncio.to_thread(run_graph, config)
    return {
        "files": len(graph.all_files),
        "edges": graph.edge_count,
        "roots": [str(r) for r in builder.find_roots(graph)],
        "tree": builder.build_forest(graph),
        "cycles": [[str(p) for p in cycle] for cycle in builder.detect_cycles(graph)],
    }


@router.post("/migrate")
async def migrate(req: MigrateRequest, request: Request):
    source = _validate_path(request, req.path)
    output = _validate_path(request, req.output, must_exist=False)
    config = MigrationConfig(source_dir=source, output_dir=output, strict=req.strict)

    try:
        result = await asyncio.to_thread(run_migration, config)
    except ValueError as e:
        raise HTTPException(400, str(e))

    return {
        "output_dir": str(result.output_dir),
        "components": [str(c) for c in result.components],
        "files_copied": [str(f) for f in result.files_copied],
        "files_converted": [str(f) for f in result.files_converted],
        "errors": [{"file": str(p), "error": msg} for p, msg in result.errors],
        "manifest": str(result.manifest_path) if result.manifest_path else None,
    }


@router.post("/convert")
async def convert(req: PathRequest, request: Request):
    markup = _validate_path(request, req.path)
    if not markup.is_file():
        raise HTTPException(400, f"Not a file: {markup}")
    component = await asyncio.to_thread(build_component, markup)
    return {
        "name": component.name,
        "functions": len(component.functions),
        "code": component.render(),
    }
