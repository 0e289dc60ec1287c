"""
Shared export and packaging logic for antenna designs.

Runs the whole pipeline (calculate -> build geometry -> serialize) and
collects the documents a host needs: SVG drawing, DXF drawing,
antenna.json and antenna.md, plus the optional build123d fused outline.

Hosts either write the files to a directory or download one ZIP.
"""

import io
import logging
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from ..calculator.core import calculate
from ..calculator.output import to_json, to_markdown
from ..calculator.validation import validate_parameters
from ..core.geometry import build_geometry
from .dxf import to_dxf_document
from .models import CalculationResult, DesignParameters, ExportSettings
from .svg import to_svg_document

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "antenna"


@dataclass
class PackageFiles:
    """Container for all output files of one calculation."""

    svg: Optional[str] = None
    dxf: Optional[str] = None
    design_json: Optional[str] = None
    design_md: Optional[str] = None
    outline_svg: Optional[bytes] = None
    outline_dxf: Optional[bytes] = None
    outline_area_mm2: Optional[float] = None
    result: Optional[CalculationResult] = None

    def file_map(self) -> Dict[str, Union[str, bytes]]:
        """File name -> contents for every file that was produced."""
        candidates = {
            "antenna.svg": self.svg,
            "antenna.dxf": self.dxf,
            "antenna.json": self.design_json,
            "antenna.md": self.design_md,
            "outline.svg": self.outline_svg,
            "outline.dxf": self.outline_dxf,
        }
        return {name: data for name, data in candidates.items() if data is not None}


def _export_fused_outline(files: PackageFiles, geometry) -> None:
    """Add build123d outline files. Failures are logged and skipped."""
    try:
        from ..core.outline import (
            build_fused_outline,
            export_outline_dxf,
            export_outline_svg,
            outline_area,
        )

        sketch = build_fused_outline(geometry)
        files.outline_area_mm2 = outline_area(sketch)
        files.outline_svg = export_outline_svg(sketch)
        files.outline_dxf = export_outline_dxf(sketch)
    except Exception as e:
        logger.warning(f"Fused outline export failed (non-fatal): {e}")


def generate_package(
    params: DesignParameters,
    settings: Optional[ExportSettings] = None,
    log: Optional[Callable[[str], None]] = None,
) -> PackageFiles:
    """Generate all output files for an antenna design.

    Args:
        params: Design parameters.
        settings: Export options; fused_outline adds build123d outline files.
        log: Optional progress callback (e.g. print).

    Returns:
        PackageFiles with all generated file data.

    Raises:
        ParameterValidationError: If params break a hard limit.
        CalculationError: If the calculation degenerates.
    """
    settings = settings or ExportSettings()
    files = PackageFiles()

    def _log(msg: str):
        if log:
            log(msg)

    _log("Calculating tooth pairs...")
    result = calculate(params)
    validation = validate_parameters(params)
    files.result = result
    _log(f"  {len(result.results)} tooth pairs, feed gap {result.feed_gap_mm:.4f} mm")

    geometry = build_geometry(result, params)

    _log("Exporting SVG...")
    files.svg = to_svg_document(geometry, params, settings)

    _log("Exporting DXF...")
    files.dxf = to_dxf_document(result, params, settings)

    _log("Generating antenna.json and antenna.md...")
    files.design_json = to_json(result, params, validation=validation)
    files.design_md = to_markdown(result, params, validation=validation)

    if settings.fused_outline:
        _log("Fusing outline...")
        _export_fused_outline(files, geometry)
        if files.outline_area_mm2 is not None:
            _log(f"  Outline area: {files.outline_area_mm2:.2f} mm^2")

    return files


def package_basename(timestamp_ms: Optional[int] = None) -> str:
    """Base filename for a download, e.g. antenna_1700000000000.

    The timestamp only names the files; document bodies never carry it.
    """
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{FILENAME_PREFIX}_{timestamp_ms}"


def save_package_to_dir(
    files: PackageFiles,
    output_dir: Path,
    basename: Optional[str] = None,
) -> List[Path]:
    """Write all PackageFiles to a directory.

    Args:
        files: PackageFiles from generate_package().
        output_dir: Directory to write files into (created if needed).
        basename: Replaces the "antenna"/"outline" stem when given
            (e.g. from package_basename()).

    Returns:
        List of Paths written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    for name, data in files.file_map().items():
        path = output_dir / _rename(name, basename)
        if isinstance(data, bytes):
            path.write_bytes(data)
        else:
            path.write_text(data, encoding="utf-8", newline="")
        written.append(path)

    logger.info(f"Wrote {len(written)} files to {output_dir}")
    return written


def create_package_zip(files: PackageFiles, basename: Optional[str] = None) -> bytes:
    """Create ZIP archive from PackageFiles.

    Args:
        files: PackageFiles from generate_package().
        basename: Optional stem for the archived file names.

    Returns:
        ZIP file contents as bytes.
    """
    buf = io.BytesIO()

    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in files.file_map().items():
            zf.writestr(_rename(name, basename), data)

    return buf.getvalue()


def _rename(name: str, basename: Optional[str]) -> str:
    if not basename:
        return name
    stem, suffix = name.split(".", 1)
    if stem == FILENAME_PREFIX:
        return f"{basename}.{suffix}"
    return f"{basename}_{stem}.{suffix}"
