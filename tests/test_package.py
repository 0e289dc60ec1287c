"""
Tests for the export package (files on disk and ZIP download).
"""

import io
import json
import zipfile

import pytest

from logperiodic.calculator import CalculationError, ParameterValidationError
from logperiodic.io import DesignParameters
from logperiodic.io.package import (
    PackageFiles,
    create_package_zip,
    generate_package,
    package_basename,
    save_package_to_dir,
)


@pytest.fixture(scope="module")
def package_files(reference_params):
    return generate_package(reference_params)


class TestGeneratePackage:
    def test_documents(self, package_files):
        assert package_files.svg.startswith("<?xml")
        assert package_files.dxf.endswith("EOF\r\n")
        assert json.loads(package_files.design_json)["parameters"]["tooth_pair_count"] == 4
        assert package_files.design_md.startswith("# Planar Log-Periodic Toothed Antenna")
        assert len(package_files.result.results) == 4

    def test_no_outline_by_default(self, package_files):
        assert package_files.outline_svg is None
        assert package_files.outline_dxf is None
        assert package_files.outline_area_mm2 is None

    def test_file_map(self, package_files):
        assert sorted(package_files.file_map()) == [
            "antenna.dxf", "antenna.json", "antenna.md", "antenna.svg",
        ]

    def test_progress_log(self, reference_params):
        messages = []
        generate_package(reference_params, log=messages.append)
        assert messages[0] == "Calculating tooth pairs..."
        assert "Exporting SVG..." in messages
        assert "Exporting DXF..." in messages

    def test_invalid_parameters(self):
        params = DesignParameters(
            scaling_factor=1.2, tooth_angle_deg=95, tooth_pair_count=4, start_radius_m=0.1,
        )
        with pytest.raises(ParameterValidationError):
            generate_package(params)

    def test_degenerate_design(self):
        params = DesignParameters(
            scaling_factor=0.25, tooth_angle_deg=10, tooth_pair_count=3, start_radius_m=0.1,
        )
        with pytest.raises(CalculationError):
            generate_package(params)

    def test_documents_carry_no_timestamp(self, reference_params, package_files):
        again = generate_package(reference_params)
        assert again.svg == package_files.svg
        assert again.dxf == package_files.dxf


class TestBasename:
    def test_explicit_timestamp(self):
        assert package_basename(1700000000000) == "antenna_1700000000000"

    def test_current_time(self):
        name = package_basename()
        assert name.startswith("antenna_")
        assert name.split("_")[1].isdigit()


class TestSaveToDir:
    def test_writes_files(self, package_files, tmp_path):
        written = save_package_to_dir(package_files, tmp_path / "out")
        assert sorted(p.name for p in written) == [
            "antenna.dxf", "antenna.json", "antenna.md", "antenna.svg",
        ]
        assert all(p.exists() for p in written)

    def test_dxf_keeps_crlf(self, package_files, tmp_path):
        save_package_to_dir(package_files, tmp_path)
        data = (tmp_path / "antenna.dxf").read_bytes()
        assert data.endswith(b"EOF\r\n")
        assert b"\r\r\n" not in data

    def test_basename(self, package_files, tmp_path):
        written = save_package_to_dir(package_files, tmp_path, basename="antenna_42")
        assert "antenna_42.svg" in {p.name for p in written}

    def test_outline_names(self, tmp_path):
        files = PackageFiles(outline_svg=b"<svg/>", outline_dxf=b"0\nEOF\n")
        written = save_package_to_dir(files, tmp_path, basename="antenna_42")
        assert sorted(p.name for p in written) == ["antenna_42_outline.dxf", "antenna_42_outline.svg"]
        assert (tmp_path / "antenna_42_outline.svg").read_bytes() == b"<svg/>"


class TestZip:
    def test_contents(self, package_files):
        data = create_package_zip(package_files)
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert sorted(zf.namelist()) == [
                "antenna.dxf", "antenna.json", "antenna.md", "antenna.svg",
            ]
            assert zf.read("antenna.svg").decode("utf-8") == package_files.svg

    def test_basename(self, package_files):
        data = create_package_zip(package_files, basename="antenna_1700000000000")
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            assert "antenna_1700000000000.dxf" in zf.namelist()
