"""Shared pytest fixtures for the geo_convert test suite."""

from __future__ import annotations

import base64
import io
import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Transport helpers
# ---------------------------------------------------------------------------


def to_data_url(data: bytes, mime: str = "application/octet-stream") -> str:
    """Encode bytes the way the browser upload form does."""
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def build_zip(members: dict[str, bytes]) -> bytes:
    """Build an in-memory ZIP archive from ``{name: bytes}``."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture()
def data_url() -> Callable[..., str]:
    """Factory turning bytes into a base64 data URL."""
    return to_data_url


@pytest.fixture()
def zip_bytes() -> Callable[[dict[str, bytes]], bytes]:
    """Factory building ZIP archives from a member mapping."""
    return build_zip


# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------

KML_TWO_POINTS = b"""<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Sites</name>
    <Placemark>
      <name>Intake</name>
      <description>River intake</description>
      <Point><coordinates>147.15,-9.47,0</coordinates></Point>
    </Placemark>
    <Placemark>
      <name>Outfall</name>
      <Point><coordinates>147.20,-9.50</coordinates></Point>
    </Placemark>
  </Document>
</kml>
"""

KML_SINGLE_POLYGON = b"""<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>Mine lease</name>
      <description>Lease boundary</description>
      <Polygon>
        <outerBoundaryIs>
          <LinearRing>
            <coordinates>
              147.0,-9.0,0 147.1,-9.0,0 147.1,-9.1,0 147.0,-9.1,0 147.0,-9.0,0
            </coordinates>
          </LinearRing>
        </outerBoundaryIs>
        <innerBoundaryIs>
          <LinearRing>
            <coordinates>147.02,-9.02 147.03,-9.02 147.03,-9.03 147.02,-9.02</coordinates>
          </LinearRing>
        </innerBoundaryIs>
      </Polygon>
    </Placemark>
  </Document>
</kml>
"""

GPX_SAMPLE = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <wpt lat="-9.47" lon="147.15"><name>Camp</name></wpt>
  <trk>
    <name>Survey walk</name>
    <trkseg>
      <trkpt lat="-9.40" lon="147.10"></trkpt>
      <trkpt lat="-9.41" lon="147.11"></trkpt>
      <trkpt lat="-9.42" lon="147.12"></trkpt>
    </trkseg>
  </trk>
  <rte>
    <name>Access road</name>
    <rtept lat="-9.30" lon="147.00"/>
    <rtept lat="-9.31" lon="147.01"/>
  </rte>
</gpx>
"""


@pytest.fixture()
def kml_two_points() -> bytes:
    """KML document with two Point placemarks."""
    return KML_TWO_POINTS


@pytest.fixture()
def kml_single_polygon() -> bytes:
    """KML document with one Polygon placemark (with a hole) and no list wrapper."""
    return KML_SINGLE_POLYGON


@pytest.fixture()
def gpx_sample() -> bytes:
    """GPX document with one waypoint, one single-segment track and one route."""
    return GPX_SAMPLE


# ---------------------------------------------------------------------------
# Shapefile fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def shapefile_zip(tmp_path: Path) -> Callable[..., bytes]:
    """Factory writing a point shapefile with pyshp and zipping its members.

    Args (of the returned factory):
        points: ``[(lon, lat, name), ...]``.
        include_dbf: Whether the ``.dbf`` member goes into the archive.
        shp_name: Archive member name for the ``.shp`` file.
    """
    import shapefile

    def _build(
        points: list[tuple[float, float, str]],
        *,
        include_dbf: bool = True,
        shp_name: str = "sites.shp",
    ) -> bytes:
        base = tmp_path / "sites"
        with shapefile.Writer(str(base), shapeType=shapefile.POINT) as writer:
            writer.field("NAME", "C", size=40)
            writer.field("CAPACITY", "N", size=10, decimal=0)
            for idx, (lon, lat, name) in enumerate(points):
                writer.point(lon, lat)
                writer.record(name, idx * 10)

        members = {
            shp_name: base.with_suffix(".shp").read_bytes(),
            shp_name[:-4] + ".shx": base.with_suffix(".shx").read_bytes(),
        }
        if include_dbf:
            members[shp_name[:-4] + ".dbf"] = base.with_suffix(".dbf").read_bytes()
        return build_zip(members)

    return _build
