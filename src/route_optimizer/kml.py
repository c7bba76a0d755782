"""Write a tour as a KML file viewable in Google Earth."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence, Tuple, Union

KML_NS = 'http://www.opengis.net/kml/2.2'


def kml_path_for(input_path: Union[str, Path]) -> Path:
    """``route.csv`` -> ``route.kml`` in the same directory."""
    return Path(input_path).with_suffix('.kml')


def _lonlat(point: Tuple[float, float]) -> str:
    lat, lon = point
    return f"{lon:.6f},{lat:.6f}"


def build_kml(points: Sequence[Tuple[float, float]], tour_path: Sequence[int], name: str = 'TOUR') -> ET.ElementTree:
    if len(tour_path) == 0:
        raise ValueError("Cannot export an empty tour")
    root = ET.Element('kml', xmlns=KML_NS)
    folder = ET.SubElement(root, 'Folder')

    route = ET.SubElement(folder, 'Placemark', id=name)
    ET.SubElement(route, 'name').text = name
    line_style = ET.SubElement(ET.SubElement(route, 'Style'), 'LineStyle')
    ET.SubElement(line_style, 'width').text = '3.0'
    line = ET.SubElement(route, 'LineString')
    closed = list(tour_path) + [tour_path[0]]
    ET.SubElement(line, 'coordinates').text = '\n'.join(_lonlat(points[v]) for v in closed)

    for i, point in enumerate(points, start=1):
        mark = ET.SubElement(folder, 'Placemark')
        ET.SubElement(mark, 'name').text = str(i)
        ET.SubElement(ET.SubElement(mark, 'Point'), 'coordinates').text = _lonlat(point)

    tree = ET.ElementTree(root)
    ET.indent(tree)
    return tree


def write_kml(path: Union[str, Path], points: Sequence[Tuple[float, float]], tour_path: Sequence[int],
              name: str = 'TOUR') -> Path:
    """Write the route and its points to ``path``; returns the path written."""
    out = Path(path)
    build_kml(points, tour_path, name).write(out, encoding='UTF-8', xml_declaration=True)
    return out
