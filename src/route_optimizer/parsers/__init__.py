from .coordinates import CoordinateFileError, Point, parse_coordinate_line, read_coordinates, remove_duplicates

__all__ = ['CoordinateFileError', 'Point', 'parse_coordinate_line', 'read_coordinates', 'remove_duplicates']
