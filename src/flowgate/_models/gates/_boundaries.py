"""
Boundary geometries used by RegionGate instances
"""
import numpy as np
from flowutils import gating


class EllipseBoundary(object):
    """
    An elliptical boundary in 2 dimensions, defined by a center point, a covariance
    matrix, and a distance square (the square of the Mahalanobis distance). Points
    with a Mahalanobis distance square at or below the distance square are inside.

    :param center: 2-D center point of the ellipse
    :param covariance_matrix: 2x2 covariance matrix for the ellipse shape
    :param distance_square: square of the Mahalanobis distance, controlling the size of the ellipse
    """
    def __init__(self, center, covariance_matrix, distance_square):
        self.center = [float(c) for c in center]
        self.covariance_matrix = [[float(v) for v in row] for row in covariance_matrix]
        self.distance_square = float(distance_square)

        if len(self.center) != 2:
            raise ValueError("EllipseBoundary center must have 2 coordinates")
        if np.array(self.covariance_matrix).shape != (2, 2):
            raise ValueError("EllipseBoundary covariance matrix must be 2x2")
        if self.distance_square <= 0:
            raise ValueError("EllipseBoundary distance square must be positive")

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'center: {self.center}, distance_square: {self.distance_square})'
        )

    def contains(self, points):
        """
        Test which points are inside the ellipse.

        :param points: 2-D NumPy array of points (one row per point)
        :return: NumPy array of boolean values (True is inside)
        """
        return gating.points_in_ellipsoid(
            self.covariance_matrix,
            self.center,
            self.distance_square,
            np.ascontiguousarray(points, dtype=np.float64)
        )

    def get_vertices(self, point_count=100):
        """
        Sample points along the ellipse boundary.

        :param point_count: number of vertices to return
        :return: 2-D NumPy array of vertices
        """
        values, vectors = np.linalg.eigh(np.array(self.covariance_matrix))
        radii = np.sqrt(values * self.distance_square)

        theta = np.linspace(0, 2 * np.pi, point_count, endpoint=False)
        unit_circle = np.vstack([np.cos(theta), np.sin(theta)])

        return (vectors @ (radii[:, np.newaxis] * unit_circle)).T + np.array(self.center)

    def to_dict(self):
        return {
            'boundary_type': 'ellipse',
            'center': list(self.center),
            'covariance_matrix': [list(row) for row in self.covariance_matrix],
            'distance_square': self.distance_square
        }


class BandBoundary(object):
    """
    A band of constant vertical width around a line, limited to a range of x values.
    This is the shape of a singlet gate: events where the y channel (e.g. FSC-A) is
    proportional to the x channel (e.g. FSC-H) are inside.

    A point (x, y) is inside when x_min <= x <= x_max and
    |y - (slope * x + intercept)| <= half_width.

    :param slope: slope of the center line
    :param intercept: intercept of the center line
    :param half_width: distance from the center line to the band edges (along y)
    :param x_min: lower limit of the band along x
    :param x_max: upper limit of the band along x
    """
    def __init__(self, slope, intercept, half_width, x_min, x_max):
        self.slope = float(slope)
        self.intercept = float(intercept)
        self.half_width = float(half_width)
        self.x_min = float(x_min)
        self.x_max = float(x_max)

        if self.half_width < 0:
            raise ValueError("BandBoundary half width must not be negative")
        if self.x_min > self.x_max:
            raise ValueError("BandBoundary x_min must not exceed x_max")

    def __repr__(self):
        return (
            f'{self.__class__.__name__}('
            f'slope: {self.slope}, intercept: {self.intercept}, half_width: {self.half_width})'
        )

    def contains(self, points):
        """
        Test which points are inside the band.

        :param points: 2-D NumPy array of points (one row per point)
        :return: NumPy array of boolean values (True is inside)
        """
        points = np.asarray(points, dtype=np.float64)
        x = points[:, 0]
        y = points[:, 1]

        residuals = np.abs(y - (self.slope * x + self.intercept))

        return (x >= self.x_min) & (x <= self.x_max) & (residuals <= self.half_width)

    def get_vertices(self, point_count=100):
        """
        Sample points along the band boundary, lower edge first, then upper edge in reverse.

        :param point_count: number of vertices to return (at least 4)
        :return: 2-D NumPy array of vertices
        """
        edge_count = max(point_count // 2, 2)
        x = np.linspace(self.x_min, self.x_max, edge_count)
        y_center = self.slope * x + self.intercept

        lower = np.column_stack([x, y_center - self.half_width])
        upper = np.column_stack([x[::-1], y_center[::-1] + self.half_width])

        return np.vstack([lower, upper])

    def to_dict(self):
        return {
            'boundary_type': 'band',
            'slope': self.slope,
            'intercept': self.intercept,
            'half_width': self.half_width,
            'x_min': self.x_min,
            'x_max': self.x_max
        }


def boundary_from_dict(boundary_dict):
    """
    Create a boundary instance from a dictionary created by a boundary's `to_dict` method.

    :param boundary_dict: dictionary describing the boundary
    :return: EllipseBoundary or BandBoundary instance
    """
    boundary_dict = dict(boundary_dict)
    boundary_type = boundary_dict.pop('boundary_type')

    if boundary_type == 'ellipse':
        return EllipseBoundary(**boundary_dict)
    elif boundary_type == 'band':
        return BandBoundary(**boundary_dict)
    else:
        raise ValueError("Unsupported boundary type: %s" % boundary_type)
