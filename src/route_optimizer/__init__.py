"""Christofides + 2-opt route optimizer for geographic coordinates."""
from .tsp import MAX_VERTICES, MIN_VERTICES, TSPConfigError, TSPSolver, Tour, solve_tsp, tour_cost

__version__ = '1.0.0'

__all__ = ['MAX_VERTICES', 'MIN_VERTICES', 'TSPConfigError', 'TSPSolver', 'Tour', 'solve_tsp', 'tour_cost']
