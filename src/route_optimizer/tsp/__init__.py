from .christofides import (MATCHING_STRATEGIES, christofides_tour, euler_circuit, match_odd_vertices,
                           minimum_spanning_tree, odd_degree_vertices, shortcut)
from .graph import Multigraph
from .solver import MAX_VERTICES, MIN_VERTICES, TSPConfigError, TSPSolver, check_cost_matrix, solve_tsp
from .tour import Tour, tour_cost
from .two_opt import TwoOptResult, two_opt, two_opt_pass

__all__ = [
    'MATCHING_STRATEGIES', 'MAX_VERTICES', 'MIN_VERTICES', 'Multigraph', 'TSPConfigError', 'TSPSolver',
    'Tour', 'TwoOptResult', 'check_cost_matrix', 'christofides_tour', 'euler_circuit', 'match_odd_vertices',
    'minimum_spanning_tree', 'odd_degree_vertices', 'shortcut', 'solve_tsp', 'tour_cost', 'two_opt',
    'two_opt_pass',
]
