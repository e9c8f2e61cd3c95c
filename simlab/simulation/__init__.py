"""Simulation engines driven by random-digit tables."""
from .single_server import run_single_server
from .multi_server import run_multi_server
from .inventory import run_inventory, reorder_point
from .queueing_model import mm1_measures

__all__ = ['run_single_server', 'run_multi_server', 'run_inventory', 'reorder_point', 'mm1_measures']
