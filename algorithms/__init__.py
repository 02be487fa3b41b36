"""
algorithms/
-----------
Frame model, visualization commands, parameter schema and the runners.

    from algorithms import Frame, FrameBuilder
    from algorithms.registry import REGISTRY, get_algorithm
"""

from algorithms.frame import Frame, FrameBuilder, frame_to_dict
from algorithms.commands import VisualCommand, merge_styles
from algorithms.params import ParamSpec, ParameterError, parse_params

__all__ = [
    "Frame",
    "FrameBuilder",
    "frame_to_dict",
    "VisualCommand",
    "merge_styles",
    "ParamSpec",
    "ParameterError",
    "parse_params",
]
