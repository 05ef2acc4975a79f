# -*- coding: utf-8 -*-
"""
Move selection: heuristic evaluation, expectimax search and agents.
"""
from .agents import Agent, ExpectimaxAgent, GreedyAgent, PriorityAgent
from .expectimax import DEFAULT_DEPTH, ExpectimaxSearch
from .heuristic import CORNER_WEIGHTS, EXPECTIMAX_WEIGHTS, PRESETS, SIMPLE_WEIGHTS, Evaluator, EvaluatorWeights

__all__ = [
    "Agent",
    "ExpectimaxAgent",
    "GreedyAgent",
    "PriorityAgent",
    "DEFAULT_DEPTH",
    "ExpectimaxSearch",
    "CORNER_WEIGHTS",
    "EXPECTIMAX_WEIGHTS",
    "PRESETS",
    "SIMPLE_WEIGHTS",
    "Evaluator",
    "EvaluatorWeights",
]
