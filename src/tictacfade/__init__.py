"""
Tic-Tac-Fade.

Tic-tac-toe on a 3x3 board or 3x3x3 volume where the oldest piece fades
away, played solo against a heuristic opponent or over the network.
"""

__version__ = "0.1.0"
