"""
Graphlab - graph editing model and algorithm engine.

Builds graphs node by node (or at random) and runs classic
algorithms on them: DFS, BFS, Kruskal and Prim MSTs, cycle
detection and connectivity analysis.
"""

__version__ = "0.1.0"
