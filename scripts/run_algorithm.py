#!/usr/bin/env python3
"""
Graphlab CLI - Run a graph algorithm on a saved or random graph.

Usage:
    python scripts/run_algorithm.py bfs --graph graphs/demo.json --start A --target D
    python scripts/run_algorithm.py kruskal --random 8 --probability 0.4 --weighted --seed 7
    python scripts/run_algorithm.py compare --random 6 --weighted --save graphs/random.msgpack
    python scripts/run_algorithm.py stats --graph graphs/demo.msgpack --output stats.json

Algorithms:
    dfs          - Depth-first traversal (--start, optional --target)
    bfs          - Breadth-first traversal (--start, optional --target)
    kruskal      - Minimum spanning tree with Kruskal (weighted graphs)
    prim         - Minimum spanning tree with Prim (weighted graphs, optional --start)
    compare      - Run Kruskal and Prim and compare the trees
    cycles       - List cycles
    connectivity - Connected components
    stats        - Graph statistics
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from graphlab.algorithms import GraphAlgorithms  # noqa: E402
from graphlab.config import (  # noqa: E402
    DEFAULT_EDGE_PROBABILITY,
    LOG_LEVEL,
    RANDOM_SEED,
)
from graphlab.graph import Graph, GraphError, load_graph, save_graph  # noqa: E402

ALGORITHMS = ["dfs", "bfs", "kruskal", "prim", "compare", "cycles", "connectivity", "stats"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run a graph algorithm",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "algorithm",
        choices=ALGORITHMS,
        help="Algorithm to run",
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--graph",
        type=Path,
        help="Graph snapshot file (.json or .msgpack)",
    )
    source.add_argument(
        "--random",
        type=int,
        metavar="N",
        help="Generate a random graph with N nodes",
    )

    parser.add_argument(
        "--probability",
        type=float,
        default=DEFAULT_EDGE_PROBABILITY,
        help=f"Edge probability for --random (default: {DEFAULT_EDGE_PROBABILITY})",
    )
    parser.add_argument(
        "--weighted",
        action="store_true",
        help="Random graph is weighted",
    )
    parser.add_argument(
        "--directed",
        action="store_true",
        help="Random graph is directed",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=RANDOM_SEED,
        help="Random seed for --random (default: GRAPHLAB_RANDOM_SEED or none)",
    )
    parser.add_argument(
        "--start",
        type=str,
        default=None,
        help="Start node for dfs/bfs/prim",
    )
    parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Target node for dfs/bfs",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the result as JSON to this file",
    )
    parser.add_argument(
        "--save",
        type=Path,
        default=None,
        help="Save the graph snapshot to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def build_graph(args: argparse.Namespace) -> Graph:
    """Load the graph from --graph or generate it from --random."""
    if args.graph is not None:
        return load_graph(args.graph)

    graph = Graph()
    graph.generate_random(
        args.random,
        args.probability,
        weighted=args.weighted,
        directed=args.directed,
        seed=args.seed,
    )
    return graph


def run(algorithms: GraphAlgorithms, args: argparse.Namespace) -> dict[str, Any]:
    """Run the requested algorithm and return its result as a dict."""
    name = args.algorithm

    if name in ("dfs", "bfs"):
        if args.start is None:
            raise ValueError(f"{name} requires --start")
        traverse = algorithms.dfs if name == "dfs" else algorithms.bfs
        return traverse(args.start, args.target).to_dict()
    if name == "kruskal":
        return algorithms.kruskal().to_dict()
    if name == "prim":
        return algorithms.prim(args.start).to_dict()
    if name == "compare":
        return algorithms.compare_mst().to_dict()
    if name == "cycles":
        return {"cycles": algorithms.detect_cycles()}
    if name == "connectivity":
        return algorithms.connectivity_analysis().to_dict()
    return algorithms.graph.get_statistics().to_dict()


def print_summary(name: str, result: dict[str, Any]) -> None:
    """Print a short human-readable summary of a result."""
    print("\n" + "=" * 60)
    print(f"Result: {name}")
    print("=" * 60)

    if name in ("dfs", "bfs"):
        print(f"  Visit order: {' -> '.join(result['visitOrder'])}")
        if result["targetNode"] is not None:
            if result["found"]:
                print(f"  Path: {' -> '.join(result['path'])} ({result['distance']} edges)")
            else:
                print(f"  Target '{result['targetNode']}' not reachable")
    elif name in ("kruskal", "prim"):
        for edge in result["mstEdges"]:
            print(f"  {edge['source']} - {edge['target']} ({edge['weight']})")
        print(f"  Total weight: {result['totalWeight']}")
        print(f"  Efficiency: {result['statistics']['efficiency']:.1f}%")
    elif name == "compare":
        comparison = result["comparison"]
        print(f"  Kruskal weight: {comparison['kruskalWeight']}")
        print(f"  Prim weight:    {comparison['primWeight']}")
        print(f"  Same weight: {comparison['sameWeight']}")
        print(f"  Identical trees: {comparison['identical']}")
    elif name == "cycles":
        print(f"  {len(result['cycles'])} cycle(s)")
        for cycle in result["cycles"]:
            print(f"  {' -> '.join(cycle)}")
    elif name == "connectivity":
        print(f"  Components: {result['componentCount']}")
        for i, component in enumerate(result["components"], start=1):
            print(f"  {i}. {', '.join(component)}")
    else:
        for key, value in result.items():
            print(f"  {key}: {value}")

    print("=" * 60)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        graph = build_graph(args)
        result = run(GraphAlgorithms(graph), args)
    except (GraphError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except FileNotFoundError as e:
        print(f"Error: graph file not found: {e.filename}", file=sys.stderr)
        return 1

    print_summary(args.algorithm, result)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
        print(f"\nResult written to {args.output}")

    if args.save is not None:
        try:
            save_graph(graph, args.save)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Graph saved to {args.save}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
