"""
Command line driver for pathgraph.

Usage:
    pathgraph generate <output_file> [--size N]
    pathgraph run <input_file> <output_file> [--start S] [--dest D ...]
"""
import argparse
import logging
import sys

from pathgraph import config
from pathgraph.algo_funcs import dijkstra
from pathgraph.errors import GraphError
from pathgraph.helpers import load_graph, report_lines, write_generated_edge_list

logger = logging.getLogger("pathgraph")


def generate(output_file, size):
    """Write the synthetic edge list (vertices "0".."size") to output_file."""
    count = write_generated_edge_list(output_file, size)
    logger.info(f"File is ready: {output_file} ({count} edges)")
    return 0


def run(input_file, output_file, start, destinations=None):
    """
    Read an edge list, run Dijkstra once from start and write one report
    line per destination.

    Args:
        input_file (str): edge list, one "source destination cost" per line
        output_file (str): report destination, overwritten if present
        start (str): start vertex name
        destinations (list): vertex names to report; every other vertex when empty

    Returns:
        int: process exit status
    """
    try:
        graph = load_graph(input_file)
    except OSError as e:
        logger.error(f"Cannot read {input_file}: {e}")
        return 1
    logger.info(f"File read... {len(graph)} vertices")

    logger.info("Using Dijkstra's Algorithm...")
    try:
        paths = dijkstra(graph, start)
        if not destinations:
            destinations = [name for name in graph if name != start]
        lines = report_lines(paths, destinations)
    except GraphError as e:
        # output_file is left untouched
        logger.error(str(e))
        return 1

    with open(output_file, "w", encoding="utf-8") as wrt:
        for line in lines:
            wrt.write(line + "\n")

    logger.info(f"Done! Wrote {len(lines)} paths to {output_file}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="pathgraph", description="Single-source shortest paths over an edge list.")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="write the synthetic 1000-vertex edge list")
    gen.add_argument("output_file")
    gen.add_argument("--size", type=int, default=config.GENERATOR_SIZE)

    run_p = sub.add_parser("run", help="run Dijkstra and write the path report")
    run_p.add_argument("input_file")
    run_p.add_argument("output_file")
    run_p.add_argument("--start", default=config.DEFAULT_START)
    run_p.add_argument("--dest", action="append", default=[], help="destination vertex (repeatable)")
    return parser


def main(argv=None):
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    args = build_parser().parse_args(argv)

    if args.command == "generate":
        return generate(args.output_file, args.size)
    return run(args.input_file, args.output_file, args.start, args.dest)


if __name__ == "__main__":
    sys.exit(main())
