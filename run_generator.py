#!/usr/bin/env python3
"""Entry point for generating and analysing hyperbolic graphs.

Three subcommands:
    generate    calibrate, sample and write a graph as <folder>/<name>.hg
    properties  write per-node degree, knn, clustering and coordinates
    routing     measure the greedy routing success ratio

Usage:
    python run_generator.py generate -n 1000 -k 10 -g 2.5 -t 0.5 -s 7
    python run_generator.py generate --config config.json --cache-dir .cache/graphs
    python run_generator.py properties -i graph.hg -o stats/
    python run_generator.py routing -i graph.hg -a 10000 -s 1
"""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from hggen.config import (
    GeneratorConfig,
    config_from_json,
    full_config_hash,
    normalize_parameters,
    validate_parameters,
)
from hggen.graph.models import INF_GAMMA, INF_TEMPERATURE, uses_eta

log = logging.getLogger(__name__)

GRAPH_EXT = ".hg"


def _format_infinite(value: float, threshold: float) -> str:
    return "INF" if value >= threshold else f"{value:g}"


def build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Base config from --config (or defaults), overridden by explicit flags."""
    if args.config:
        config = config_from_json(Path(args.config).read_text())
    else:
        config = GeneratorConfig()

    overrides = {
        "n": args.n,
        "k_bar": args.k,
        "gamma": args.g,
        "temperature": args.t,
        "zeta_eta": args.z,
        "seed": args.s,
    }
    graph = replace(
        config.graph, **{k: v for k, v in overrides.items() if v is not None}
    )
    return replace(config, graph=graph)


def run_generate(args: argparse.Namespace) -> int:
    from hggen.graph import GraphGenerationError, generate_graph, save_hg
    from hggen.graph.cache import generate_or_load_graph

    if args.config and not Path(args.config).exists():
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        return 1

    config = build_config(args)
    errors = validate_parameters(config.graph)
    if errors:
        for error in errors:
            print(f"Error: {error}", file=sys.stderr)
        return 1
    config = replace(
        config,
        graph=normalize_parameters(config.graph, zeta_provided=args.z is not None),
    )
    params = config.graph

    out_path = Path(args.o) / f"{args.f}{GRAPH_EXT}"
    if not args.q:
        zeta_label = "Ratio zeta/T [eta]" if uses_eta(params.gamma, params.temperature) \
            else "Square root of curvature [z]"
        print("Parameters:")
        print(f"  Number of nodes [n]:              {params.n}")
        print(f"  Expected average degree [k]:     {params.k_bar:g}")
        print(f"  Expected power-law exponent [g]: "
              f"{_format_infinite(params.gamma, INF_GAMMA)}")
        print(f"  {zeta_label + ':':<33}{params.zeta_eta:g}")
        print(f"  Temperature [t]:                 "
              f"{_format_infinite(params.temperature, INF_TEMPERATURE)}")
        print(f"  Seed [s]:                        {params.seed}")
        print(f"  Output file:                     {out_path}")
        print(f"  Config hash:                     {full_config_hash(config)}")

    t0 = time.monotonic()
    try:
        if args.cache_dir:
            graph = generate_or_load_graph(config, Path(args.cache_dir))
        else:
            graph = generate_graph(params, config.calibration)
    except GraphGenerationError as exc:
        log.error("No graph generated: %s", exc)
        print(f"No graph generated: {exc}", file=sys.stderr)
        return 1
    log.info("Generation took %.1fs", time.monotonic() - t0)

    if graph.num_edges == 0:
        log.warning("All nodes have zero degree (no edges in the graph)")
        print("All nodes have zero degree (no edges in the graph)", file=sys.stderr)
        return 0

    save_hg(graph, out_path, starting_id=config.starting_id)
    if not args.q:
        print(f"Generated: {graph.num_edges} links")
        print(f"Written:   {out_path}")

    if args.plot:
        from hggen.visualization import plot_embedding, save_figure

        save_figure(plot_embedding(graph), Path(args.o), f"{args.f}_embedding")
    return 0


def run_properties(args: argparse.Namespace) -> int:
    from hggen.analysis import compute_properties, write_property_files
    from hggen.graph import GraphFormatError, load_hg

    try:
        graph = load_hg(args.i)
    except (FileNotFoundError, GraphFormatError) as exc:
        print(f"Empty topology - {args.i}: {exc}", file=sys.stderr)
        return 1

    props = compute_properties(graph)
    paths = write_property_files(props, args.o)

    if args.plot:
        from hggen.visualization import plot_degree_ccdf, save_figure

        save_figure(plot_degree_ccdf(props), Path(args.o), "degree_ccdf")

    if not args.q:
        print(f"Files written in {args.o}:")
        for path in paths:
            print(f"  {path.name}")
        print("Average values (std deviation):")
        for label, name in (("degree", "degree"), ("knn", "knn"), ("clustering", "cc")):
            print(f"  {label + ':':<12}{props.mean(name):.3f} ({props.std(name):.3f})")
    return 0


def run_routing(args: argparse.Namespace) -> int:
    from hggen.analysis import greedy_routing_success_ratio
    from hggen.graph import GraphFormatError, load_hg

    try:
        graph = load_hg(args.i)
    except (FileNotFoundError, GraphFormatError) as exc:
        print(f"Empty topology - {args.i}: {exc}", file=sys.stderr)
        return 1

    seed = args.s
    if seed < 1:
        log.warning("Seed has to be greater than 0, assuming seed = 1")
        seed = 1

    result = greedy_routing_success_ratio(graph, attempts=args.a, seed=seed)
    if result.effective_attempts == 0:
        print("0 effective attempts", file=sys.stderr)
        return 0
    print(f"Success rate: {result.success_ratio:g}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate random hyperbolic graphs (Krioukov et al., "
        "Phys. Rev. E 82, 036106) and analyse them"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate a hyperbolic graph")
    gen.add_argument("-n", type=int, help="graph size (default 1000)")
    gen.add_argument("-k", type=float, help="expected average degree (default 10)")
    gen.add_argument(
        "-g", type=float,
        help=f"expected power-law exponent gamma (default 2, infinite >= {INF_GAMMA})",
    )
    gen.add_argument(
        "-t", type=float,
        help=f"temperature (default 0, infinite >= {INF_TEMPERATURE})",
    )
    gen.add_argument(
        "-z", type=float,
        help="square root of curvature zeta, or eta = zeta/T in the soft "
        "configuration model (default 1)",
    )
    gen.add_argument("-s", type=int, help="random seed (default 1)")
    gen.add_argument("-o", default=".", help="output folder (default .)")
    gen.add_argument(
        "-f", default="graph",
        help=f"graph file name, {GRAPH_EXT} is always added (default graph)",
    )
    gen.add_argument("-q", action="store_true", help="quiet (no output)")
    gen.add_argument("--config", help="Path to generator config JSON file")
    gen.add_argument("--cache-dir", help="Reuse graphs cached in this directory")
    gen.add_argument("--plot", action="store_true", help="Also draw the embedding")
    gen.set_defaults(func=run_generate)

    props = sub.add_parser("properties", help="Compute per-node graph properties")
    props.add_argument("-i", default="./graph.hg", help="input .hg file")
    props.add_argument("-o", default=".", help="output folder")
    props.add_argument("-q", action="store_true", help="quiet (no output)")
    props.add_argument("--plot", action="store_true", help="Also plot the degree ccdf")
    props.set_defaults(func=run_properties)

    routing = sub.add_parser("routing", help="Greedy routing success ratio")
    routing.add_argument("-i", default="./graph.hg", help="input .hg file")
    routing.add_argument("-a", type=int, default=10000, help="number of attempts")
    routing.add_argument("-s", type=int, default=1, help="random seed")
    routing.set_defaults(func=run_routing)

    return parser


def main() -> None:
    args = build_parser().parse_args()

    if args.verbose:
        log_level = logging.DEBUG
    elif getattr(args, "q", False):
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
