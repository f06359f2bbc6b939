#!/usr/bin/env python3
import argparse
import json
import logging
import sys

from controller.reference_controller import VARIANTS
from utils.metrics import METRIC_KEYS, compute_metrics_per_channel
from utils.service_requests import start_service_name
from utils.signal_preview import preview_config, preview_single_config
from view.tree_nodes import tree_to_dict

log = logging.getLogger("reference_panel")


def _load_json(path):
    if path is None:
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _print_preview(variant_name, config, seconds):
    if variant_name == "single":
        t, data = preview_single_config(config, duration=seconds)
    else:
        t, data = preview_config(config, duration=seconds)
    rate = config.publish_rate
    print(f"{t.size} samples over {seconds} s at {rate:g} Hz")
    for idx, metrics in enumerate(compute_metrics_per_channel(data, rate)):
        values = "  ".join(f"{k}={metrics[k]:.6g}" for k in METRIC_KEYS)
        print(f"signal {idx + 1}: {values}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Reference signal panel settings")
    parser.add_argument("--variant", choices=sorted(VARIANTS), default="multi")
    parser.add_argument("--config", help="JSON file with the saved panel state")
    parser.add_argument("--topics", help="JSON file with a list of {name, schemaName} topics")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tree", action="store_true", help="print the settings tree (default)")
    mode.add_argument("--start-request", action="store_true", help="print the start service request")
    mode.add_argument("--preview", type=float, metavar="SECONDS", help="summarize the sampled signals")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(name)s %(levelname)s: %(message)s")

    variant = VARIANTS[args.variant]
    try:
        config = variant.hydrate(_load_json(args.config))
        topics = _load_json(args.topics)
    except (OSError, ValueError, TypeError) as ex:
        log.error("Could not load settings: %s", ex)
        return 1

    if args.start_request:
        print(start_service_name(config.topic_name))
        print(json.dumps(variant.start_request(config), indent=2))
    elif args.preview is not None:
        try:
            _print_preview(variant.name, config, args.preview)
        except ValueError as ex:
            log.error("%s", ex)
            return 1
    else:
        print(json.dumps(tree_to_dict(variant.build_tree(config, topics)), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
