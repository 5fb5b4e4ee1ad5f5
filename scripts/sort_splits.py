#!/usr/bin/env python3
"""Prioritize a JSON split listing by data locality and print the resulting order.

Usage:
  pip install -e . && python scripts/sort_splits.py splits.json [--config config.json] [--backend static]

splits.json is either a list of splits or {"splits": [...]}; each split is
{"length": int} or {"paths": ["alluxio://master:19998/a", ...], "length": int}.
The config file provides split_sort_config (fast_tier_scheme, oracle_backend, ...).
"""
import sys
import json
import logging
import argparse

from locality_split_sorter.config_loader import (
    DEFAULT_SPLIT_SORT_CONFIG,
    load_config_from_json,
    merge_config_with_defaults,
)
from locality_split_sorter.exceptions import SplitSortError
from locality_split_sorter.splits import split_from_dict, split_to_dict
from locality_split_sorter.sorter import SplitPrioritizer


def load_splits(path: str):
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get('splits', [])
    return [split_from_dict(item) for item in raw]


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument('splits', help='JSON split listing')
    ap.add_argument('--config', default='config.json')
    ap.add_argument('--backend', default=None, help='Override split_sort_config.oracle_backend')
    ap.add_argument('--placement', choices=['after', 'before'], default=None,
                    help='Override split_sort_config.fast_tier_placement')
    ap.add_argument('--stats', action='store_true', help='Print cache / oracle statistics to stderr')
    ap.add_argument('-v', '--verbose', action='store_true')
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        conf = load_config_from_json(args.config)
        splits = load_splits(args.splits)
    except FileNotFoundError as e:
        print(f'[sort_splits] failed: {type(e).__name__}: {e}', file=sys.stderr)
        return 1
    section = getattr(conf, 'split_sort_config', None)
    sort_conf = merge_config_with_defaults(section, DEFAULT_SPLIT_SORT_CONFIG) if section is not None \
        else merge_config_with_defaults(conf, DEFAULT_SPLIT_SORT_CONFIG)
    if args.backend:
        sort_conf.oracle_backend = args.backend
    if args.placement:
        sort_conf.fast_tier_placement = args.placement

    try:
        with SplitPrioritizer.from_config(sort_conf) as prioritizer:
            prioritizer.sort(splits)
            stats = prioritizer.get_stats()
    except SplitSortError as e:
        print(f'[sort_splits] failed: {type(e).__name__}: {e}', file=sys.stderr)
        return 1

    json.dump([split_to_dict(s) for s in splits], sys.stdout, indent=2)
    sys.stdout.write('\n')
    if args.stats:
        print(f'[sort_splits] stats={stats}', file=sys.stderr)
    return 0


if __name__ == '__main__':
    sys.exit(main())
