"""Command-line interface for computing URL normalization strings."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

if __package__ is None or __package__ == "":  # pragma: no cover - script execution path
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    from urlnorm.clustering import UrlCluster, cluster_urls
    from urlnorm.config import ConfigError, NormalizerOptions, build_configuration, load_options
    from urlnorm.core import ParsedUrl, UrlNormalizer
else:  # pragma: no cover - package execution path
    from .clustering import UrlCluster, cluster_urls
    from .config import ConfigError, NormalizerOptions, build_configuration, load_options
    from .core import ParsedUrl, UrlNormalizer

logger = logging.getLogger(__name__)

EXIT_INPUT_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute comparable normalization strings for URLs")
    parser.add_argument("urls", nargs="*", help="URLs to normalize; read from --input or stdin if omitted")
    parser.add_argument("--input", type=Path, help="File with one URL per line")
    parser.add_argument("--config", type=Path, help="JSON file with normalizer options")
    parser.add_argument(
        "--host-prefix",
        action="append",
        default=[],
        help="Additional host prefix to strip (repeatable)",
    )
    parser.add_argument(
        "--host-prefix-pattern",
        action="append",
        default=[],
        help="Additional regex for host prefixes to strip (repeatable)",
    )
    parser.add_argument(
        "--drop-param",
        action="append",
        default=[],
        help="Additional regex for query parameter names to drop (repeatable)",
    )
    parser.add_argument(
        "--fragment-pattern",
        action="append",
        default=[],
        help="Additional regex marking a fragment as a route (repeatable)",
    )
    parser.add_argument("--strip-repeated", action="store_true", help="Strip stacked host prefixes such as m.www.")
    parser.add_argument("--cluster", action="store_true", help="Group URLs sharing a normalization string")
    parser.add_argument("--json-output", type=Path, help="Optional path for a JSON payload of the results")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    return parser


def main(argv: list[str] | None = None, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    stdout = stdout or sys.stdout

    try:
        options = load_options(args.config) if args.config else NormalizerOptions.default()
        options.host_prefixes.update(args.host_prefix)
        options.host_prefix_patterns.extend(args.host_prefix_pattern)
        options.query_drop_patterns.extend(args.drop_param)
        options.fragment_significant_patterns.extend(args.fragment_pattern)
        if args.strip_repeated:
            options.strip_repeated_host_prefixes = True
        configuration = build_configuration(options)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG_ERROR

    normalizer = UrlNormalizer(configuration)
    if args.urls:
        raw_urls: Iterable[str] = args.urls
    elif args.input:
        try:
            text = args.input.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Unable to read input file %s: %s", args.input, exc)
            return EXIT_INPUT_ERROR
        raw_urls = _read_lines(text.splitlines())
    else:
        raw_urls = _read_lines(stdin or sys.stdin)
    urls = list(_parseable(raw_urls))

    if args.cluster:
        clusters = cluster_urls(urls, normalizer)
        _print_clusters(clusters, stdout)
        payload: dict = {"clusters": [{"key": c.key, "urls": c.urls} for c in clusters]}
    else:
        entries = [{"url": url, "key": normalizer.normalize_text(url)} for url in urls]
        for entry in entries:
            print(f"{entry['key']}\t{entry['url']}", file=stdout)
        payload = {"urls": entries}

    if args.json_output:
        _ensure_parent(args.json_output)
        args.json_output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("JSON output written to %s", args.json_output)

    return 0


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _read_lines(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            yield line


def _parseable(urls: Iterable[str]) -> Iterable[str]:
    for url in urls:
        try:
            ParsedUrl.from_url(url)
        except ValueError as exc:
            logger.warning("Skipping unparsable URL %s: %s", url, exc)
            continue
        yield url


def _print_clusters(clusters: list[UrlCluster], stdout: TextIO) -> None:
    for cluster in clusters:
        print(f"{cluster.key} ({cluster.size})", file=stdout)
        for url in cluster.urls:
            print(f"  {url}", file=stdout)


def _ensure_parent(path: Path) -> None:
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
