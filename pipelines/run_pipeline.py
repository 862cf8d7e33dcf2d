from __future__ import annotations

import argparse
import gzip
import json
import logging
from typing import Any, Callable, Dict, Iterable, Sequence

import dlt

from lakebtc_dlt_source import lakebtc_source
from lakebtc_dlt_source.spot.resources import ALL_RESOURCE_NAMES


LOGGER = logging.getLogger(__name__)

ROW_MATCHERS: Dict[str, Callable[[str], bool]] = {
    "insert_values": lambda line: line.lstrip().startswith("("),
    "jsonl": lambda line: bool(line.strip()),
}


def available_resources() -> Iterable[str]:
    return ALL_RESOURCE_NAMES


def run_pipeline(
    resources: Sequence[str] | None,
    start_timestamp: str | None,
    currency: str,
    dev_mode: bool,
    raise_on_failed: bool,
) -> tuple[dlt.LoadInfo, Dict[str, Any]]:
    pipeline = dlt.pipeline(
        pipeline_name="lakebtc",
        destination="duckdb",
        dataset_name="lakebtc_data",
        dev_mode=dev_mode,
    )

    source = lakebtc_source(start_timestamp=start_timestamp, resources_to_load=resources, currency=currency)
    selected = list(source.selected_resources)
    LOGGER.info("Running %s with resources: %s", pipeline.pipeline_name, ", ".join(selected) or "none")

    load_info = pipeline.run(source)
    summary = _summarize_load(load_info, selected)
    LOGGER.info(
        "Loaded into dataset %s in %.2fs (%s failed jobs)",
        load_info.dataset_name,
        summary["duration_seconds"],
        summary["failed_jobs"],
    )
    for resource, rows in summary["rows"].items():
        LOGGER.info("%s: %s rows", resource, rows)

    if raise_on_failed:
        load_info.raise_on_failed_jobs()

    return load_info, summary


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the LakeBTC DLT pipeline")
    parser.add_argument(
        "--resources",
        nargs="+",
        choices=ALL_RESOURCE_NAMES,
        help="Subset of resources to load. Defaults to public resources, plus private ones when credentials are set.",
    )
    parser.add_argument(
        "--since",
        dest="start_timestamp",
        help="Optional ISO 8601 timestamp or Unix seconds to seed the first trades load.",
    )
    parser.add_argument(
        "--currency",
        default="USD",
        help="Order book currency (USD or CNY).",
    )
    parser.add_argument(
        "--dev-mode",
        action="store_true",
        help="Enable DLT development mode (clears state between runs).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise an exception if DLT reports failed jobs.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available resource names and exit.",
    )
    parser.add_argument(
        "--json",
        dest="output_json",
        action="store_true",
        help="Emit the load information as JSON for scripting.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    if args.list:
        for name in available_resources():
            print(name)
        return

    load_info, summary = run_pipeline(
        resources=args.resources,
        start_timestamp=args.start_timestamp,
        currency=args.currency,
        dev_mode=args.dev_mode,
        raise_on_failed=args.strict,
    )

    if args.output_json:
        payload = load_info.asdict()
        payload["summary"] = summary
        print(json.dumps(payload, default=str, indent=2))


def _summarize_load(load_info: dlt.LoadInfo, resource_names: Sequence[str]) -> Dict[str, Any]:
    """Summarize a load per selected resource.

    Every selected resource appears in ``rows``, with 0 when it produced no
    data. Child tables (``table__child``) are skipped so nested lists do not
    inflate the count of their parent resource.
    """
    duration = 0.0
    if load_info.started_at and load_info.finished_at:
        duration = (load_info.finished_at - load_info.started_at).total_seconds()

    row_counts: Dict[str, int] = {name: 0 for name in resource_names}
    failed_jobs = 0
    for package in load_info.load_packages:
        jobs = package.jobs or {}
        failed_jobs += len(jobs.get("failed_jobs", []))
        for job in jobs.get("completed_jobs", []):
            table_name = job.job_file_info.table_name if job.job_file_info else None
            if not table_name or table_name.startswith("_dlt_") or "__" in table_name:
                continue
            row_counts[table_name] = row_counts.get(table_name, 0) + count_job_rows(job.file_path)

    return {
        "duration_seconds": duration,
        "resources": list(resource_names),
        "rows": row_counts,
        "failed_jobs": failed_jobs,
    }


def count_job_rows(job_file_path: str) -> int:
    """Count rows in an insert_values or jsonl job file, gzipped or not.

    Files in other formats (parquet, csv) count as 0.
    """
    compressed = job_file_path.endswith(".gz")
    file_format = (job_file_path[:-3] if compressed else job_file_path).rsplit(".", 1)[-1]
    is_row = ROW_MATCHERS.get(file_format)
    if is_row is None:
        return 0

    opener = gzip.open if compressed else open
    try:
        with opener(job_file_path, "rt", encoding="utf-8") as fp:
            return sum(1 for line in fp if is_row(line))
    except OSError:
        LOGGER.warning("Could not read job file %s", job_file_path)
        return 0


if __name__ == "__main__":
    main()
