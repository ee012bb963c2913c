#!/usr/bin/env python3
"""Track match_plus benchmark results in DuckDB.

Usage:
    uv run pytest tests/bench --benchmark-enable --benchmark-only \
        --benchmark-json bench/raw/cpython-3.12.json
    uv run scripts/bench_ingest.py ingest [--notes "baseline"]
    uv run scripts/bench_ingest.py compare [--base 3 --head 4]

Each JSON file in the raw directory is one pytest-benchmark run; the file
stem names the variant (interpreter, machine profile, ...). ``compare``
prints the per-scenario change in mean time between two ingests.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
import duckdb

DB_DEFAULT = "bench/match_plus_bench.duckdb"
RAW_DIR = Path("bench/raw")

# Benchmark names follow test_bench_{scenario}_{phase}.
KNOWN_PHASES = frozenset({"compile", "evaluate"})
NS_PER_SECOND = 1_000_000_000

SCHEMA = """
CREATE SEQUENCE IF NOT EXISTS run_ids START 1;

CREATE TABLE IF NOT EXISTS runs (
    id          INTEGER PRIMARY KEY DEFAULT nextval('run_ids'),
    ingested_at TIMESTAMP NOT NULL DEFAULT current_timestamp,
    notes       VARCHAR
);

CREATE TABLE IF NOT EXISTS results (
    run_id      INTEGER NOT NULL REFERENCES runs(id),
    variant     VARCHAR NOT NULL,
    scenario    VARCHAR NOT NULL,
    phase       VARCHAR NOT NULL,
    mean_ns     DOUBLE NOT NULL,
    rounds      BIGINT,
    PRIMARY KEY (run_id, variant, scenario, phase)
);
"""

DELTA_QUERY = """
SELECT h.variant, h.scenario, h.phase, b.mean_ns, h.mean_ns,
       (h.mean_ns - b.mean_ns) / b.mean_ns * 100 AS pct
FROM results h
JOIN results b USING (variant, scenario, phase)
WHERE h.run_id = ? AND b.run_id = ? AND b.mean_ns > 0
ORDER BY pct DESC
"""


def split_name(name: str) -> tuple[str, str]:
    """Split ``test_bench_{scenario}_{phase}`` into (scenario, phase)."""
    clean = name.removeprefix("test_bench_")
    scenario, _, phase = clean.rpartition("_")
    if scenario and phase in KNOWN_PHASES:
        return scenario, phase
    return clean, "evaluate"


def parse_pytest_benchmark_json(data: dict[str, Any], variant: str) -> list[tuple[Any, ...]]:
    """Rows of (variant, scenario, phase, mean_ns, rounds) from pytest-benchmark JSON."""
    rows = []
    for bench in data.get("benchmarks", []):
        scenario, phase = split_name(bench.get("name", ""))
        stats = bench.get("stats", {})
        rows.append(
            (variant, scenario, phase, stats.get("mean", 0) * NS_PER_SECOND, stats.get("rounds"))
        )
    return rows


def connect(db: str) -> duckdb.DuckDBPyConnection:
    con = duckdb.connect(db)
    con.execute(SCHEMA)
    return con


def latest_run_ids(con: duckdb.DuckDBPyConnection, n: int) -> list[int]:
    """The ``n`` most recent run ids, oldest first."""
    rows = con.execute("SELECT id FROM runs ORDER BY id DESC LIMIT ?", [n]).fetchall()
    return sorted(r[0] for r in rows)


@click.group()
@click.option("--db", default=DB_DEFAULT, help="DuckDB database path")
@click.pass_context
def cli(ctx: click.Context, db: str) -> None:
    """Track match_plus benchmark results."""
    ctx.obj = db


@cli.command()
@click.option("--notes", default=None, help="Notes for this benchmark run")
@click.option("--raw-dir", default=str(RAW_DIR), help="Directory with pytest-benchmark JSON files")
@click.pass_obj
def ingest(db: str, notes: str | None, raw_dir: str) -> None:
    """Store every JSON file in the raw directory as one new run."""
    json_files = sorted(Path(raw_dir).glob("*.json"))
    if not json_files:
        click.echo(f"No JSON files found in {raw_dir}", err=True)
        sys.exit(1)

    con = connect(db)
    try:
        (run_id,) = con.execute("INSERT INTO runs (notes) VALUES (?) RETURNING id", [notes]).fetchone()
        total = 0
        for json_file in json_files:
            rows = parse_pytest_benchmark_json(json.loads(json_file.read_text()), json_file.stem)
            con.executemany(
                "INSERT INTO results VALUES (?, ?, ?, ?, ?, ?)",
                [(run_id, *row) for row in rows],
            )
            total += len(rows)
            click.echo(f"  {json_file.name}: {len(rows)} results")
    finally:
        con.close()
    click.echo(f"Run #{run_id}: {total} results ingested into {db}")


@cli.command()
@click.option("--base", type=int, default=None, help="Baseline run id (default: second latest)")
@click.option("--head", type=int, default=None, help="Run id to compare (default: latest)")
@click.pass_obj
def compare(db: str, base: int | None, head: int | None) -> None:
    """Print the per-scenario change in mean time between two runs."""
    con = connect(db)
    try:
        if base is None or head is None:
            recent = latest_run_ids(con, 2)
            if len(recent) < 2:
                click.echo("Need at least two runs to compare", err=True)
                sys.exit(1)
            base = recent[0] if base is None else base
            head = recent[1] if head is None else head
        rows = con.execute(DELTA_QUERY, [head, base]).fetchall()
    finally:
        con.close()

    click.echo(f"Run #{base} → #{head}")
    for variant, scenario, phase, base_ns, head_ns, pct in rows:
        click.echo(f"  {variant:<16} {scenario}/{phase:<10} {base_ns:>12.0f} → {head_ns:>12.0f} ns  {pct:+6.1f}%")


if __name__ == "__main__":
    cli()
