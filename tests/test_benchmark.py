"""Smoke tests for the benchmark CLI."""

from __future__ import annotations

import asyncio

from envelope_cipher.benchmark import Measurement, measure, run_benchmark


def test_measurement_rates():
    result = Measurement(label="x", operations=10, seconds=0.5)
    assert result.ops_per_sec == 20
    assert result.ms_per_op == 50
    assert "x:" in str(result)


def test_measure_counts_calls():
    calls = []
    result = measure("count", 5, lambda: calls.append(1))
    assert len(calls) == 5
    assert result.operations == 5


def test_run_benchmark_with_generated_key(capsys):
    results = asyncio.run(run_benchmark(iterations=10, workers=3))
    assert [r.label for r in results] == [
        "encrypt_string",
        "decrypt_string",
        "encrypt_value",
        "decrypt_value",
        "concurrent round trip",
    ]
    assert "generated throwaway key" in capsys.readouterr().out


def test_run_benchmark_with_app_key(env_key, capsys):
    asyncio.run(run_benchmark(iterations=4, workers=2))
    out = capsys.readouterr().out
    assert "BENCHMARK COMPLETE" in out
    assert "throwaway" not in out
