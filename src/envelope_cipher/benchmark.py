"""
Envelope Cipher Benchmark CLI.

Usage:
    envelope-benchmark

Or run directly:
    python -m envelope_cipher.benchmark

Uses APP_KEY from the environment or .env file when set, otherwise a
throwaway key generated for the run.
"""

from __future__ import annotations

import asyncio
import os
import time
from dataclasses import dataclass
from typing import Callable, List

from envelope_cipher.cipher import EnvelopeCipher
from envelope_cipher.config import Settings
from envelope_cipher.keys import generate_key

DEFAULT_ITERATIONS = 1000
DEFAULT_WORKERS = 8


@dataclass
class Measurement:
    """Timing result for one benchmark step."""

    label: str
    operations: int
    seconds: float

    @property
    def ops_per_sec(self) -> float:
        return self.operations / self.seconds if self.seconds > 0 else float("inf")

    @property
    def ms_per_op(self) -> float:
        return self.seconds * 1000 / self.operations if self.operations else 0.0

    def __str__(self) -> str:
        return (
            f"{self.label}: {self.seconds * 1000:.3f}ms total | "
            f"{self.ms_per_op:.4f}ms/op | {self.ops_per_sec:.2f} ops/sec"
        )


def measure(label: str, operations: int, fn: Callable[[], object]) -> Measurement:
    """Run ``fn`` ``operations`` times and time the whole loop."""
    start = time.perf_counter()
    for _ in range(operations):
        fn()
    return Measurement(label=label, operations=operations, seconds=time.perf_counter() - start)


async def measure_concurrent(
    label: str, operations: int, workers: int, fn: Callable[[], object]
) -> Measurement:
    """Run ``fn`` ``operations`` times spread over ``workers`` threads."""
    per_worker = [operations // workers + (1 if i < operations % workers else 0) for i in range(workers)]

    def batch(count: int) -> None:
        for _ in range(count):
            fn()

    start = time.perf_counter()
    await asyncio.gather(*(asyncio.to_thread(batch, count) for count in per_worker if count))
    return Measurement(label=label, operations=operations, seconds=time.perf_counter() - start)


def build_cipher() -> EnvelopeCipher:
    settings = Settings.from_env()
    if not settings.app_key:
        print("[STARTUP] APP_KEY not set, using a generated throwaway key")
        settings = Settings(app_key=generate_key())
    return EnvelopeCipher(settings)


async def run_benchmark(iterations: int = DEFAULT_ITERATIONS, workers: int = DEFAULT_WORKERS) -> List[Measurement]:
    """Run the envelope cipher benchmark."""
    print("=== Envelope Cipher Benchmark ===\n")

    cipher = build_cipher()
    results: List[Measurement] = []

    print(f"Testing with {iterations} iterations, {workers} workers\n")

    # ========================================================================
    # Demo 1: String encryption/decryption
    # ========================================================================
    print("+" + "-" * 68 + "+")
    print("|  Demo 1: String Encryption/Decryption" + " " * 30 + "|")
    print("+" + "-" * 68 + "+")

    text = "Sensitive data protected by envelope encryption"
    envelope = cipher.encrypt_string(text)
    if cipher.decrypt_string(envelope) != text:
        raise RuntimeError("string round trip mismatch")

    results.append(measure("encrypt_string", iterations, lambda: cipher.encrypt_string(text)))
    results.append(measure("decrypt_string", iterations, lambda: cipher.decrypt_string(envelope)))
    for result in results[-2:]:
        print(f"[PERF] {result}")
    print(f"[DEBUG] Envelope size: {len(envelope)} chars for {len(text)} chars of plaintext\n")

    # ========================================================================
    # Demo 2: Serialized value encryption/decryption
    # ========================================================================
    print("+" + "-" * 68 + "+")
    print("|  Demo 2: Value Encryption/Decryption" + " " * 31 + "|")
    print("+" + "-" * 68 + "+")

    value = {"user_id": 42, "roles": ["admin", "billing"], "token": os.urandom(16).hex()}
    value_envelope = cipher.encrypt_value(value)
    if cipher.decrypt_value(value_envelope) != value:
        raise RuntimeError("value round trip mismatch")

    results.append(measure("encrypt_value", iterations, lambda: cipher.encrypt_value(value)))
    results.append(measure("decrypt_value", iterations, lambda: cipher.decrypt_value(value_envelope)))
    for result in results[-2:]:
        print(f"[PERF] {result}")
    print()

    # ========================================================================
    # Demo 3: Concurrent round trips
    # ========================================================================
    print("+" + "-" * 68 + "+")
    print(f"|  Demo 3: Concurrent Round Trips ({workers} workers)" + " " * (33 - len(str(workers))) + "|")
    print("+" + "-" * 68 + "+")

    def round_trip() -> None:
        if cipher.decrypt_string(cipher.encrypt_string(text)) != text:
            raise RuntimeError("round trip mismatch")

    results.append(await measure_concurrent("concurrent round trip", iterations, workers, round_trip))
    print(f"[PERF] {results[-1]}\n")

    # ========================================================================
    # Summary
    # ========================================================================
    print("=" * 70)
    print("                    BENCHMARK SUMMARY")
    print("=" * 70 + "\n")

    for result in results:
        rate = f"{result.ops_per_sec:.2f}"
        print(f"  {result.label:<24} {rate:>14} ops/sec")

    print("\nTest Configuration:")
    print(f"  - Iterations per step: {iterations}")
    print("  - Crypto: AES-256-GCM, 12-byte nonce, 16-byte tag")
    print("  - Envelope: base64(JSON {iv, tag, value})")

    print("\n" + "=" * 70)
    print("                    BENCHMARK COMPLETE")
    print("=" * 70 + "\n")

    return results


def main() -> None:
    """CLI entry point for envelope-benchmark command."""
    try:
        user_input = input(f"Enter number of iterations (default: {DEFAULT_ITERATIONS}): ").strip()
        iterations = int(user_input) if user_input else DEFAULT_ITERATIONS
    except (ValueError, EOFError):
        iterations = DEFAULT_ITERATIONS
    asyncio.run(run_benchmark(max(iterations, 1)))


if __name__ == "__main__":
    main()
