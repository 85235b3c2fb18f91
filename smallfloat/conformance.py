"""
Sweep the codec over its input domain and collect mismatches.

Checks (name -> what must hold for every input x of the check's domain):
    roundtrip     encode(decode(x)) == x, sNaN comes back with the quiet bit
    decode_sign   sign(decode(x)) == sign(x)
    decode_exact  decode(x) has exactly the value of x (mpmath oracle)
    encode_sign   sign(encode(x)) == sign(x)                 x: F32
    chain         encode(x) == encode(decode(encode(x, f16)))  x: F32
    oracle        encode(decode(y)) == mpmath rounding of y     y: F16

The domain of a check is split into non-overlapping partitions. Each
partition is checked on its own (inline or in a process pool) and the
results are AND-ed together. Partitions are either walked exhaustively or
sampled with a seeded numpy Generator.
"""

from __future__ import annotations
import concurrent.futures
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np

from .classify import SignalingNaN, classify
from .decoder import decode
from .encoder import encode
from .formats import F16, F32, FormatSpec, get_format
from .oracle import exact_value, reference_encode

MODES = ("exhaustive", "sampled")


@dataclass(frozen=True)
class Mismatch:
    check: str
    fmt: str
    input: int
    expected: int
    actual: int

    def as_row(self) -> dict:
        return {
            "check": self.check,
            "fmt": self.fmt,
            "input": f"0x{self.input:x}",
            "expected": f"0x{self.expected:x}",
            "actual": f"0x{self.actual:x}",
        }


@dataclass
class CheckResult:
    check: str
    fmt: str
    checked: int = 0
    failures: int = 0
    mismatches: List[Mismatch] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.failures == 0

    def merge(self, other: "CheckResult", limit: int = 10) -> "CheckResult":
        self.checked += other.checked
        self.failures += other.failures
        room = max(0, limit - len(self.mismatches))
        self.mismatches.extend(other.mismatches[:room])
        return self


# ---------- single-input checks: return (expected, actual) ----------

def _sign(bits: int, fmt: FormatSpec) -> int:
    return (bits >> (fmt.width - 1)) & 1


def _roundtrip(x: int, fmt: FormatSpec) -> Tuple[int, int]:
    expected = x
    if isinstance(classify(x, fmt), SignalingNaN):
        expected = x | fmt.quiet_bit
    return expected, encode(decode(x, fmt), fmt)


def _decode_sign(x: int, fmt: FormatSpec) -> Tuple[int, int]:
    return _sign(x, fmt), _sign(decode(x, fmt), F32)


def _decode_exact(x: int, fmt: FormatSpec) -> Tuple[int, int]:
    y = decode(x, fmt)
    want, got = exact_value(x, fmt), exact_value(y, F32)
    if want is None or got is None:
        # inf/NaN: same kind, same sign; NaN payload must not be lost
        same = type(classify(x, fmt)) is type(classify(y, F32)) and _sign(x, fmt) == _sign(y, F32)
        return 1, int(same)
    same = want == got and _sign(x, fmt) == _sign(y, F32)
    return 1, int(same)


def _encode_sign(x: int, fmt: FormatSpec) -> Tuple[int, int]:
    return _sign(x, F32), _sign(encode(x, fmt), fmt)


def _chain(x: int, fmt: FormatSpec) -> Tuple[int, int]:
    chained = encode(decode(encode(x, F16), F16), fmt)
    return chained, encode(x, fmt)


def _oracle(y: int, fmt: FormatSpec) -> Tuple[int, int]:
    return reference_encode(y, F16, fmt), encode(decode(y, F16), fmt)


# name -> (check fn, domain format; None means the target format itself)
CHECKS: Dict[str, Tuple[Callable[[int, FormatSpec], Tuple[int, int]], Optional[FormatSpec]]] = {
    "roundtrip": (_roundtrip, None),
    "decode_sign": (_decode_sign, None),
    "decode_exact": (_decode_exact, None),
    "encode_sign": (_encode_sign, F32),
    "chain": (_chain, F32),
    "oracle": (_oracle, F16),
}


def domain_of(check: str, fmt) -> FormatSpec:
    if check not in CHECKS:
        raise ValueError(f"Unknown check '{check}' (expected one of {list(CHECKS)})")
    domain = CHECKS[check][1]
    return get_format(fmt) if domain is None else domain


def run_check(check: str, fmt, inputs: Iterable[int], limit: int = 10) -> CheckResult:
    fmt = get_format(fmt)
    fn = CHECKS[check][0]
    result = CheckResult(check, fmt.name)
    for x in inputs:
        x = int(x)
        expected, actual = fn(x, fmt)
        result.checked += 1
        if expected != actual:
            result.failures += 1
            if len(result.mismatches) < limit:
                result.mismatches.append(Mismatch(check, fmt.name, x, expected, actual))
    return result


def partitions(count: int, total: int) -> List[Tuple[int, int]]:
    """Split [0, total) into `count` contiguous, non-overlapping ranges."""
    count = max(1, min(int(count), total))
    bounds = [total * i // count for i in range(count + 1)]
    return [(bounds[i], bounds[i + 1]) for i in range(count)]


def partition_inputs(start: int, stop: int, samples: int = 0, seed: int = 42) -> Iterable[int]:
    """All of [start, stop) when samples == 0, else `samples` seeded random draws."""
    if not samples:
        return range(start, stop)
    rng = np.random.default_rng([int(seed), int(start)])
    return rng.integers(start, stop, size=int(samples), dtype=np.uint64).tolist()


def check_partition(check: str, fmt_name: str, start: int, stop: int,
                    samples: int = 0, seed: int = 42, limit: int = 10) -> CheckResult:
    """One unit of work; module-level so a process pool can pickle it."""
    return run_check(check, fmt_name, partition_inputs(start, stop, samples, seed), limit)


def sweep(check: str, fmt, mode: str = "exhaustive", parts: int = 1, workers: int = 1,
          samples: int = 0, seed: int = 42, limit: int = 10) -> CheckResult:
    """Run `check` for `fmt` over its whole domain (or a sample of it)."""
    if mode not in MODES:
        raise ValueError(f"Unknown mode '{mode}' (expected one of {list(MODES)})")
    fmt = get_format(fmt)
    total = 1 << domain_of(check, fmt).width
    ranges = partitions(parts, total)

    per_part = 0
    if mode == "sampled":
        per_part = max(1, int(samples) // len(ranges))

    jobs = [(check, fmt.name, start, stop, per_part, seed, limit) for start, stop in ranges]
    result = CheckResult(check, fmt.name)
    if workers <= 1:
        for job in jobs:
            result.merge(check_partition(*job), limit)
        return result

    with concurrent.futures.ProcessPoolExecutor(max_workers=int(workers)) as executor:
        futs = [executor.submit(check_partition, *job) for job in jobs]
        for fut in concurrent.futures.as_completed(futs):
            result.merge(fut.result(), limit)
    return result

