# smallfloat/main.py
# Conformance orchestrator:
# - Reads config.yaml (roundtrip / chain / oracle sections)
# - Runs every configured (check, format) sweep
# - Logs CSVs into results/ and prints concise progress
# Exit status is 1 if any check found a mismatch.

import argparse
import os
import sys
import time

from .config import get_chain_cfg, get_oracle_cfg, get_roundtrip_cfg, load_config
from .conformance import sweep
from .logging_utils import log_result, progress
from .oracle import set_oracle


def _run_section(tag, sect, results_dir, seed):
    ok = True
    for fmt in sect["formats"]:
        for check in sect["checks"]:
            progress(tag, check=check, fmt=fmt, mode=sect["mode"],
                     partitions=sect["partitions"], workers=sect["workers"])
            t0 = time.perf_counter()
            result = sweep(
                check,
                fmt,
                mode=sect["mode"],
                parts=sect["partitions"],
                workers=sect["workers"],
                samples=sect["samples"],
                seed=seed,
            )
            dt = time.perf_counter() - t0
            log_result(results_dir, result, sect["mode"], dt)
            status = "PASS" if result.passed else "FAIL"
            print(f"  {status} checked={result.checked} failures={result.failures} ({dt:.1f}s)")
            for m in result.mismatches:
                print(f"    {m.check} {m.fmt} in=0x{m.input:x} expected=0x{m.expected:x} got=0x{m.actual:x}")
            ok = ok and result.passed
    return ok


def main(argv=None):
    ap = argparse.ArgumentParser(description="Run smallfloat conformance sweeps")
    ap.add_argument("config", nargs="?", default=None, help="path to config.yaml")
    ap.add_argument("--results", default=None, help="output directory for CSVs")
    args = ap.parse_args(argv)

    cfg = load_config(args.config)
    seed = int(cfg.get("seed", 42))
    results_dir = args.results or str(cfg.get("results_dir", "results"))
    os.makedirs(results_dir, exist_ok=True)

    rt = get_roundtrip_cfg(cfg)
    ch = get_chain_cfg(cfg)
    orc = get_oracle_cfg(cfg)
    set_oracle(orc["precision_bits"])

    ok = True
    ok &= _run_section("ROUNDTRIP", rt, results_dir, seed)
    ok &= _run_section("CHAIN", ch, results_dir, seed)
    ok &= _run_section("ORACLE", orc, results_dir, seed)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
