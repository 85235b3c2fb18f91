import csv, os


def write_row(path, header, row):
    new = not os.path.exists(path) or os.path.getsize(path) == 0
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(path, 'a', newline='') as f:
        w = csv.writer(f)
        if new: w.writerow(header)
        w.writerow(row)


def log_result(results_dir, result, mode, seconds):
    """One summary row per check into conformance.csv, details into mismatches.csv."""
    write_row(
        os.path.join(results_dir, "conformance.csv"),
        ["check", "fmt", "mode", "checked", "failures", "passed", "seconds"],
        [result.check, result.fmt, mode, result.checked, result.failures,
         int(result.passed), f"{seconds:.3f}"],
    )
    header = ["check", "fmt", "input", "expected", "actual"]
    for m in result.mismatches:
        row = m.as_row()
        write_row(os.path.join(results_dir, "mismatches.csv"), header, [row[k] for k in header])


def progress(tag, **fields):
    """'[CHAIN] fmt=e4m3 mode=sampled' style one-liners."""
    parts = " ".join(f"{k}={v}" for k, v in fields.items())
    print(f"[{tag}] {parts}", flush=True)
