import os
import sys

import pandas as pd


def summarize_conformance(path='results/conformance.csv'):
    df = pd.read_csv(path)
    # several runs may append to the same CSV; totals per (check, fmt, mode)
    out = (df.groupby(['check', 'fmt', 'mode'], as_index=False)
             .agg(runs=('checked', 'size'),
                  checked=('checked', 'sum'),
                  failures=('failures', 'sum'),
                  seconds=('seconds', 'sum')))
    out['label'] = out['failures'].map(lambda n: 'PASS' if n == 0 else 'FAIL')
    return out[['check', 'fmt', 'mode', 'runs', 'checked', 'failures', 'seconds', 'label']]


def count_mismatches(path='results/mismatches.csv'):
    """Recorded mismatch rows per (check, fmt); empty frame when none were logged."""
    if not os.path.exists(path):
        return pd.DataFrame(columns=['check', 'fmt', 'recorded'])
    df = pd.read_csv(path)
    return df.groupby(['check', 'fmt']).size().reset_index(name='recorded')


def main(results_dir='results'):
    s = summarize_conformance(os.path.join(results_dir, 'conformance.csv'))
    out = os.path.join(results_dir, 'conformance_summary.csv')
    s.to_csv(out, index=False)
    print(s.to_string(index=False))
    m = count_mismatches(os.path.join(results_dir, 'mismatches.csv'))
    if len(m):
        print(m.to_string(index=False))
    print(f'Wrote {out}')


if __name__ == '__main__':
    main(*sys.argv[1:2])
