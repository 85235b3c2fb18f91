#!/usr/bin/env python3
import sys
import subprocess

def main():
    # use the current interpreter instead of hardcoding "python"
    py = sys.executable
    rc = subprocess.call([py, '-m', 'smallfloat.main'] + sys.argv[1:2])
    subprocess.check_call([py, '-m', 'smallfloat.summarize'])
    print("Done. See results/ (CSVs).")
    sys.exit(rc)

if __name__ == '__main__':
    main()
